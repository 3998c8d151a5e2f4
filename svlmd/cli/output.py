"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for colored output and formatted text. Supports verbosity
levels and a --no-color flag.
"""

from rich.console import Console
from rich.markup import escape

from svlmd.git_integration.models import ChangeSet

# Marker printed in front of each changed page, per category
CHANGE_MARKERS = {
    "Added": ("+", "green"),
    "Modified": ("*", "yellow"),
    "Deleted": ("-", "red"),
}


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Synced version 1.2.0")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(escape(message))

    def print_changes(self, change_set: ChangeSet) -> None:
        """List changed pages as ``+ added``, ``* modified``, ``- deleted``.

        Only shown if verbosity >= 1.
        """
        if self.verbosity < 1:
            return
        for category, titles in change_set.categories():
            marker, color = CHANGE_MARKERS[category]
            for title in titles:
                self.console.print(f"[{color}]{marker}[/{color}] {escape(title)}")

    def print_sync_summary(self, version: str, change_set: ChangeSet) -> None:
        """Display the result of a version sync.

        Args:
            version: Version that was synced
            change_set: Pages recorded in this run
        """
        self.console.print(f"\n[bold]Version {version}:[/bold]")

        if change_set.is_empty:
            self.console.print("  [dim]─[/dim] No changed pages")
            return

        if change_set.added:
            self.console.print(f"  [green]+[/green] Added: {len(change_set.added)} page(s)")
        if change_set.modified:
            self.console.print(f"  [yellow]*[/yellow] Modified: {len(change_set.modified)} page(s)")
        if change_set.deleted:
            self.console.print(f"  [red]-[/red] Deleted: {len(change_set.deleted)} page(s)")
