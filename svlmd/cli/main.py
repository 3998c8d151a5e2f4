"""Main CLI entry point for the svlmd command.

This module provides the Typer application that serves as the entry point
for the svlmd command-line tool:

    svlmd init                 # Record contributor name, create contributor page
    svlmd sync --version -v    # Update the changelog of the current release
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from svlmd.errors import SvlmdError
from svlmd.page_store.errors import FilesystemError
from .config import detect_root
from .errors import ConfigError, InitError, RootNotFoundError
from .init_command import InitCommand
from .models import ExitCode
from .output import OutputHandler
from .sync_command import SyncCommand

app = typer.Typer(
    name="svlmd",
    help="""SVLMD (Sira's Very Large Medical Database) maintenance tool.

QUICK START:
  svlmd init              # Record your contributor name
  svlmd sync --version    # Record changed pages in the current release""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'svlmd' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("svlmd")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"svlmd_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _resolve_root(root: Optional[str]) -> Path:
    """Use --root when given, otherwise detect the knowledge base root."""
    if root:
        return Path(root).resolve()
    return detect_root()


def _exit_code_for(error: SvlmdError) -> ExitCode:
    if isinstance(error, ConfigError):
        return ExitCode.PARSE_ERROR
    if isinstance(error, FilesystemError):
        return ExitCode.IO_ERROR
    return ExitCode.GENERAL_ERROR


@app.command("init")
def init_command(
    root: Optional[str] = typer.Option(
        None,
        "--root",
        help="Knowledge base root (default: nearest parent directory containing pages/)",
        metavar="DIR",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Verbose output (repeat for debug output)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Initialize SVLMD with contributor information.

    Creates or overwrites .svlmd/config.yaml and creates the contributor's
    page if it does not exist.
    """
    _configure_logging(verbosity)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        root_path = _resolve_root(root)
        config = InitCommand(root_path, output_handler=output).run(reconfigure=True)
        output.info(f"  Config file: {root_path / '.svlmd' / 'config.yaml'}")
        output.success(f"Initialized for contributor '{config.contributor}'")

    except (InitError, RootNotFoundError) as e:
        logger.error(f"Initialization failed: {e}")
        output.error(f"Initialization failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except SvlmdError as e:
        logger.error(f"Initialization failed: {e}")
        output.error(f"Initialization failed: {e}")
        raise typer.Exit(_exit_code_for(e))

    raise typer.Exit(ExitCode.SUCCESS)


@app.command("sync")
def sync_command(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Sync the version metadata (changelog of the current release)",
    ),
    root: Optional[str] = typer.Option(
        None,
        "--root",
        help="Knowledge base root (default: nearest parent directory containing pages/)",
        metavar="DIR",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Verbose output (repeat for debug output)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Sync database.

    Runs initialization first when no configuration exists.
    """
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        root_path = _resolve_root(root)
        config = InitCommand(root_path, output_handler=output).run(reconfigure=False)
    except SvlmdError as e:
        logger.error(f"Setup failed: {e}")
        output.error(str(e))
        raise typer.Exit(_exit_code_for(e))

    exit_code = SyncCommand(config, output_handler=output).run(sync_version=version)
    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m svlmd.cli.main
if __name__ == "__main__":
    main()
