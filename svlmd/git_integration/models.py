"""Data models for git integration."""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple


@dataclass
class ChangeSet:
    """Pages changed in the working tree relative to the last commit.

    Each list holds page titles (not file paths), sorted and free of
    duplicates. A title belongs to at most one of the three lists.

    Attributes:
        added: Pages that are new (untracked or newly staged)
        modified: Pages whose file content changed or was renamed
        deleted: Pages whose file was removed

    Example:
        >>> changes = ChangeSet(added=["Aspirin"], modified=[], deleted=["Old"])
        >>> changes.is_empty
        False
    """
    added: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no page was added, modified or deleted."""
        return not (self.added or self.modified or self.deleted)

    def categories(self) -> Iterator[Tuple[str, List[str]]]:
        """Yield (category name, titles) in changelog order."""
        yield "Added", self.added
        yield "Modified", self.modified
        yield "Deleted", self.deleted
