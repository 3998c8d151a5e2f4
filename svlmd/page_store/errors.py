"""Typed exception hierarchy for page store errors.

This module defines all custom exceptions used by the page store.
All exceptions inherit from PageStoreError and include descriptive messages
with context to help with debugging.
"""

from typing import Optional

from svlmd.errors import SvlmdError


class PageStoreError(SvlmdError):
    """Base exception for all page store errors."""
    pass


class PageNotFoundError(PageStoreError):
    """Raised when a requested page file does not exist."""

    def __init__(self, title: str, file_path: str):
        super().__init__(f"Page '{title}' not found at {file_path}")
        self.title = title
        self.file_path = file_path


class FilesystemError(PageStoreError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
