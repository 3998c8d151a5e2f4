"""Typed exception hierarchy for release version errors.

The reconciler itself never raises; these errors come from reading and
parsing the release version that drives a changelog sync.
"""

from svlmd.errors import SvlmdError


class ChangelogError(SvlmdError):
    """Base exception for all changelog errors."""
    pass


class VersionFileNotFoundError(ChangelogError):
    """Raised when the version file is missing."""

    def __init__(self, file_path: str):
        super().__init__(f"Version file not found at {file_path}")
        self.file_path = file_path


class VersionParseError(ChangelogError):
    """Raised when a version string is not a valid semantic version."""

    def __init__(self, text: str, reason: str = "expected MAJOR.MINOR.PATCH"):
        super().__init__(f"Failed to parse version '{text}': {reason}")
        self.text = text
        self.reason = reason
