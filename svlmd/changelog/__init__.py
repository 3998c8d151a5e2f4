"""Changelog maintenance for release version pages.

This package parses the "Changed Pages" section of a version page into a small
tree, merges the pages changed in the working tree into the entry of the
current release and reads the release version from version.txt.
"""

from .errors import ChangelogError, VersionFileNotFoundError, VersionParseError
from .models import (
    CATEGORIES,
    SECTION_MARKER,
    ChangelogSection,
    VersionEntry,
    parse_changelog_section,
)
from .reconciler import ChangelogReconciler
from .version import Version, read_version_file

__all__ = [
    'ChangelogError',
    'VersionFileNotFoundError',
    'VersionParseError',
    'CATEGORIES',
    'SECTION_MARKER',
    'ChangelogSection',
    'VersionEntry',
    'parse_changelog_section',
    'ChangelogReconciler',
    'Version',
    'read_version_file',
]
