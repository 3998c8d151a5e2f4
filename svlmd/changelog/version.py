"""Release version parsing.

The release being prepared is recorded in ``version.txt`` at the knowledge
base root as a semantic version (https://semver.org), e.g. ``1.4.0`` or
``2.0.0-rc.1``.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

from svlmd.page_store.errors import FilesystemError
from .errors import VersionFileNotFoundError, VersionParseError

logger = logging.getLogger(__name__)

VERSION_FILE = "version.txt"

_IDENTIFIER = r'(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)'

SEMVER_PATTERN = re.compile(
    r'^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)'
    rf'(?:-({_IDENTIFIER}(?:\.{_IDENTIFIER})*))?'
    r'(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$'
)


@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version.

    Two versions are equal when their major, minor and patch numbers are
    equal; pre-release and build metadata only affect how the version is
    displayed.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        prerelease: Pre-release identifiers (e.g. "rc.1"), if any
        build: Build metadata (e.g. "20240115"), if any

    Example:
        >>> version = Version.parse("1.2.3-rc.1")
        >>> version.page_title
        '1.2.3'
        >>> version.changelog_label
        '[[1.2.3-rc.1]]'
    """
    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a semantic version string.

        A leading 'v' is accepted and dropped.

        Raises:
            VersionParseError: If the text is not a semantic version
        """
        match = SEMVER_PATTERN.match(text.strip())
        if not match:
            raise VersionParseError(text)
        major, minor, patch, prerelease, build = match.groups()
        return cls(int(major), int(minor), int(patch), prerelease, build)

    def _core(self):
        return (self.major, self.minor, self.patch)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._core() == other._core()

    def __hash__(self) -> int:
        return hash(self._core())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text

    @property
    def page_title(self) -> str:
        """Title of the version page: MAJOR.MINOR.PATCH."""
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def changelog_label(self) -> str:
        """Label used in the changelog heading, linking the full version."""
        return f"[[{self}]]"


def read_version_file(root: str) -> Version:
    """Read the release version from ``<root>/version.txt``.

    Only the first line is considered.

    Args:
        root: Knowledge base root directory

    Returns:
        Parsed Version

    Raises:
        VersionFileNotFoundError: If version.txt does not exist
        FilesystemError: If version.txt cannot be read or is not UTF-8
        VersionParseError: If the first line is not a semantic version
    """
    version_path = os.path.join(str(root), VERSION_FILE)
    try:
        with open(version_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise VersionFileNotFoundError(version_path)
    except PermissionError:
        raise FilesystemError(version_path, 'read', 'Permission denied')
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(version_path, 'read', str(e))

    lines = content.splitlines()
    if not lines or not lines[0].strip():
        raise VersionParseError("", "version.txt is empty")

    version = Version.parse(lines[0])
    logger.debug(f"Found version {version} in {version_path}")
    return version
