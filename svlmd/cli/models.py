"""Data models for CLI operations.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (missing config, setup failures)
    - PARSE_ERROR (2): Malformed version string, page or config file
    - IO_ERROR (3): Page store or git failure

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    IO_ERROR = 3


@dataclass
class SvlmdConfig:
    """Configuration of one knowledge base.

    Passed explicitly to the commands and their collaborators; nothing reads
    it from global state.

    Attributes:
        root: Knowledge base root directory (contains pages/ and version.txt)
        contributor: Name of the person running the tool

    Example:
        >>> config = SvlmdConfig(root=Path("/kb"), contributor="Sira")
        >>> config.pages_dir
        PosixPath('/kb/pages')
    """
    root: Path
    contributor: str

    @property
    def pages_dir(self) -> Path:
        return self.root / "pages"
