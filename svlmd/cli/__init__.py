"""Command-line interface for the knowledge base tooling.

This package provides the `svlmd` CLI tool: contributor initialization and
the release changelog sync, with colored output and typed error handling.
"""

from .sync_command import SyncCommand
from .init_command import InitCommand
from .models import ExitCode, SvlmdConfig
from .errors import (
    CLIError,
    ConfigError,
    ConfigNotFoundError,
    InitError,
    RootNotFoundError,
)

__all__ = [
    'SyncCommand',
    'InitCommand',
    'ExitCode',
    'SvlmdConfig',
    'CLIError',
    'ConfigError',
    'ConfigNotFoundError',
    'InitError',
    'RootNotFoundError',
]
