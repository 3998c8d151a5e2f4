"""Git integration for the knowledge base.

This package reports which pages changed in the git working tree so that the
changelog of the current release can be updated.
"""

from svlmd.git_integration.errors import GitRepositoryError
from svlmd.git_integration.git_repository import GitRepository, GIT_TIMEOUT
from svlmd.git_integration.models import ChangeSet

__all__ = [
    'GitRepositoryError',
    'GitRepository',
    'GIT_TIMEOUT',
    'ChangeSet',
]
