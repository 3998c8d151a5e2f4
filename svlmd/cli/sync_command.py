"""Sync command orchestration for CLI.

This module provides the SyncCommand class that orchestrates the version
sync: it reads the release version, collects the pages changed in the git
working tree and records them in the changelog of the version page.
"""

import logging
from datetime import datetime, UTC
from typing import Optional

from svlmd.changelog import (
    ChangelogReconciler,
    SECTION_MARKER,
    Version,
    VersionFileNotFoundError,
    VersionParseError,
    read_version_file,
)
from svlmd.errors import SvlmdError
from svlmd.git_integration import GitRepository, GitRepositoryError
from svlmd.page_model import Page, PageParseError
from svlmd.page_store import FilesystemError, PageNotFoundError, PageStore
from .errors import ConfigError
from .models import ExitCode, SvlmdConfig
from .output import OutputHandler

logger = logging.getLogger(__name__)

VERSION_TAG_PAGE = "Version"

VERSION_TAG_PAGE_PROPERTIES = [
    ("icon", "🏷️"),
    ("exclude-from-graph-view", "true"),
]


def _today() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%d")


def version_page_skeleton(title: str, released_date: str) -> Page:
    """Build the initial page for a release.

    Args:
        title: Version page title (MAJOR.MINOR.PATCH)
        released_date: Release date as YYYY-MM-DD
    """
    return Page(
        title=title,
        properties=[
            ("tags", "Version"),
            ("released-date", released_date),
        ],
        contents=[
            ("# Summary", 0),
            ("", 0),
            (SECTION_MARKER, 0),
        ],
    )


class SyncCommand:
    """Orchestrates the sync workflow for the CLI.

    The version sync workflow:
        1. Read the release version from version.txt
        2. Collect changed pages from the git working tree
        3. Create the version page from a skeleton if it does not exist
        4. Merge the changed pages into the changelog of the version page
        5. Rewrite the "Version" tag page

    Example:
        >>> config = ConfigLoader.load(root)
        >>> sync_cmd = SyncCommand(config, output_handler=OutputHandler(verbosity=1))
        >>> exit_code = sync_cmd.run(sync_version=True)
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config: SvlmdConfig,
        output_handler: Optional[OutputHandler] = None,
        page_store: Optional[PageStore] = None,
        git_repository: Optional[GitRepository] = None,
        reconciler: Optional[ChangelogReconciler] = None,
    ):
        """Initialize sync command with dependencies.

        Args:
            config: Knowledge base configuration
            output_handler: OutputHandler for terminal output (optional)
            page_store: PageStore for reading/writing pages (optional)
            git_repository: GitRepository for change detection (optional)
            reconciler: ChangelogReconciler for the changelog merge (optional)
        """
        self.config = config
        self.output_handler = output_handler or OutputHandler()
        self.page_store = page_store or PageStore(config.pages_dir)
        self.git_repository = git_repository or GitRepository(config.root)
        self.reconciler = reconciler or ChangelogReconciler()

    def run(self, sync_version: bool = False) -> ExitCode:
        """Execute the sync operation.

        Translates exceptions to exit codes: missing files are general errors,
        malformed input is a parse error and storage or git failures are I/O
        errors.

        Args:
            sync_version: Sync the changelog of the current release

        Returns:
            ExitCode indicating success or specific failure type
        """
        if not sync_version:
            self.output_handler.warning(
                "Nothing to sync. Use --version to sync the release changelog."
            )
            return ExitCode.SUCCESS

        try:
            self.sync_version()
            return ExitCode.SUCCESS

        except (VersionFileNotFoundError, PageNotFoundError) as e:
            logger.error(f"Sync failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except (VersionParseError, PageParseError, ConfigError) as e:
            logger.error(f"Sync failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.PARSE_ERROR

        except (FilesystemError, GitRepositoryError) as e:
            logger.error(f"Sync failed: {e}")
            self.output_handler.error(str(e))
            if isinstance(e, GitRepositoryError) and e.git_output:
                self.output_handler.debug(e.git_output.strip())
            return ExitCode.IO_ERROR

        except SvlmdError as e:
            logger.error(f"Sync failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during sync")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def sync_version(self) -> Page:
        """Record the changed pages in the changelog of the current release.

        Returns:
            The updated version page

        Raises:
            VersionFileNotFoundError: If version.txt is missing
            VersionParseError: If version.txt is malformed
            GitRepositoryError: If git status cannot be read
            FilesystemError: If a page cannot be read or written
        """
        version = read_version_file(self.config.root)
        self.output_handler.info(f"Found version: {version}")

        change_set = self.git_repository.changes_since()
        self.output_handler.print_changes(change_set)

        page = self._load_version_page(version)
        self.reconciler.reconcile(page, version.changelog_label, change_set)
        self.page_store.write(page)
        logger.info(f"Updated changelog of version page '{page.title}'")

        self.page_store.write(Page(
            title=VERSION_TAG_PAGE,
            properties=list(VERSION_TAG_PAGE_PROPERTIES),
            contents=[],
        ))

        self.output_handler.print_sync_summary(str(version), change_set)
        self.output_handler.success(f"Synced version {version}")
        return page

    def _load_version_page(self, version: Version) -> Page:
        """Read the version page, creating it first if it does not exist."""
        title = version.page_title
        if not self.page_store.exists(title):
            logger.info(f"Creating version page '{title}'")
            self.output_handler.info(f"Creating version page {title}")
            self.page_store.write(version_page_skeleton(title, _today()))
        return self.page_store.read(title)
