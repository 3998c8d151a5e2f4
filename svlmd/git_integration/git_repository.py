"""Git working tree inspection for the knowledge base.

This module provides the GitRepository class which reports the pages that
changed in the working tree of the knowledge base repository. It uses
subprocess to execute git commands, the same way a user would from the shell.
"""

import logging
import os
import subprocess
from typing import List, Optional, Tuple

from svlmd.page_store.title_converter import PAGE_EXTENSION, TitleConverter
from .errors import GitRepositoryError
from .models import ChangeSet

logger = logging.getLogger(__name__)

# Git command timeout in seconds
GIT_TIMEOUT = 10

# Pages live in this directory, relative to the knowledge base root
PAGES_DIR = "pages"


class GitRepository:
    """Reads change status from the git repository holding the knowledge base.

    The knowledge base root does not need to be the repository root; paths
    reported by git are resolved against the root's prefix inside the
    repository.

    Status classification (``git status --porcelain`` XY codes):
        ??, A.         → added
        D in X or Y    → deleted
        M, R, T, C, U  → modified

    Example:
        >>> repo = GitRepository("/path/to/kb")
        >>> changes = repo.changes_since()
        >>> changes.added
        ['Aspirin', 'Drugs/Ibuprofen']
    """

    def __init__(self, root: str, pages_dir: str = PAGES_DIR):
        """Initialize git repository reader.

        Args:
            root: Knowledge base root directory (contains pages/)
            pages_dir: Pages directory relative to root
        """
        self.repo_path = os.path.abspath(str(root))
        self.pages_dir = pages_dir.strip("/")

    def _run_git(self, args: List[str]) -> str:
        """Run a git command in the repository and return its stdout.

        Raises:
            GitRepositoryError: If git is missing, times out or fails
        """
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                timeout=GIT_TIMEOUT,
            )
        except subprocess.TimeoutExpired:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"Git {args[0]} timed out after {GIT_TIMEOUT} seconds",
            )
        except FileNotFoundError:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message="Git command not found. Please install git.",
            )

        if result.returncode != 0:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"Failed to run git {args[0]}",
                git_output=result.stderr,
            )

        return result.stdout

    def is_repository(self) -> bool:
        """Check whether the root lies inside a git work tree."""
        try:
            return self._run_git(["rev-parse", "--is-inside-work-tree"]).strip() == "true"
        except GitRepositoryError as e:
            logger.debug(f"Not a git repository: {e}")
            return False

    def _get_prefix(self) -> str:
        """Return the root's path relative to the repository top level.

        Empty when the root is the repository top level, otherwise a
        '/'-terminated path such as ``kb/``.
        """
        return self._run_git(["rev-parse", "--show-prefix"]).strip()

    def _read_status(self) -> List[Tuple[str, str]]:
        """Return (XY status code, path) entries for changed files under pages/.

        Uses NUL separated porcelain output so that paths with spaces or
        non-ASCII characters are reported verbatim.
        """
        output = self._run_git([
            "status",
            "--porcelain=v1",
            "-z",
            "--untracked-files=all",
            "--",
            self.pages_dir,
        ])

        entries = []
        records = output.split("\0")
        i = 0
        while i < len(records):
            record = records[i]
            i += 1
            if len(record) < 4:
                continue
            code, path = record[:2], record[3:]
            # Renames and copies are followed by the original path
            if code[0] in ("R", "C"):
                i += 1
            entries.append((code, path))
        return entries

    @staticmethod
    def _classify(code: str) -> Optional[str]:
        """Map a porcelain XY code to 'added', 'modified' or 'deleted'."""
        index, worktree = code[0], code[1]

        if code == "??":
            return "added"
        if index == "A":
            # Staged then removed from the work tree: never existed as far as
            # the changelog is concerned
            if worktree == "D":
                return None
            return "added"
        if worktree == "A":
            return "added"
        if "D" in code and "U" not in code:
            return "deleted"
        if any(c in code for c in "MRTCU"):
            return "modified"
        return None

    def _path_to_title(self, path: str, prefix: str) -> Optional[str]:
        if not path.startswith(prefix):
            return None
        relative = path[len(prefix):]
        if not relative.startswith(self.pages_dir + "/") or not relative.endswith(PAGE_EXTENSION):
            return None
        filename = relative.rsplit("/", 1)[-1]
        return TitleConverter.filename_to_title(filename)

    def changes_since(self) -> ChangeSet:
        """Collect the pages changed since the last commit.

        Returns:
            ChangeSet with sorted, deduplicated page titles

        Raises:
            GitRepositoryError: If the repository cannot be read
        """
        prefix = self._get_prefix()
        buckets = {"added": set(), "modified": set(), "deleted": set()}

        for code, path in self._read_status():
            title = self._path_to_title(path, prefix)
            if title is None:
                continue
            category = self._classify(code)
            if category is None:
                logger.debug(f"Ignoring status '{code}' for {path}")
                continue
            buckets[category].add(title)

        # A title reported twice (e.g. case-only rename) keeps its strongest status
        buckets["modified"] -= buckets["added"] | buckets["deleted"]
        buckets["deleted"] -= buckets["added"]

        change_set = ChangeSet(
            added=sorted(buckets["added"]),
            modified=sorted(buckets["modified"]),
            deleted=sorted(buckets["deleted"]),
        )
        logger.info(
            f"Detected {len(change_set.added)} added, {len(change_set.modified)} modified, "
            f"{len(change_set.deleted)} deleted page(s)"
        )
        return change_set
