"""Unit tests for git_integration.git_repository module."""

import subprocess
from unittest.mock import Mock, patch

import pytest

from svlmd.git_integration import GIT_TIMEOUT, GitRepository, GitRepositoryError


def completed(stdout="", returncode=0, stderr=""):
    return Mock(stdout=stdout, returncode=returncode, stderr=stderr)


def fake_git(status_output, prefix=""):
    """Return a subprocess.run replacement answering prefix and status calls."""
    def run(cmd, **kwargs):
        if cmd[1:3] == ["rev-parse", "--show-prefix"]:
            return completed(prefix + "\n")
        if cmd[1] == "status":
            return completed(status_output)
        raise AssertionError(f"unexpected git call: {cmd}")
    return run


def porcelain(*records):
    return "".join(record + "\0" for record in records)


@pytest.fixture
def repo(tmp_path):
    return GitRepository(str(tmp_path))


class TestRunGit:
    """Test cases for GitRepository._run_git method."""

    def test_runs_in_repository_with_timeout(self, repo):
        """git runs in the knowledge base root with the default timeout."""
        with patch("svlmd.git_integration.git_repository.subprocess.run") as mock_run:
            mock_run.return_value = completed("ok")

            assert repo._run_git(["status"]) == "ok"

        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "status"]
        assert kwargs["cwd"] == repo.repo_path
        assert kwargs["timeout"] == GIT_TIMEOUT

    def test_non_zero_exit_raises(self, repo):
        """Failures carry git's stderr."""
        with patch("svlmd.git_integration.git_repository.subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=128, stderr="fatal: not a git repository")

            with pytest.raises(GitRepositoryError) as exc_info:
                repo._run_git(["status"])

        assert exc_info.value.git_output == "fatal: not a git repository"
        assert exc_info.value.repo_path == repo.repo_path

    def test_timeout_raises(self, repo):
        """A hanging git command is reported as an error."""
        with patch("svlmd.git_integration.git_repository.subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=GIT_TIMEOUT)

            with pytest.raises(GitRepositoryError, match="timed out"):
                repo._run_git(["status"])

    def test_git_not_installed(self, repo):
        """A missing git binary is reported as an error."""
        with patch("svlmd.git_integration.git_repository.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("git")

            with pytest.raises(GitRepositoryError, match="Git command not found"):
                repo._run_git(["status"])

    def test_is_repository_false_on_error(self, repo):
        """is_repository() does not raise."""
        with patch("svlmd.git_integration.git_repository.subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=128, stderr="fatal")

            assert repo.is_repository() is False

    def test_is_repository_true(self, repo):
        with patch("svlmd.git_integration.git_repository.subprocess.run") as mock_run:
            mock_run.return_value = completed("true\n")

            assert repo.is_repository() is True


class TestClassify:
    """Test cases for GitRepository._classify method."""

    @pytest.mark.parametrize("code,expected", [
        ("??", "added"),
        ("A ", "added"),
        ("AM", "added"),
        (" A", "added"),
        ("AD", None),
        (" D", "deleted"),
        ("D ", "deleted"),
        (" M", "modified"),
        ("M ", "modified"),
        ("MM", "modified"),
        ("MD", "deleted"),
        ("R ", "modified"),
        ("RM", "modified"),
        (" T", "modified"),
        ("C ", "modified"),
        ("UU", "modified"),
        ("DU", "modified"),
        ("!!", None),
    ])
    def test_status_codes(self, code, expected):
        """Porcelain XY codes map onto the three change categories."""
        assert GitRepository._classify(code) == expected


class TestChangesSince:
    """Test cases for GitRepository.changes_since method."""

    def test_collects_pages_by_category(self, repo):
        """Page files are reported by title in sorted order."""
        status = porcelain(
            "?? pages/Zeta.md",
            "?? pages/Alpha.md",
            " M pages/Drugs___Aspirin.md",
            " D pages/Old.md",
        )
        with patch("svlmd.git_integration.git_repository.subprocess.run", side_effect=fake_git(status)):
            changes = repo.changes_since()

        assert changes.added == ["Alpha", "Zeta"]
        assert changes.modified == ["Drugs/Aspirin"]
        assert changes.deleted == ["Old"]

    def test_ignores_non_page_files(self, repo):
        """Only markdown files directly in pages/ count."""
        status = porcelain(
            "?? pages/image.png",
            "?? journals/2024_01_15.md",
            "?? pages/Real.md",
        )
        with patch("svlmd.git_integration.git_repository.subprocess.run", side_effect=fake_git(status)):
            changes = repo.changes_since()

        assert changes.added == ["Real"]
        assert changes.modified == []

    def test_rename_reports_new_path_as_modified(self, repo):
        """The original path following a rename record is skipped."""
        status = porcelain("R  pages/New.md", "pages/Old.md", " M pages/Other.md")
        with patch("svlmd.git_integration.git_repository.subprocess.run", side_effect=fake_git(status)):
            changes = repo.changes_since()

        assert changes.modified == ["New", "Other"]
        assert changes.added == []
        assert changes.deleted == []

    def test_paths_with_spaces(self, repo):
        """NUL separated output keeps paths verbatim."""
        status = porcelain("?? pages/Type 2 Diabetes.md")
        with patch("svlmd.git_integration.git_repository.subprocess.run", side_effect=fake_git(status)):
            changes = repo.changes_since()

        assert changes.added == ["Type 2 Diabetes"]

    def test_root_below_repository_top_level(self, repo):
        """Paths are resolved against the root's prefix in the repository."""
        status = porcelain("?? kb/pages/Inside.md", "?? pages/Outside.md")
        with patch(
            "svlmd.git_integration.git_repository.subprocess.run",
            side_effect=fake_git(status, prefix="kb/"),
        ):
            changes = repo.changes_since()

        assert changes.added == ["Inside"]

    def test_title_in_one_category_only(self, repo):
        """A title reported twice keeps added over deleted over modified."""
        status = porcelain(
            "?? pages/Same.md",
            " D pages/Same.md",
            " M pages/Both.md",
            " D pages/Both.md",
        )
        with patch("svlmd.git_integration.git_repository.subprocess.run", side_effect=fake_git(status)):
            changes = repo.changes_since()

        assert changes.added == ["Same"]
        assert changes.deleted == ["Both"]
        assert changes.modified == []

    def test_clean_tree(self, repo):
        """No output gives an empty ChangeSet."""
        with patch("svlmd.git_integration.git_repository.subprocess.run", side_effect=fake_git("")):
            changes = repo.changes_since()

        assert changes.is_empty

    def test_status_limited_to_pages_directory(self, repo):
        """git status is asked only about the pages directory."""
        with patch("svlmd.git_integration.git_repository.subprocess.run", side_effect=fake_git("")) as mock_run:
            repo.changes_since()

        status_cmd = mock_run.call_args_list[-1][0][0]
        assert status_cmd[:2] == ["git", "status"]
        assert "-z" in status_cmd
        assert status_cmd[-2:] == ["--", "pages"]
