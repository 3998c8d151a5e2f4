"""Unit tests for page_store.page_store module."""

import os
from unittest.mock import patch

import pytest

from svlmd.page_model import Page
from svlmd.page_store import FilesystemError, PageNotFoundError, PageStore


@pytest.fixture
def store(tmp_path):
    """PageStore over an empty pages directory."""
    pages_dir = tmp_path / "pages"
    pages_dir.mkdir()
    return PageStore(str(pages_dir))


class TestPageStorePaths:
    """Test cases for title to path mapping."""

    def test_path_for_namespaced_title(self, store):
        """Namespaced titles map to flat files."""
        assert store.path_for("A/B") == os.path.join(store.pages_dir, "A___B.md")

    def test_exists_false_for_missing_page(self, store):
        """exists() is False when there is no file."""
        assert store.exists("Missing") is False


class TestPageStoreReadWrite:
    """Test cases for reading and writing pages."""

    def test_write_renders_page_format(self, store, tmp_path):
        """write() produces the on-disk outline format."""
        page = Page(
            title="1.0.0",
            properties=[("tags", "Version")],
            contents=[("# Changed Pages", 0), ("## [[1.0.0]]", 1)],
        )

        store.write(page)

        content = (tmp_path / "pages" / "1.0.0.md").read_text(encoding="utf-8")
        assert content == "tags:: Version\n\n- # Changed Pages\n    - ## [[1.0.0]]\n"

    def test_namespaced_title_round_trip(self, store, tmp_path):
        """A page titled 'A/B' is stored as A___B.md and read back as 'A/B'."""
        store.write(Page(title="A/B", properties=[("icon", "🙂")], contents=[("Note", 0)]))

        assert (tmp_path / "pages" / "A___B.md").exists()
        assert store.exists("A/B")

        page = store.read("A/B")
        assert page.title == "A/B"
        assert page.properties == [("icon", "🙂")]
        assert page.contents == [("Note", 0)]

    def test_write_overwrites_existing_file(self, store):
        """write() fully replaces the previous content."""
        store.write(Page(title="P", contents=[("old", 0), ("old too", 0)]))
        store.write(Page(title="P", contents=[("new", 0)]))

        assert store.read("P").contents == [("new", 0)]

    def test_write_leaves_no_temp_files(self, store, tmp_path):
        """Staging files are moved into place."""
        store.write(Page(title="P", contents=[("x", 0)]))

        assert sorted(os.listdir(tmp_path / "pages")) == ["P.md"]

    def test_write_creates_pages_directory(self, tmp_path):
        """The pages directory is created on first write."""
        store = PageStore(str(tmp_path / "new" / "pages"))

        store.write(Page(title="P"))

        assert store.exists("P")

    def test_read_missing_page_raises_not_found(self, store):
        """read() raises PageNotFoundError with context."""
        with pytest.raises(PageNotFoundError) as exc_info:
            store.read("Missing")

        assert exc_info.value.title == "Missing"
        assert exc_info.value.file_path.endswith("Missing.md")

    def test_read_invalid_utf8_raises_filesystem_error(self, store, tmp_path):
        """Undecodable files are reported as read failures."""
        (tmp_path / "pages" / "Bad.md").write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(FilesystemError) as exc_info:
            store.read("Bad")

        assert exc_info.value.operation == "read"

    def test_read_oversized_file_raises_filesystem_error(self, store, tmp_path):
        """Files above the size limit are refused."""
        (tmp_path / "pages" / "Big.md").write_text("- x\n", encoding="utf-8")

        with patch("svlmd.page_store.page_store.MAX_FILE_SIZE", 1):
            with pytest.raises(FilesystemError) as exc_info:
                store.read("Big")

        assert "exceeds maximum allowed size" in str(exc_info.value)

    def test_write_failure_raises_filesystem_error(self, store):
        """OS errors while writing are wrapped in FilesystemError."""
        with patch("svlmd.page_store.page_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(FilesystemError) as exc_info:
                store.write(Page(title="P"))

        assert exc_info.value.operation == "write"
        assert "disk full" in str(exc_info.value)
        assert not store.exists("P")
