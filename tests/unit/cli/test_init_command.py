"""Unit tests for cli.init_command module."""

from unittest.mock import Mock, patch

import pytest

from svlmd.cli.config import ConfigLoader
from svlmd.cli.errors import ConfigError, InitError
from svlmd.cli.init_command import CONTRIBUTOR_PAGE_PROPERTIES, InitCommand
from svlmd.cli.models import SvlmdConfig
from svlmd.page_store import FilesystemError, PageStore


@pytest.fixture
def kb_root(tmp_path):
    (tmp_path / "pages").mkdir()
    return tmp_path


def make_init(root, answer="Sira"):
    output = Mock()
    prompt = Mock(return_value=answer)
    return InitCommand(root, output_handler=output, prompt=prompt), output, prompt


class TestInitCommandConfigure:
    """Test cases for InitCommand.configure method."""

    def test_writes_config(self, kb_root):
        """The prompted name is saved to .svlmd/config.yaml."""
        init, output, prompt = make_init(kb_root, "  Sira ")

        config = init.configure()

        assert config.contributor == "Sira"
        assert ConfigLoader.load(kb_root).contributor == "Sira"
        prompt.assert_called_once_with("Enter your name")
        output.print.assert_called_with("Initialized config.")

    def test_overwrites_existing_config(self, kb_root):
        """An existing configuration is announced and replaced."""
        ConfigLoader.save(SvlmdConfig(root=kb_root, contributor="Old"))
        init, output, _ = make_init(kb_root, "New")

        init.configure()

        assert ConfigLoader.load(kb_root).contributor == "New"
        first_message = output.print.call_args_list[0][0][0]
        assert first_message.endswith("already exists. Overwriting...")

    @pytest.mark.parametrize("answer", ["", "   ", None])
    def test_empty_name_rejected(self, kb_root, answer):
        init, _, _ = make_init(kb_root, answer)

        with pytest.raises(InitError, match="cannot be empty"):
            init.configure()

        assert not init.config_path.exists()

    def test_save_failure_wrapped(self, kb_root):
        """Write failures surface as InitError."""
        init, _, _ = make_init(kb_root)

        with patch.object(
            ConfigLoader, "save",
            side_effect=FilesystemError("config.yaml", "write", "Permission denied"),
        ):
            with pytest.raises(InitError, match="Failed to save configuration"):
                init.configure()


class TestInitCommandContributorPage:
    """Test cases for InitCommand.ensure_contributor_page method."""

    def test_creates_contributor_page(self, kb_root):
        """A missing contributor page is created with author properties."""
        init, _, _ = make_init(kb_root)
        config = SvlmdConfig(root=kb_root, contributor="Sira")

        assert init.ensure_contributor_page(config) is True

        page = PageStore(config.pages_dir).read("Sira")
        assert page.properties == CONTRIBUTOR_PAGE_PROPERTIES
        assert page.contents == []

    def test_existing_page_untouched(self, kb_root):
        """An existing contributor page is never rewritten."""
        page_file = kb_root / "pages" / "Sira.md"
        page_file.write_text("- My notes\n", encoding="utf-8")
        init, _, _ = make_init(kb_root)

        assert init.ensure_contributor_page(SvlmdConfig(root=kb_root, contributor="Sira")) is False
        assert page_file.read_text(encoding="utf-8") == "- My notes\n"


class TestInitCommandRun:
    """Test cases for InitCommand.run method."""

    def test_run_prompts_and_creates_page(self, kb_root):
        init, _, prompt = make_init(kb_root)

        config = init.run()

        assert config.contributor == "Sira"
        assert (kb_root / "pages" / "Sira.md").exists()
        prompt.assert_called_once()

    def test_run_reconfigure_false_uses_existing_config(self, kb_root):
        """No prompt when a configuration already exists."""
        ConfigLoader.save(SvlmdConfig(root=kb_root, contributor="Sira"))
        init, _, prompt = make_init(kb_root, "Other")

        config = init.run(reconfigure=False)

        assert config.contributor == "Sira"
        prompt.assert_not_called()

    def test_run_reconfigure_false_creates_missing_config(self, kb_root):
        """A missing configuration is created on demand."""
        init, output, prompt = make_init(kb_root)

        config = init.run(reconfigure=False)

        assert config.contributor == "Sira"
        prompt.assert_called_once()
        output.print.assert_any_call("Config not found. Creating...")

    def test_run_with_malformed_config(self, kb_root):
        """A broken existing configuration is reported, not replaced."""
        config_path = kb_root / ".svlmd" / "config.yaml"
        config_path.parent.mkdir()
        config_path.write_text("contributor: 42\n", encoding="utf-8")
        init, _, _ = make_init(kb_root)

        with pytest.raises(ConfigError):
            init.run(reconfigure=False)
