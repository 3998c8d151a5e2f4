"""InitCommand for contributor configuration.

This module implements the ``init`` command that records the contributor's
name in ``.svlmd/config.yaml`` and creates the contributor's page in the
knowledge base.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import typer

from svlmd.page_model import Page
from svlmd.page_store import PageStore
from .config import ConfigLoader, config_path_for
from .errors import InitError
from .models import SvlmdConfig
from .output import OutputHandler

logger = logging.getLogger(__name__)

# Properties of a newly created contributor page
CONTRIBUTOR_PAGE_PROPERTIES = [
    ("icon", "🙂"),
    ("exclude-from-graph-view", "true"),
    ("tags", "Author"),
]


class InitCommand:
    """Handles initialization of the contributor configuration.

    Example:
        >>> init = InitCommand(root=Path("/path/to/kb"))
        >>> config = init.run()
        >>> config.contributor
        'Sira'
    """

    def __init__(
        self,
        root: Path,
        output_handler: Optional[OutputHandler] = None,
        prompt: Optional[Callable[[str], str]] = None,
    ):
        """Initialize the init command.

        Args:
            root: Knowledge base root directory
            output_handler: OutputHandler for terminal output (optional)
            prompt: Callable asking the user for a value (defaults to typer.prompt)
        """
        self.root = Path(root)
        self.output_handler = output_handler or OutputHandler()
        self.prompt = prompt or typer.prompt

    @property
    def config_path(self) -> Path:
        return config_path_for(self.root)

    def _prompt_contributor(self) -> str:
        """Ask for the contributor's name.

        Raises:
            InitError: If no name is given
        """
        name = self.prompt("Enter your name")
        if name is None or not str(name).strip():
            raise InitError("Contributor name cannot be empty")
        return str(name).strip()

    def configure(self) -> SvlmdConfig:
        """Create or overwrite the configuration file.

        Returns:
            The saved configuration

        Raises:
            InitError: If the configuration cannot be written
        """
        if self.config_path.exists():
            self.output_handler.print(f"{self.config_path} already exists. Overwriting...")

        contributor = self._prompt_contributor()
        config = SvlmdConfig(root=self.root, contributor=contributor)

        try:
            ConfigLoader.save(config)
        except Exception as e:
            raise InitError(f"Failed to save configuration: {str(e)}")

        self.output_handler.print("Initialized config.")
        return config

    def ensure_contributor_page(self, config: SvlmdConfig) -> bool:
        """Create the contributor's page if it does not exist yet.

        Returns:
            True if the page was created
        """
        store = PageStore(config.pages_dir)
        if store.exists(config.contributor):
            logger.debug(f"Contributor page '{config.contributor}' already exists")
            return False

        store.write(Page(
            title=config.contributor,
            properties=list(CONTRIBUTOR_PAGE_PROPERTIES),
            contents=[],
        ))
        logger.info(f"Created contributor page '{config.contributor}'")
        return True

    def run(self, reconfigure: bool = True) -> SvlmdConfig:
        """Run initialization.

        Args:
            reconfigure: Always prompt and rewrite the configuration. When
                False the prompt only happens if no configuration exists.

        Returns:
            Loaded configuration

        Raises:
            InitError: If the contributor name or configuration is invalid
            ConfigError: If an existing configuration is malformed
        """
        if reconfigure:
            self.configure()
        elif not self.config_path.exists():
            self.output_handler.print("Config not found. Creating...")
            self.configure()
            self.output_handler.print("")

        config = ConfigLoader.load(self.root)
        self.ensure_contributor_page(config)
        return config
