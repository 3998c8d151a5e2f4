"""Configuration file loading and root directory detection.

The configuration lives in ``<root>/.svlmd/config.yaml``:

    contributor: Sira

It is created by ``svlmd init`` and read by every other command.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from svlmd.page_store.errors import FilesystemError
from .errors import ConfigError, ConfigNotFoundError, RootNotFoundError
from .models import SvlmdConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = ".svlmd"
CONFIG_FILE = "config.yaml"


def config_path_for(root: Path) -> Path:
    """Return the configuration file path for a knowledge base root."""
    return Path(root) / CONFIG_DIR / CONFIG_FILE


def detect_root(start: Optional[Path] = None) -> Path:
    """Find the knowledge base root.

    Walks up from ``start`` (default: the current directory) to the first
    directory containing a ``pages/`` directory.

    Raises:
        RootNotFoundError: If no such directory exists
    """
    start = Path(start or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if (candidate / "pages").is_dir():
            logger.debug(f"Detected knowledge base root: {candidate}")
            return candidate
    raise RootNotFoundError(str(start))


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        contributor: "Sira"
    """

    REQUIRED_FIELDS = {'contributor'}

    @classmethod
    def load(cls, root: Path) -> SvlmdConfig:
        """Load and parse the configuration of a knowledge base.

        Args:
            root: Knowledge base root directory

        Returns:
            SvlmdConfig with parsed configuration

        Raises:
            ConfigNotFoundError: If the configuration file does not exist
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        config_path = config_path_for(root)

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(str(config_path))
        except PermissionError:
            raise FilesystemError(str(config_path), 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(str(config_path), 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(Path(root), config_dict)

    @classmethod
    def save(cls, config: SvlmdConfig) -> Path:
        """Save configuration to ``<root>/.svlmd/config.yaml``.

        Args:
            config: Configuration to save

        Returns:
            Path of the written file

        Raises:
            FilesystemError: If file cannot be written
        """
        config_path = config_path_for(config.root)
        yaml_str = yaml.safe_dump(
            {'contributor': config.contributor},
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        try:
            os.makedirs(config_path.parent, exist_ok=True)
        except OSError as e:
            raise FilesystemError(str(config_path.parent), 'create_directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(str(config_path), 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(str(config_path), 'write', str(e))

        logger.info(f"Configuration saved to {config_path}")
        return config_path

    @classmethod
    def _parse_config(cls, root: Path, config_dict: Dict[str, Any]) -> SvlmdConfig:
        """Parse and validate configuration dictionary.

        Raises:
            ConfigError: If configuration is invalid
        """
        missing_fields = cls.REQUIRED_FIELDS - set(config_dict.keys())
        if missing_fields:
            raise ConfigError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}"
            )

        contributor = config_dict['contributor']
        if not isinstance(contributor, str):
            raise ConfigError(
                f"Field 'contributor' must be a string, got {type(contributor).__name__}",
                'contributor'
            )
        if not contributor.strip():
            raise ConfigError("Field 'contributor' cannot be empty", 'contributor')

        return SvlmdConfig(root=root, contributor=contributor.strip())
