"""Blog configuration reader.

Reads the ``blog_page`` section of a site's configuration file. Parsed files
are cached in memory per resolved project path.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import toml
import yaml

from .logger import logger
from .models import PatternConfigError, PatternOptions


class BlogConfigReader:
    """Reads and parses site configuration files."""

    CONFIG_FILENAMES = ["config.yml", "config.yaml", "config.toml"]
    SECTION = "blog_page"
    _config_cache: Dict[str, Optional[Dict[str, Any]]] = {}

    @classmethod
    def read_config(cls, project_path: Path) -> Optional[Dict[str, Any]]:
        """Read the configuration from the project directory.

        Args:
            project_path: Path to the site project directory

        Returns:
            Configuration dictionary or None if no config found
        """
        key = str(project_path.resolve())
        if key in cls._config_cache:
            return cls._config_cache[key]

        for config_filename in cls.CONFIG_FILENAMES:
            config_path = project_path / config_filename
            if not config_path.exists():
                continue
            try:
                text = config_path.read_text(encoding="utf-8")
                if config_filename.endswith(".toml"):
                    config = toml.loads(text)
                else:
                    config = yaml.safe_load(text)
            except (OSError, yaml.YAMLError, toml.TomlDecodeError) as e:
                logger.warning(f"Could not parse {config_path}: {e}")
                continue
            if isinstance(config, dict):
                cls._config_cache[key] = config
                return config

        cls._config_cache[key] = None
        return None

    @classmethod
    def read_options(cls, project_path: Path) -> Optional[PatternOptions]:
        """Read the blog pattern options of a project.

        Args:
            project_path: Path to the site project directory

        Returns:
            PatternOptions, or None if the project has no blog_page section

        Raises:
            PatternConfigError: If the section is not a mapping or holds
                invalid values
        """
        config = cls.read_config(project_path)
        if not config or cls.SECTION not in config:
            return None

        section = config[cls.SECTION]
        if not isinstance(section, dict):
            raise PatternConfigError(f"'{cls.SECTION}' must be a mapping, got {type(section).__name__}")

        defaults = PatternOptions()
        return PatternOptions(
            sources=section.get("sources", defaults.sources),
            permalink=section.get("permalink", defaults.permalink),
        )

    @classmethod
    def clear_cache(cls) -> None:
        cls._config_cache.clear()
