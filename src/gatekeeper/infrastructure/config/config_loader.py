"""Configuration loader with support for YAML files and environment variables."""

import os
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from pydantic import ValidationError

from ...domain.exceptions import ConfigurationError
from .config_models import GatekeeperConfig


class ConfigLoader:
    """
    Load and manage Gatekeeper configuration.

    Configuration is loaded in the following order (later sources override earlier):
    1. Default configuration (embedded in code)
    2. Global configuration (~/.gatekeeper/config.yaml)
    3. Project configuration (./gatekeeper.yaml or .gatekeeper.yaml)
    4. User-specified configuration file
    5. Environment variables (GATEKEEPER_<SECTION>_<FIELD>)
    """

    ENV_PREFIX = "GATEKEEPER_"

    # Sections settable from the environment; overrides are nested maps
    ENV_SECTIONS = ("source", "limits", "logging")

    DEFAULT_CONFIG_PATHS = [
        Path.home() / ".gatekeeper" / "config.yaml",
        Path("./gatekeeper.yaml"),
        Path("./.gatekeeper.yaml"),
    ]

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> GatekeeperConfig:
        """
        Load configuration from multiple sources.

        Args:
            config_path: Optional path to configuration file

        Returns:
            GatekeeperConfig instance

        Raises:
            FileNotFoundError: If config_path does not exist
            ConfigurationError: If a file is not valid YAML or a value is invalid
        """
        config_dict = {}

        for path in cls.DEFAULT_CONFIG_PATHS:
            if path.exists():
                config_dict = cls._merge_dicts(config_dict, cls._load_yaml_file(path))

        if config_path:
            user_path = Path(config_path)
            if not user_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            config_dict = cls._merge_dicts(config_dict, cls._load_yaml_file(user_path))

        config_dict = cls._merge_dicts(config_dict, cls._load_from_env())

        try:
            return GatekeeperConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _load_yaml_file(path: Path) -> Dict[str, Any]:
        """Load a YAML configuration file, returning {} for an empty file."""
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {path} must be a mapping")
        return data

    @staticmethod
    def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result

    @classmethod
    def _load_from_env(cls) -> Dict[str, Any]:
        """
        Load configuration from environment variables.

        The first segment after the prefix names the section; the rest is
        the field name. For example:
        - GATEKEEPER_LIMITS_ABSOLUTE_MAX_CONNECTIONS -> limits.absolute_max_connections
        - GATEKEEPER_SOURCE_PROPERTIES_FILE -> source.properties_file

        Values are passed through as strings and coerced by the models.
        """
        config: Dict[str, Dict[str, str]] = {}

        for key, value in os.environ.items():
            if not key.startswith(cls.ENV_PREFIX):
                continue

            section, _, field = key[len(cls.ENV_PREFIX):].lower().partition('_')
            if section not in cls.ENV_SECTIONS or not field:
                continue

            config.setdefault(section, {})[field] = value

        return config

    @staticmethod
    def create_default_config(path: Optional[str] = None) -> Path:
        """
        Create a default configuration file.

        Args:
            path: Optional path for config file. If not provided, creates in ~/.gatekeeper/

        Returns:
            Path to created configuration file
        """
        if path:
            config_path = Path(path)
            config_path.parent.mkdir(parents=True, exist_ok=True)
        else:
            config_dir = Path.home() / ".gatekeeper"
            config_dir.mkdir(parents=True, exist_ok=True)
            config_path = config_dir / "config.yaml"

        yaml_content = GatekeeperConfig().to_yaml()

        yaml_with_comments = f"""# Gatekeeper Configuration
#
# Concurrency limits for database-backed connections. Zero means unlimited.
# Override with environment variables (GATEKEEPER_<SECTION>_<FIELD>) or
# point source.properties_file at the gateway's properties file.

{yaml_content}
"""

        config_path.write_text(yaml_with_comments)

        return config_path

    @classmethod
    def get_config_info(cls) -> Dict[str, Any]:
        """Describe which configuration files and overrides are active."""
        return {
            "default_paths": [str(p) for p in cls.DEFAULT_CONFIG_PATHS],
            "existing_configs": [str(p) for p in cls.DEFAULT_CONFIG_PATHS if p.exists()],
            "env_overrides": [key for key in os.environ if key.startswith(cls.ENV_PREFIX)],
        }
