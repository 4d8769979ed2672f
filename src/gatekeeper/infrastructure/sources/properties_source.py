"""
Properties file configuration source.

Reads the gateway's flat key/value properties file, e.g.::

    # limits for the PostgreSQL backend
    postgresql-absolute-max-connections: 100
    postgresql-default-max-connections-per-user = 2
"""

from pathlib import Path
from typing import Dict, Optional

from ...domain.exceptions import ConfigurationError
from ...domain.repositories.configuration_source import ConfigurationSource
from ..logging import GatekeeperLogger


class PropertiesFileConfigurationSource(ConfigurationSource):
    """
    ConfigurationSource reading a properties file once, at construction.

    Lines are ``name: value`` or ``name=value``; blank lines and lines
    starting with ``#`` or ``!`` are ignored. A later duplicate wins.
    """

    def __init__(self, path: Path):
        """
        Read and parse the properties file.

        Args:
            path: Path to the properties file

        Raises:
            ConfigurationError: If the file cannot be read or a line is malformed
        """
        self.path = Path(path)
        self.logger = GatekeeperLogger.get_instance()
        self._properties = self._load(self.path)

        self.logger.debug(
            "Loaded properties file",
            extra={"properties_file": str(self.path), "property_count": len(self._properties)},
        )

    @staticmethod
    def _load(path: Path) -> Dict[str, str]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not read properties file {path}: {e}") from e

        properties = {}
        for line_number, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith(("#", "!")):
                continue

            separators = [i for i in (line.find(":"), line.find("=")) if i != -1]
            if not separators:
                raise ConfigurationError(
                    f"Malformed property at {path}:{line_number}: expected 'name: value'"
                )

            split_at = min(separators)
            name = line[:split_at].strip()
            if not name:
                raise ConfigurationError(f"Missing property name at {path}:{line_number}")
            properties[name] = line[split_at + 1:].strip()

        return properties

    def get_property(self, name: str) -> Optional[str]:
        return self._properties.get(name)

    def __repr__(self) -> str:
        return f"<PropertiesFileConfigurationSource: {self.path}>"
