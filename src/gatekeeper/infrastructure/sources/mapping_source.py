"""In-memory configuration source."""

from typing import Mapping, Optional

from ...domain.repositories.configuration_source import ConfigurationSource


class MappingConfigurationSource(ConfigurationSource):
    """ConfigurationSource backed by a plain mapping of property names to values."""

    def __init__(self, properties: Mapping[str, object]):
        self._properties = {name: str(value) for name, value in properties.items()}

    def get_property(self, name: str) -> Optional[str]:
        return self._properties.get(name)

    def __repr__(self) -> str:
        return f"<MappingConfigurationSource: {len(self._properties)} properties>"
