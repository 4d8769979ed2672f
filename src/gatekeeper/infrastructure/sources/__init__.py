"""Configuration source adapters."""

from .mapping_source import MappingConfigurationSource
from .properties_source import PropertiesFileConfigurationSource

__all__ = [
    "MappingConfigurationSource",
    "PropertiesFileConfigurationSource",
]
