"""Repository interfaces (Ports) for the domain layer."""

from .configuration_source import ConfigurationSource
from .live_count_registry import LiveCountRegistry
from .override_store import OverrideStore

__all__ = [
    "ConfigurationSource",
    "LiveCountRegistry",
    "OverrideStore",
]
