"""Configuration loading for Gatekeeper."""

from .config_loader import ConfigLoader
from .config_models import GatekeeperConfig, LimitsConfig, LoggingConfig, OverridesConfig, SourceConfig

__all__ = [
    "ConfigLoader",
    "GatekeeperConfig",
    "LimitsConfig",
    "LoggingConfig",
    "OverridesConfig",
    "SourceConfig",
]
