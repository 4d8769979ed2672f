"""Dependency injection container for Gatekeeper."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config.config_loader import ConfigLoader
from ..config.config_models import GatekeeperConfig
from ..logging import GatekeeperLogger
from ..persistence.in_memory_override_store import InMemoryOverrideStore
from ..registry.in_memory_registry import InMemoryConnectionRegistry
from ..sources.mapping_source import MappingConfigurationSource
from ..sources.properties_source import PropertiesFileConfigurationSource
from ...domain.repositories.configuration_source import ConfigurationSource
from ...domain.services.limit_resolver import LimitResolver
from ...domain.value_objects.limit_configuration import DatabaseEnvironment
from ...application.commands.admit_connection import AdmitConnectionHandler


@dataclass
class DIContainer:
    """
    Dependency injection container for Gatekeeper.

    Assembles all components with proper dependency injection.
    Created once at startup; the limits it loads are never re-read.
    """

    # Configuration
    config: GatekeeperConfig
    configuration_source: ConfigurationSource
    environment: DatabaseEnvironment

    # Infrastructure
    logger: GatekeeperLogger
    registry: InMemoryConnectionRegistry
    override_store: InMemoryOverrideStore

    # Domain Services
    resolver: LimitResolver

    # Application Handlers
    admit_handler: AdmitConnectionHandler

    @classmethod
    def create(cls, config_path: Optional[str] = None) -> "DIContainer":
        """
        Create and wire all dependencies.

        Args:
            config_path: Optional path to configuration file

        Returns:
            DIContainer with all dependencies wired

        Raises:
            ConfigurationError: If the configuration or limits are invalid
        """
        config = ConfigLoader.load(config_path)

        logger = GatekeeperLogger.configure(
            level=config.logging.level,
            log_file=Path(config.logging.file) if config.logging.file else None,
            console=config.logging.console,
            rotation=config.logging.rotation,
            retention_days=config.logging.retention_days,
        )

        configuration_source = cls.build_configuration_source(config)
        environment = DatabaseEnvironment.from_source(
            configuration_source,
            prefix=config.source.property_prefix,
        )

        logger.info(
            "Concurrency limits loaded",
            extra={"source": repr(configuration_source), **environment.limits.to_dict()},
        )

        registry = InMemoryConnectionRegistry()
        override_store = InMemoryOverrideStore.from_config(config.overrides)

        resolver = LimitResolver(
            config=environment.limits,
            override_store=override_store,
            registry=registry,
        )

        admit_handler = AdmitConnectionHandler(resolver=resolver)

        return cls(
            config=config,
            configuration_source=configuration_source,
            environment=environment,
            logger=logger,
            registry=registry,
            override_store=override_store,
            resolver=resolver,
            admit_handler=admit_handler,
        )

    @staticmethod
    def build_configuration_source(config: GatekeeperConfig) -> ConfigurationSource:
        """
        Choose where the limits are read from.

        A configured properties file wins; otherwise the limits section of
        the YAML configuration is exposed under the same property names.
        """
        if config.source.properties_file:
            return PropertiesFileConfigurationSource(Path(config.source.properties_file))
        return MappingConfigurationSource(
            config.limits.to_properties(prefix=config.source.property_prefix)
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"<DIContainer: {self.configuration_source!r}>"
