"""
Tests for DIContainer wiring.
"""

import pytest
import yaml

from gatekeeper.domain.exceptions import ConfigurationError
from gatekeeper.domain.models.admission import AdmissionRequest, LimitScope
from gatekeeper.infrastructure.di.container import DIContainer
from gatekeeper.infrastructure.sources import (
    MappingConfigurationSource,
    PropertiesFileConfigurationSource,
)


class TestDIContainer:
    """Test suite for DIContainer."""

    def write_config(self, tmp_path, data):
        path = tmp_path / "gatekeeper.yaml"
        path.write_text(yaml.dump(data))
        return str(path)

    def test_limits_from_yaml_section(self, tmp_path):
        """Test limits come from the YAML limits section by default."""
        config_path = self.write_config(tmp_path, {
            "limits": {"absolute_max_connections": 2, "user_required": True},
        })

        container = DIContainer.create(config_path)

        assert isinstance(container.configuration_source, MappingConfigurationSource)
        assert container.environment.limits.absolute_max_connections == 2
        assert container.environment.user_required is True

    def test_limits_from_properties_file(self, tmp_path):
        """Test a properties file replaces the YAML limits section."""
        properties = tmp_path / "gateway.properties"
        properties.write_text("postgresql-default-max-connections: 7\n")
        config_path = self.write_config(tmp_path, {
            "source": {"properties_file": str(properties), "property_prefix": "postgresql-"},
            "limits": {"default_max_connections": 1},
        })

        container = DIContainer.create(config_path)

        assert isinstance(container.configuration_source, PropertiesFileConfigurationSource)
        assert container.environment.limits.default_max_connections == 7

    def test_invalid_properties_file_fails_startup(self, tmp_path):
        """Test a bad value in the properties file aborts wiring."""
        properties = tmp_path / "gateway.properties"
        properties.write_text("absolute-max-connections: -3\n")
        config_path = self.write_config(tmp_path, {
            "source": {"properties_file": str(properties)},
        })

        with pytest.raises(ConfigurationError):
            DIContainer.create(config_path)

    def test_wired_components_share_registry(self, tmp_path):
        """Test resolver, registry and overrides are wired together."""
        config_path = self.write_config(tmp_path, {
            "overrides": {"connections": {"c-1": 1}},
        })
        container = DIContainer.create(config_path)
        request = AdmissionRequest(connection_id="c-1", user_id="alice")

        first = container.registry.acquire(request, container.resolver)
        second = container.registry.acquire(request, container.resolver)

        assert first.admitted is True
        assert second.violated_scope == LimitScope.CONNECTION
        assert container.resolver.registry is container.registry
