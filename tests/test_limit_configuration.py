"""
Tests for LimitConfiguration and DatabaseEnvironment loading.
"""

import pytest

from gatekeeper.domain.exceptions import ConfigurationError
from gatekeeper.domain.repositories.configuration_source import ConfigurationSource
from gatekeeper.domain.value_objects.limit_configuration import (
    DatabaseEnvironment,
    LimitConfiguration,
)
from gatekeeper.infrastructure.sources.mapping_source import MappingConfigurationSource

ALL_PROPERTIES = [
    "absolute-max-connections",
    "default-max-connections",
    "default-max-group-connections",
    "default-max-connections-per-user",
    "default-max-group-connections-per-user",
]


class UnreachableSource(ConfigurationSource):
    """Configuration source whose backing store cannot be reached."""

    def get_property(self, name):
        raise OSError("properties store unreachable")


class TestLimitConfiguration:
    """Test suite for LimitConfiguration."""

    def test_absent_properties_default_to_unlimited(self):
        """Test an empty source yields all-zero limits."""
        config = LimitConfiguration.from_source(MappingConfigurationSource({}))

        assert config == LimitConfiguration()
        assert all(value == 0 for value in config.to_dict().values())

    def test_reads_all_five_properties(self):
        """Test each property maps onto its field."""
        source = MappingConfigurationSource({
            "absolute-max-connections": "100",
            "default-max-connections": "10",
            "default-max-group-connections": "20",
            "default-max-connections-per-user": "1",
            "default-max-group-connections-per-user": " 2 ",
        })

        config = LimitConfiguration.from_source(source)

        assert config.absolute_max_connections == 100
        assert config.default_max_connections == 10
        assert config.default_max_group_connections == 20
        assert config.default_max_connections_per_user == 1
        assert config.default_max_group_connections_per_user == 2

    def test_prefix_applied_to_property_names(self):
        """Test backend prefix selects prefixed properties only."""
        source = MappingConfigurationSource({
            "postgresql-default-max-connections": "4",
            "default-max-connections": "99",
        })

        config = LimitConfiguration.from_source(source, prefix="postgresql-")

        assert config.default_max_connections == 4

    def test_surrounding_whitespace_ignored(self):
        """Test padded digits still parse as a limit."""
        source = MappingConfigurationSource({"default-max-connections": " 7 "})

        config = LimitConfiguration.from_source(source)

        assert config.default_max_connections == 7

    @pytest.mark.parametrize("name", ALL_PROPERTIES)
    @pytest.mark.parametrize("value", ["-1", "abc", "1.5", "ten", "1_000", "1 000", "0x10"])
    def test_invalid_value_rejected(self, name, value):
        """Test negative or non-numeric values fail with ConfigurationError."""
        source = MappingConfigurationSource({name: value})

        with pytest.raises(ConfigurationError) as exc_info:
            LimitConfiguration.from_source(source)

        assert exc_info.value.property_name == name

    def test_unreachable_source(self):
        """Test source failures become ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            LimitConfiguration.from_source(UnreachableSource())

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_direct_construction_validates(self):
        """Test negative values are rejected at construction too."""
        with pytest.raises(ConfigurationError):
            LimitConfiguration(default_max_connections=-5)

    def test_immutable(self):
        """Test configuration cannot be mutated after construction."""
        config = LimitConfiguration(absolute_max_connections=3)

        with pytest.raises(AttributeError):
            config.absolute_max_connections = 0


class TestDatabaseEnvironment:
    """Test suite for DatabaseEnvironment."""

    def test_user_required_defaults_to_false(self):
        """Test user-required is off when absent."""
        environment = DatabaseEnvironment.from_source(MappingConfigurationSource({}))

        assert environment.user_required is False

    @pytest.mark.parametrize("raw, expected", [("true", True), ("FALSE", False), (" True ", True)])
    def test_user_required_parsed(self, raw, expected):
        """Test user-required accepts true/false in any case."""
        source = MappingConfigurationSource({"mysql-user-required": raw})

        environment = DatabaseEnvironment.from_source(source, prefix="mysql-")

        assert environment.user_required is expected

    def test_user_required_invalid(self):
        """Test other values for user-required are rejected."""
        source = MappingConfigurationSource({"user-required": "yes"})

        with pytest.raises(ConfigurationError):
            DatabaseEnvironment.from_source(source)

    def test_limits_loaded_alongside_flag(self):
        """Test limits are loaded with the same prefix."""
        source = MappingConfigurationSource({
            "mysql-absolute-max-connections": "8",
            "mysql-user-required": "true",
        })

        environment = DatabaseEnvironment.from_source(source, prefix="mysql-")

        assert environment.limits.absolute_max_connections == 8
