"""
Limit configuration value objects.

The five global/default concurrency limits are read once from a
ConfigurationSource at startup and never re-read; picking up a changed
property requires a restart.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..exceptions import ConfigurationError
from ..repositories.configuration_source import ConfigurationSource


ABSOLUTE_MAX_CONNECTIONS = "absolute-max-connections"
DEFAULT_MAX_CONNECTIONS = "default-max-connections"
DEFAULT_MAX_GROUP_CONNECTIONS = "default-max-group-connections"
DEFAULT_MAX_CONNECTIONS_PER_USER = "default-max-connections-per-user"
DEFAULT_MAX_GROUP_CONNECTIONS_PER_USER = "default-max-group-connections-per-user"
USER_REQUIRED = "user-required"

_LIMIT_PATTERN = re.compile(r"\+?[0-9]+")


def _read_property(source: ConfigurationSource, name: str) -> Optional[str]:
    try:
        return source.get_property(name)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Could not read property '{name}': {e}",
            property_name=name,
        ) from e


def _parse_limit(source: ConfigurationSource, name: str) -> int:
    """Read a non-negative integer property, 0 when absent."""
    raw = _read_property(source, name)
    if raw is None or not raw.strip():
        return 0

    # Plain decimal digits only; int() alone would take "1_000"
    if not _LIMIT_PATTERN.fullmatch(raw.strip()):
        raise ConfigurationError(
            f"Property '{name}' must be a non-negative integer, got '{raw}'",
            property_name=name,
        )
    return int(raw.strip())


def _parse_flag(source: ConfigurationSource, name: str) -> bool:
    """Read a true/false property, False when absent."""
    raw = _read_property(source, name)
    if raw is None or not raw.strip():
        return False

    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConfigurationError(
        f"Property '{name}' must be 'true' or 'false', got '{raw}'",
        property_name=name,
    )


@dataclass(frozen=True)
class LimitConfiguration:
    """
    Immutable snapshot of the global and default concurrency limits.

    All values are non-negative. Zero means "no limit", never "deny all".
    Shared read-only by every admission check for the process lifetime.
    """

    absolute_max_connections: int = 0
    """Cap across all connections. Cannot be overridden per entity."""

    default_max_connections: int = 0
    """Fallback cap for any one connection."""

    default_max_group_connections: int = 0
    """Fallback cap for any one connection group."""

    default_max_connections_per_user: int = 0
    """Fallback cap for one user on any one connection."""

    default_max_group_connections_per_user: int = 0
    """Fallback cap for one user on any one connection group."""

    def __post_init__(self):
        for name, value in self.to_dict().items():
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(
                    f"{name} must be a non-negative integer, got {value!r}",
                    property_name=name,
                )

    @classmethod
    def from_source(cls, source: ConfigurationSource, prefix: str = "") -> "LimitConfiguration":
        """
        Load the limits from a configuration source.

        Args:
            source: Property store to read from
            prefix: Backend-specific property prefix (e.g. "postgresql-")

        Returns:
            LimitConfiguration with absent properties defaulting to 0

        Raises:
            ConfigurationError: If the source fails or a value is not a
                non-negative integer
        """
        return cls(
            absolute_max_connections=_parse_limit(source, prefix + ABSOLUTE_MAX_CONNECTIONS),
            default_max_connections=_parse_limit(source, prefix + DEFAULT_MAX_CONNECTIONS),
            default_max_group_connections=_parse_limit(
                source, prefix + DEFAULT_MAX_GROUP_CONNECTIONS
            ),
            default_max_connections_per_user=_parse_limit(
                source, prefix + DEFAULT_MAX_CONNECTIONS_PER_USER
            ),
            default_max_group_connections_per_user=_parse_limit(
                source, prefix + DEFAULT_MAX_GROUP_CONNECTIONS_PER_USER
            ),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return {
            "absolute_max_connections": self.absolute_max_connections,
            "default_max_connections": self.default_max_connections,
            "default_max_group_connections": self.default_max_group_connections,
            "default_max_connections_per_user": self.default_max_connections_per_user,
            "default_max_group_connections_per_user": self.default_max_group_connections_per_user,
        }


@dataclass(frozen=True)
class DatabaseEnvironment:
    """
    Settings shared by database-backed authentication.

    Wraps the concurrency limits together with whether a database user
    account is required even when another provider has authenticated
    the user.
    """

    limits: LimitConfiguration
    user_required: bool = False

    @classmethod
    def from_source(cls, source: ConfigurationSource, prefix: str = "") -> "DatabaseEnvironment":
        """Load limits and the user-required flag from a configuration source."""
        return cls(
            limits=LimitConfiguration.from_source(source, prefix),
            user_required=_parse_flag(source, prefix + USER_REQUIRED),
        )
