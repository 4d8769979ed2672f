"""Override store backed by in-memory maps."""

from typing import Dict, Optional

from ...domain.exceptions import ConfigurationError
from ...domain.repositories.override_store import OverrideStore
from ..config.config_models import OverridesConfig


def _checked(section: str, limits: Optional[Dict[str, int]]) -> Dict[str, int]:
    """Copy a map of overrides, rejecting anything but non-negative ints."""
    checked = dict(limits or {})
    for key, value in checked.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError(
                f"Override {section}[{key!r}] must be a non-negative integer, got {value!r}",
                property_name=section,
            )
    return checked


class InMemoryOverrideStore(OverrideStore):
    """
    OverrideStore holding per-entity limits in dictionaries.

    Per-user maps are keyed by user id, then by connection or group id.
    """

    def __init__(
        self,
        connections: Optional[Dict[str, int]] = None,
        groups: Optional[Dict[str, int]] = None,
        user_connections: Optional[Dict[str, Dict[str, int]]] = None,
        user_groups: Optional[Dict[str, Dict[str, int]]] = None,
    ):
        """
        Initialize the store.

        Raises:
            ConfigurationError: If any override is negative or not an integer
        """
        self._connections = _checked("connections", connections)
        self._groups = _checked("groups", groups)
        self._user_connections = {
            user: _checked(f"user_connections.{user}", limits)
            for user, limits in (user_connections or {}).items()
        }
        self._user_groups = {
            user: _checked(f"user_groups.{user}", limits)
            for user, limits in (user_groups or {}).items()
        }

    @classmethod
    def from_config(cls, config: OverridesConfig) -> "InMemoryOverrideStore":
        """Create a store from the overrides section of the configuration."""
        return cls(
            connections=config.connections,
            groups=config.groups,
            user_connections=config.user_connections,
            user_groups=config.user_groups,
        )

    def get_connection_limit(self, connection_id: str) -> Optional[int]:
        return self._connections.get(connection_id)

    def get_group_limit(self, group_id: str) -> Optional[int]:
        return self._groups.get(group_id)

    def get_user_connection_limit(self, user_id: str, connection_id: str) -> Optional[int]:
        return self._user_connections.get(user_id, {}).get(connection_id)

    def get_user_group_limit(self, user_id: str, group_id: str) -> Optional[int]:
        return self._user_groups.get(user_id, {}).get(group_id)
