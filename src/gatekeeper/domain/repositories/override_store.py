"""Per-entity limit override store interface (Port)."""

from abc import ABC, abstractmethod
from typing import Optional


class OverrideStore(ABC):
    """
    Port for per-entity concurrency limit overrides.

    Every lookup returns None when the entity carries no override, in which
    case the configured default applies. A returned 0 means "unlimited".
    The global limit cannot be overridden.
    """

    @abstractmethod
    def get_connection_limit(self, connection_id: str) -> Optional[int]:
        """Override for concurrent connections to one connection."""
        pass

    @abstractmethod
    def get_group_limit(self, group_id: str) -> Optional[int]:
        """Override for concurrent connections through one group."""
        pass

    @abstractmethod
    def get_user_connection_limit(self, user_id: str, connection_id: str) -> Optional[int]:
        """Override for concurrent connections one user may hold to a connection."""
        pass

    @abstractmethod
    def get_user_group_limit(self, user_id: str, group_id: str) -> Optional[int]:
        """Override for concurrent connections one user may hold through a group."""
        pass
