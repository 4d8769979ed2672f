"""Live connection registry interface (Port)."""

from abc import ABC, abstractmethod

from ..models.admission import AdmissionRequest, LiveCounts


class LiveCountRegistry(ABC):
    """
    Port for the registry tracking currently active connections.

    Implementations raise DependencyUnavailable when the registry cannot
    answer. Atomicity of "check, then increment" belongs to the registry.
    """

    @abstractmethod
    def get_total_count(self) -> int:
        """Number of active connections across the whole gateway."""
        pass

    @abstractmethod
    def get_connection_count(self, connection_id: str) -> int:
        """Number of active connections to a connection."""
        pass

    @abstractmethod
    def get_group_count(self, group_id: str) -> int:
        """Number of active connections made through a connection group."""
        pass

    @abstractmethod
    def get_user_connection_count(self, user_id: str, connection_id: str) -> int:
        """Number of active connections a user holds to a connection."""
        pass

    @abstractmethod
    def get_user_group_count(self, user_id: str, group_id: str) -> int:
        """Number of active connections a user holds through a group."""
        pass

    def snapshot(self, request: AdmissionRequest) -> LiveCounts:
        """
        Capture live counts for every scope applicable to a request.

        Args:
            request: Connection attempt being checked

        Returns:
            LiveCounts for the attempt (group counts are 0 without a group)
        """
        group_count = 0
        user_group_count = 0
        if request.group_id is not None:
            group_count = self.get_group_count(request.group_id)
            user_group_count = self.get_user_group_count(request.user_id, request.group_id)

        return LiveCounts(
            total=self.get_total_count(),
            connection=self.get_connection_count(request.connection_id),
            group=group_count,
            user_connection=self.get_user_connection_count(
                request.user_id, request.connection_id
            ),
            user_group=user_group_count,
        )
