"""In-process live connection registry."""

import threading
from dataclasses import replace
from typing import Dict, Tuple

from ...domain.models.admission import AdmissionDecision, AdmissionRequest
from ...domain.repositories.live_count_registry import LiveCountRegistry
from ...domain.services.limit_resolver import LimitResolver
from ..logging import GatekeeperLogger, logging_context


class InMemoryConnectionRegistry(LiveCountRegistry):
    """
    Tracks active connections per scope for a single gateway process.

    acquire() checks and increments under one lock, so two attempts racing
    for the last slot of a scope cannot both be admitted.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._total = 0
        self._connections: Dict[str, int] = {}
        self._groups: Dict[str, int] = {}
        self._user_connections: Dict[Tuple[str, str], int] = {}
        self._user_groups: Dict[Tuple[str, str], int] = {}
        self.logger = GatekeeperLogger.get_instance()

    def get_total_count(self) -> int:
        return self._total

    def get_connection_count(self, connection_id: str) -> int:
        return self._connections.get(connection_id, 0)

    def get_group_count(self, group_id: str) -> int:
        return self._groups.get(group_id, 0)

    def get_user_connection_count(self, user_id: str, connection_id: str) -> int:
        return self._user_connections.get((user_id, connection_id), 0)

    def get_user_group_count(self, user_id: str, group_id: str) -> int:
        return self._user_groups.get((user_id, group_id), 0)

    def acquire(self, request: AdmissionRequest, resolver: LimitResolver) -> AdmissionDecision:
        """
        Admit and register a connection attempt if every scope has room.

        Args:
            request: Connection attempt; any live counts it carries are replaced
            resolver: Limit policy to check the attempt against

        Returns:
            The resolver's decision; the attempt is counted only if admitted
        """
        with self._lock:
            counted = replace(request, live_counts=self.snapshot(request))
            decision = resolver.try_admit(counted)
            if decision.admitted:
                self._adjust(request, 1)

        with logging_context(operation="registry_acquire"):
            self.logger.debug(
                "Connection slot acquired" if decision.admitted else "Connection slot refused",
                extra={"connection_id": request.connection_id, "user_id": request.user_id,
                       "group_id": request.group_id, "active_total": self._total},
            )
        return decision

    def release(self, request: AdmissionRequest) -> None:
        """Unregister a connection previously admitted by acquire()."""
        with self._lock:
            self._adjust(request, -1)

    def _adjust(self, request: AdmissionRequest, delta: int) -> None:
        self._total = max(0, self._total + delta)
        self._bump(self._connections, request.connection_id, delta)
        self._bump(self._user_connections, (request.user_id, request.connection_id), delta)
        if request.group_id is not None:
            self._bump(self._groups, request.group_id, delta)
            self._bump(self._user_groups, (request.user_id, request.group_id), delta)

    @staticmethod
    def _bump(counts: Dict, key, delta: int) -> None:
        value = counts.get(key, 0) + delta
        if value <= 0:
            counts.pop(key, None)
        else:
            counts[key] = value
