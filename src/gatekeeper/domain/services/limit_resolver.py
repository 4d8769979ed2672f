"""Limit resolver domain service."""

from typing import Optional

from ..exceptions import DependencyUnavailable
from ..models.admission import AdmissionDecision, AdmissionRequest, LimitScope, LiveCounts
from ..repositories.live_count_registry import LiveCountRegistry
from ..repositories.override_store import OverrideStore
from ..value_objects.limit_configuration import LimitConfiguration


class LimitResolver:
    """
    Domain service deciding whether a connection attempt is admissible.

    Scopes are evaluated global -> connection -> group -> user/connection
    -> user/group, and the first one over its limit is reported. A scope
    denies once its live count has reached its limit; a limit of 0 never
    denies. Stateless: every call depends only on its inputs, the shared
    configuration and the ports, so it may be called concurrently.
    """

    def __init__(
        self,
        config: LimitConfiguration,
        override_store: OverrideStore,
        registry: Optional[LiveCountRegistry] = None,
    ):
        """
        Initialize limit resolver.

        Args:
            config: Global and default limits
            override_store: Per-entity limit overrides
            registry: Live-count registry, used when a request carries no counts
        """
        self.config = config
        self.override_store = override_store
        self.registry = registry

    def try_admit(self, request: AdmissionRequest) -> AdmissionDecision:
        """
        Check a connection attempt against every applicable scope.

        Args:
            request: Connection attempt with optional live counts

        Returns:
            AdmissionDecision naming the first violated scope, if any

        Raises:
            DependencyUnavailable: If the registry or override store fails
        """
        counts = self._live_counts(request)

        for scope in request.applicable_scopes():
            limit = self.effective_limit(scope, request)
            live_count = counts.for_scope(scope)
            if limit != 0 and live_count >= limit:
                return AdmissionDecision.deny(scope, limit, live_count)

        return AdmissionDecision.admit()

    def effective_limit(self, scope: LimitScope, request: AdmissionRequest) -> int:
        """
        Resolve the limit for one scope of a request.

        The entity's override wins when present, otherwise the configured
        default applies. The global scope has no override.

        Raises:
            DependencyUnavailable: If the override store fails
        """
        if scope is LimitScope.GLOBAL:
            return self.config.absolute_max_connections

        override = self._call(
            "override_store", self._lookup_override, scope, request
        )
        if override is not None:
            return override
        return self._default_limit(scope)

    def _default_limit(self, scope: LimitScope) -> int:
        if scope is LimitScope.CONNECTION:
            return self.config.default_max_connections
        if scope is LimitScope.GROUP:
            return self.config.default_max_group_connections
        if scope is LimitScope.USER_CONNECTION:
            return self.config.default_max_connections_per_user
        return self.config.default_max_group_connections_per_user

    def _lookup_override(self, scope: LimitScope, request: AdmissionRequest) -> Optional[int]:
        store = self.override_store
        if scope is LimitScope.CONNECTION:
            return store.get_connection_limit(request.connection_id)
        if scope is LimitScope.GROUP:
            return store.get_group_limit(request.group_id)
        if scope is LimitScope.USER_CONNECTION:
            return store.get_user_connection_limit(request.user_id, request.connection_id)
        return store.get_user_group_limit(request.user_id, request.group_id)

    def _live_counts(self, request: AdmissionRequest) -> LiveCounts:
        if request.live_counts is not None:
            return request.live_counts
        if self.registry is None:
            raise ValueError("Request carries no live counts and no registry is configured")
        return self._call("registry", self.registry.snapshot, request)

    @staticmethod
    def _call(dependency: str, func, *args):
        """Invoke a port, surfacing its failures as DependencyUnavailable."""
        try:
            return func(*args)
        except DependencyUnavailable:
            raise
        except Exception as e:
            raise DependencyUnavailable(
                f"{dependency} unavailable: {e}",
                dependency=dependency,
            ) from e
