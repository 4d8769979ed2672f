"""Admission-related domain models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LimitScope(str, Enum):
    """Scopes over which a concurrency limit applies, in evaluation order."""
    GLOBAL = "global"
    CONNECTION = "connection"
    GROUP = "group"
    USER_CONNECTION = "user_connection"
    USER_GROUP = "user_group"

    @property
    def denial_reason(self) -> str:
        """Name of the denial reported when this scope is exceeded."""
        return _DENIAL_REASONS[self]

    @property
    def requires_group(self) -> bool:
        """Whether this scope only applies to attempts made through a group."""
        return self in (LimitScope.GROUP, LimitScope.USER_GROUP)


_DENIAL_REASONS = {
    LimitScope.GLOBAL: "GlobalLimitExceeded",
    LimitScope.CONNECTION: "ConnectionLimitExceeded",
    LimitScope.GROUP: "GroupLimitExceeded",
    LimitScope.USER_CONNECTION: "UserConnectionLimitExceeded",
    LimitScope.USER_GROUP: "UserGroupLimitExceeded",
}


@dataclass(frozen=True)
class LiveCounts:
    """
    Snapshot of active connection counts for every scope of one attempt.

    Counts for the group scopes are ignored when the attempt has no group.
    """
    total: int = 0
    connection: int = 0
    group: int = 0
    user_connection: int = 0
    user_group: int = 0

    def for_scope(self, scope: LimitScope) -> int:
        """Return the live count recorded for a scope."""
        return getattr(self, _COUNT_FIELDS[scope])


_COUNT_FIELDS = {
    LimitScope.GLOBAL: "total",
    LimitScope.CONNECTION: "connection",
    LimitScope.GROUP: "group",
    LimitScope.USER_CONNECTION: "user_connection",
    LimitScope.USER_GROUP: "user_group",
}


@dataclass(frozen=True)
class AdmissionRequest:
    """
    A single connection attempt to be checked against the limit policy.

    When live_counts is omitted the resolver captures a snapshot from
    the live-count registry at the moment of the check.
    """
    connection_id: str
    user_id: str
    group_id: Optional[str] = None
    live_counts: Optional[LiveCounts] = None

    def applicable_scopes(self):
        """Yield the scopes that apply to this attempt, in evaluation order."""
        for scope in LimitScope:
            if scope.requires_group and self.group_id is None:
                continue
            yield scope


@dataclass(frozen=True)
class AdmissionDecision:
    """Outcome of an admission check. A denial is a normal result, not an error."""
    admitted: bool
    violated_scope: Optional[LimitScope] = None
    limit: Optional[int] = None
    live_count: Optional[int] = None
    reason: Optional[str] = None

    @classmethod
    def admit(cls) -> "AdmissionDecision":
        """Create an admitting decision."""
        return cls(admitted=True)

    @classmethod
    def deny(cls, scope: LimitScope, limit: int, live_count: int) -> "AdmissionDecision":
        """Create a decision denied by the given scope."""
        return cls(
            admitted=False,
            violated_scope=scope,
            limit=limit,
            live_count=live_count,
            reason=scope.denial_reason,
        )

    @classmethod
    def unavailable(cls) -> "AdmissionDecision":
        """Create a deny-by-default decision used when a dependency failed."""
        return cls(admitted=False, reason="dependency_unavailable")

    def to_dict(self) -> dict:
        """Convert to dictionary for logging and display."""
        return {
            "admitted": self.admitted,
            "violated_scope": self.violated_scope.value if self.violated_scope else None,
            "limit": self.limit,
            "live_count": self.live_count,
            "reason": self.reason,
        }
