"""Admit connection command and handler."""

from dataclasses import dataclass
from typing import Optional

from ...domain.exceptions import DependencyUnavailable
from ...domain.models.admission import AdmissionDecision, AdmissionRequest, LiveCounts
from ...domain.services.limit_resolver import LimitResolver
from ...infrastructure.logging import GatekeeperLogger, logging_context


@dataclass
class AdmitConnectionCommand:
    """
    Command to decide whether a new connection may start.

    live_counts may be supplied by the caller; otherwise they are read
    from the registry the resolver was built with.
    """
    connection_id: str
    user_id: str
    group_id: Optional[str] = None
    live_counts: Optional[LiveCounts] = None
    deny_on_failure: bool = True

    def to_request(self) -> AdmissionRequest:
        return AdmissionRequest(
            connection_id=self.connection_id,
            user_id=self.user_id,
            group_id=self.group_id,
            live_counts=self.live_counts,
        )


class AdmitConnectionHandler:
    """
    Handler for admit connection command.

    Runs the limit policy and logs the outcome. When the registry or
    override store is unavailable the attempt is denied rather than
    admitted on stale or missing data.
    """

    def __init__(self, resolver: LimitResolver):
        """
        Initialize handler.

        Args:
            resolver: Limit policy to evaluate attempts against
        """
        self.resolver = resolver
        self.logger = GatekeeperLogger.get_instance()

    def handle(self, command: AdmitConnectionCommand) -> AdmissionDecision:
        """
        Execute admit connection command.

        Args:
            command: Connection attempt to check

        Returns:
            AdmissionDecision for the attempt

        Raises:
            DependencyUnavailable: If a dependency failed and
                command.deny_on_failure is False
        """
        with logging_context(
            operation="admission_check",
            connection_id=command.connection_id,
            group_id=command.group_id,
            user_id=command.user_id,
        ):
            try:
                decision = self.resolver.try_admit(command.to_request())
            except DependencyUnavailable as e:
                self.logger.error(
                    "Admission check failed, dependency unavailable",
                    extra={"dependency": e.dependency, "error": str(e)},
                )
                if not command.deny_on_failure:
                    raise
                return AdmissionDecision.unavailable()

            if decision.admitted:
                self.logger.debug("Connection admitted")
            else:
                self.logger.info(
                    f"Connection denied: {decision.reason}",
                    extra={
                        "violated_scope": decision.violated_scope.value,
                        "limit": decision.limit,
                        "live_count": decision.live_count,
                    },
                )
            return decision
