"""Domain models - Entities and Value Objects."""

from .admission import AdmissionDecision, AdmissionRequest, LimitScope, LiveCounts

__all__ = [
    "AdmissionDecision",
    "AdmissionRequest",
    "LimitScope",
    "LiveCounts",
]
