"""Override store adapters."""

from .in_memory_override_store import InMemoryOverrideStore

__all__ = ["InMemoryOverrideStore"]
