"""Live connection registry adapters."""

from .in_memory_registry import InMemoryConnectionRegistry

__all__ = ["InMemoryConnectionRegistry"]
