"""Domain services - Core admission logic."""

from .limit_resolver import LimitResolver

__all__ = [
    "LimitResolver",
]
