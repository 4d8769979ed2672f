"""Dependency injection for Gatekeeper."""

from .container import DIContainer

__all__ = ["DIContainer"]
