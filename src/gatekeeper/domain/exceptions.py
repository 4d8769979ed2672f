"""Domain exceptions for Gatekeeper."""

from typing import Optional


class GatekeeperDomainError(Exception):
    """Base exception for domain errors."""
    pass


class ConfigurationError(GatekeeperDomainError):
    """Raised when limit configuration cannot be read or parsed."""

    def __init__(self, message: str, property_name: Optional[str] = None):
        super().__init__(message)
        self.property_name = property_name


class DependencyUnavailable(GatekeeperDomainError):
    """Raised when the live-count registry or override store cannot answer."""

    def __init__(self, message: str, dependency: Optional[str] = None):
        super().__init__(message)
        self.dependency = dependency
