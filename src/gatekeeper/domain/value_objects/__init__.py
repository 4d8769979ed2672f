"""Value objects for the domain layer."""

from .limit_configuration import DatabaseEnvironment, LimitConfiguration

__all__ = [
    "DatabaseEnvironment",
    "LimitConfiguration",
]
