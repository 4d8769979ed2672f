"""Logging infrastructure for Gatekeeper."""

from .context import LogContext, logging_context
from .logger import GatekeeperLogger

__all__ = ["GatekeeperLogger", "LogContext", "logging_context"]
