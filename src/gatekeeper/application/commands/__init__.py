"""Command handlers for admission checks."""

from .admit_connection import AdmitConnectionCommand, AdmitConnectionHandler

__all__ = [
    "AdmitConnectionCommand",
    "AdmitConnectionHandler",
]
