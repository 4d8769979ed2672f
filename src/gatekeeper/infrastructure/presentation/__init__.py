"""Presentation helpers for operator-facing output."""

from .error_presenter import ErrorPresenter

__all__ = ["ErrorPresenter"]
