"""
Logging context management for Gatekeeper.

Fields such as the connection, group and user of the attempt being
checked are stored per thread and merged into every log record emitted
while they are set.

Example:
    >>> with logging_context(connection_id="c-1", user_id="alice"):
    ...     logger.info("Checking admission")  # Includes both ids
"""

import threading
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Dict


class LogContext:
    """
    Thread-local storage for logging context.

    Concurrent admission checks run on separate threads, so each thread
    sees only the fields it set itself.
    """

    _local = threading.local()

    @classmethod
    def _fields(cls) -> Dict[str, Any]:
        if not hasattr(cls._local, 'context'):
            cls._local.context = {}
        return cls._local.context

    @classmethod
    def get_context(cls) -> Dict[str, Any]:
        """Return a copy of the current thread's context fields."""
        return deepcopy(cls._fields())

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set a single context field."""
        cls._fields()[key] = value

    @classmethod
    def update(cls, fields: Dict[str, Any]) -> None:
        """Set several context fields at once."""
        cls._fields().update(fields)

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a single context field."""
        return cls._fields().get(key, default)

    @classmethod
    def clear(cls) -> None:
        """Clear all context fields for the current thread."""
        cls._local.context = {}

    @classmethod
    def remove(cls, *keys: str) -> None:
        """Remove specific context fields."""
        fields = cls._fields()
        for key in keys:
            fields.pop(key, None)


@contextmanager
def logging_context(**fields):
    """
    Set context fields for the duration of a block.

    Fields that were already set are restored on exit rather than dropped,
    so nested blocks may shadow an outer value.

    Example:
        >>> with logging_context(operation="admission_check"):
        ...     with logging_context(user_id="alice"):
        ...         pass  # operation and user_id both set
        ...     # only operation remains
    """
    previous = {key: LogContext.get(key) for key in fields if key in LogContext._fields()}
    LogContext.update(fields)

    try:
        yield
    finally:
        LogContext.remove(*fields.keys())
        LogContext.update(previous)
