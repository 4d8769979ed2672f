"""
Gatekeeper Logging Infrastructure.

Provides centralized logging with:
- Human-readable console output
- JSON file output with daily rotation
- Context fields (request ids, scope ids) merged into every record
- Singleton access shared by every component

Admission checks run on many threads at once; handlers are shared and
the stdlib logging module serializes emission.
"""

import json
import logging
import logging.handlers
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .context import LogContext

LOGGER_NAME = "gatekeeper"

# LogRecord attributes that are not user-supplied extra fields
_RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", "message",
})


class JSONFormatter(logging.Formatter):
    """
    Formatter that renders each record as one JSON object per line.

    Extra fields passed via ``extra=`` (connection_id, user_id,
    violated_scope, ...) are emitted as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Console formatter: ``YYYY-MM-DD HH:MM:SS - LEVEL - message``."""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


class GatekeeperLogger:
    """
    Centralized logging for Gatekeeper.

    A single instance exists per process. Console output goes to stderr,
    and an optional log file receives every record as JSON.

    Example:
        >>> logger = GatekeeperLogger.get_instance(level="DEBUG")
        >>> logger.info("Admission denied", extra={"violated_scope": "group"})
    """

    _instance: Optional['GatekeeperLogger'] = None
    _lock: threading.Lock = threading.Lock()

    def __init__(
        self,
        level: str = "INFO",
        log_file: Optional[Path] = None,
        console: bool = True,
        rotation: str = "daily",
        retention_days: int = 30,
    ):
        """
        Initialize Gatekeeper logger.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to JSON log file (optional)
            console: Enable console output
            rotation: "daily" for midnight rotation, "none" for a plain file
            retention_days: Rotated files to keep
        """
        numeric_level = getattr(logging, level.upper())
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(numeric_level)
        self.logger.propagate = False

        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(numeric_level)
            console_handler.setFormatter(HumanReadableFormatter())
            self.logger.addHandler(console_handler)

        if log_file:
            self.logger.addHandler(self._build_file_handler(Path(log_file), rotation, retention_days))

    @staticmethod
    def _build_file_handler(log_file: Path, rotation: str, retention_days: int) -> logging.Handler:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        if rotation == "daily":
            file_handler = logging.handlers.TimedRotatingFileHandler(
                filename=str(log_file),
                when='midnight',
                interval=1,
                backupCount=retention_days,
                encoding='utf-8'
            )
        else:
            file_handler = logging.FileHandler(str(log_file), encoding='utf-8')

        # File gets everything
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        return file_handler

    @classmethod
    def get_instance(
        cls,
        level: str = "INFO",
        log_file: Optional[Path] = None,
        console: bool = True,
        rotation: str = "daily",
        retention_days: int = 30,
    ) -> 'GatekeeperLogger':
        """
        Get the process-wide logger, creating it on first use.

        Arguments only take effect on the first call; use configure() to
        replace the handlers afterwards.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(
                        level=level,
                        log_file=log_file,
                        console=console,
                        rotation=rotation,
                        retention_days=retention_days,
                    )
        return cls._instance

    @classmethod
    def configure(
        cls,
        level: str = "INFO",
        log_file: Optional[Path] = None,
        console: bool = True,
        rotation: str = "daily",
        retention_days: int = 30,
    ) -> 'GatekeeperLogger':
        """Replace the process-wide logger with one using the given settings."""
        with cls._lock:
            cls._instance = cls(
                level=level,
                log_file=log_file,
                console=console,
                rotation=rotation,
                retention_days=retention_days,
            )
        return cls._instance

    def _merge_context(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge LogContext into kwargs['extra']; explicit extra wins."""
        context = LogContext.get_context()
        if not context:
            return kwargs

        kwargs = kwargs.copy()
        kwargs['extra'] = {**context, **kwargs.get('extra', {})}
        return kwargs

    def debug(self, message: str, **kwargs):
        kwargs = self._merge_context(kwargs)
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        kwargs = self._merge_context(kwargs)
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        kwargs = self._merge_context(kwargs)
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        kwargs = self._merge_context(kwargs)
        self.logger.error(message, **kwargs)

    def critical(self, message: str, **kwargs):
        kwargs = self._merge_context(kwargs)
        self.logger.critical(message, **kwargs)
