"""
Tests for logging infrastructure and context propagation.
"""

import json
import threading
import time

from gatekeeper.infrastructure.logging import (
    GatekeeperLogger,
    LogContext,
    logging_context,
)


class TestGatekeeperLogger:
    """Test suite for GatekeeperLogger."""

    def test_singleton_pattern(self):
        """Test get_instance returns the same logger."""
        assert GatekeeperLogger.get_instance() is GatekeeperLogger.get_instance()

    def test_configure_replaces_instance(self, tmp_path):
        """Test configure installs a new instance with new handlers."""
        before = GatekeeperLogger.get_instance()

        after = GatekeeperLogger.configure(log_file=tmp_path / "a.log", console=False)

        assert after is not before
        assert GatekeeperLogger.get_instance() is after

    def test_console_output(self, capsys):
        """Test console output goes to stderr in human-readable form."""
        logger = GatekeeperLogger.configure(level="INFO", console=True)

        logger.info("Limits loaded")

        captured = capsys.readouterr()
        assert " - INFO - Limits loaded" in captured.err

    def test_json_file_with_extra_fields(self, tmp_path):
        """Test file records are JSON and carry extra fields."""
        log_file = tmp_path / "gatekeeper.log"
        logger = GatekeeperLogger.configure(log_file=log_file, console=False, rotation="none")

        logger.warning("Connection denied", extra={"violated_scope": "global", "limit": 2})

        record = json.loads(log_file.read_text().strip())
        assert record["message"] == "Connection denied"
        assert record["level"] == "WARNING"
        assert record["violated_scope"] == "global"
        assert record["limit"] == 2
        assert "timestamp" in record

    def test_context_merged_explicit_extra_wins(self, tmp_path):
        """Test context fields are merged and explicit extra takes precedence."""
        log_file = tmp_path / "gatekeeper.log"
        logger = GatekeeperLogger.configure(log_file=log_file, console=False, rotation="none")

        with logging_context(user_id="alice", connection_id="c-1"):
            logger.info("Checking", extra={"connection_id": "c-2"})

        record = json.loads(log_file.read_text().strip())
        assert record["user_id"] == "alice"
        assert record["connection_id"] == "c-2"

    def test_level_filtering(self, tmp_path, capsys):
        """Test console honours the configured level."""
        logger = GatekeeperLogger.configure(level="WARNING", console=True)

        logger.info("hidden")
        logger.error("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err


class TestLogContext:
    """Test suite for LogContext."""

    def test_set_get_clear(self):
        """Test basic field management."""
        LogContext.set("user_id", "alice")
        LogContext.update({"group_id": "g-1"})

        assert LogContext.get("user_id") == "alice"
        assert LogContext.get_context() == {"user_id": "alice", "group_id": "g-1"}

        LogContext.clear()
        assert LogContext.get_context() == {}

    def test_get_context_is_copy(self):
        """Test mutating the returned dict does not change the context."""
        LogContext.set("user_id", "alice")

        LogContext.get_context()["user_id"] = "mallory"

        assert LogContext.get("user_id") == "alice"

    def test_nested_context_restores_outer_value(self):
        """Test a nested block shadows and then restores a field."""
        with logging_context(operation="outer", user_id="alice"):
            with logging_context(operation="inner"):
                assert LogContext.get("operation") == "inner"
                assert LogContext.get("user_id") == "alice"
            assert LogContext.get("operation") == "outer"

        assert LogContext.get_context() == {}

    def test_context_cleaned_on_exception(self):
        """Test fields are removed even when the block raises."""
        try:
            with logging_context(connection_id="c-1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert LogContext.get("connection_id") is None

    def test_thread_isolation(self):
        """Test each thread sees only its own fields."""
        LogContext.set("user_id", "main")
        seen = {}

        def worker(i):
            LogContext.set("user_id", f"user-{i}")
            time.sleep(0.01)
            seen[i] = LogContext.get("user_id")

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert seen == {0: "user-0", 1: "user-1", 2: "user-2"}
        assert LogContext.get("user_id") == "main"
