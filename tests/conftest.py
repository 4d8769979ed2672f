"""Shared fixtures for Gatekeeper tests."""

import os

import pytest

from gatekeeper.infrastructure.config.config_loader import ConfigLoader
from gatekeeper.infrastructure.logging import GatekeeperLogger, LogContext


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep host config files, GATEKEEPER_* variables and log context out of tests."""
    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_PATHS", [])
    for key in list(os.environ):
        if key.startswith(ConfigLoader.ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.setenv("GATEKEEPER_LOGGING_CONSOLE", "false")
    monkeypatch.chdir(tmp_path)

    GatekeeperLogger.configure(console=False)
    LogContext.clear()
    yield
    LogContext.clear()
