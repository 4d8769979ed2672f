"""
Tests for the CLI commands.

Runs the real Typer app against temporary configuration files.
"""

import yaml
from typer.testing import CliRunner

from gatekeeper.adapters.cli.main import app


class TestCLI:
    """Test suite for CLI commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def write_config(self, tmp_path, data):
        path = tmp_path / "gatekeeper.yaml"
        path.write_text(yaml.dump(data))
        return str(path)

    def test_limits_shows_effective_values(self, tmp_path):
        """Test limits command prints each limit, 0 as unlimited."""
        config_path = self.write_config(tmp_path, {
            "limits": {"default_max_connections_per_user": 1},
        })

        result = self.runner.invoke(app, ["limits", "--config", config_path])

        assert result.exit_code == 0
        assert "default_max_connections_per_user: 1" in result.output
        assert "absolute_max_connections: unlimited" in result.output
        assert "user_required: false" in result.output

    def test_limits_reports_configuration_error(self, tmp_path):
        """Test an invalid properties file exits 1 with a friendly message."""
        properties = tmp_path / "gateway.properties"
        properties.write_text("default-max-connections: many\n")
        config_path = self.write_config(tmp_path, {
            "source": {"properties_file": str(properties)},
        })

        result = self.runner.invoke(app, ["limits", "--config", config_path])

        assert result.exit_code == 1
        assert "Invalid concurrency limit configuration" in result.output

    def test_check_admitted(self, tmp_path):
        """Test check exits 0 when every scope has room."""
        config_path = self.write_config(tmp_path, {
            "limits": {"default_max_connections": 5},
        })

        result = self.runner.invoke(app, [
            "check", "--connection", "c-1", "--user", "alice",
            "--active-connection", "4", "--config", config_path,
        ])

        assert result.exit_code == 0
        assert "connection: 4 active / 5" in result.output
        assert "ADMITTED" in result.output

    def test_check_denied_global_first(self, tmp_path):
        """Test global limit is reported even when the connection has headroom."""
        config_path = self.write_config(tmp_path, {
            "limits": {"absolute_max_connections": 2, "default_max_connections": 5},
        })

        result = self.runner.invoke(app, [
            "check", "--connection", "c-1", "--user", "alice",
            "--active-total", "2", "--config", config_path,
        ])

        assert result.exit_code == 2
        assert "DENIED" in result.output
        assert "GlobalLimitExceeded" in result.output

    def test_check_uses_overrides_and_group(self, tmp_path):
        """Test group scopes and per-user group overrides are shown and applied."""
        config_path = self.write_config(tmp_path, {
            "overrides": {"user_groups": {"alice": {"g-1": 1}}},
        })

        result = self.runner.invoke(app, [
            "check", "--connection", "c-1", "--user", "alice", "--group", "g-1",
            "--active-user-group", "1", "--config", config_path,
        ])

        assert result.exit_code == 2
        assert "user_group: 1 active / 1" in result.output
        assert "UserGroupLimitExceeded" in result.output

    def test_check_rejects_negative_counts(self):
        """Test live counts must be non-negative."""
        result = self.runner.invoke(app, [
            "check", "--connection", "c-1", "--user", "alice", "--active-total", "-1",
        ])

        assert result.exit_code != 0

    def test_config_init_and_show(self, tmp_path):
        """Test config --init writes a file that --show can read back."""
        path = str(tmp_path / "generated.yaml")

        init = self.runner.invoke(app, ["config", "--init", "--path", path])
        show = self.runner.invoke(app, ["config", "--show", "--path", path])

        assert init.exit_code == 0
        assert "Configuration file created" in init.output
        assert show.exit_code == 0
        assert "absolute_max_connections: 0" in show.output

    def test_config_info(self):
        """Test config without flags lists locations and env overrides."""
        result = self.runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "Default Locations" in result.output
        assert "GATEKEEPER_LOGGING_CONSOLE" in result.output
