"""
Unit Tests for run.py Entry Script.

Tests individual actions with mocked process boundaries.
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from run import main, validate_project_root


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


class TestValidateProjectRoot:
    """Tests for validate_project_root."""

    def test_succeeds_when_marker_exists(self, tmp_path):
        (tmp_path / ".project_root").touch()

        with patch("run.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_exits_when_marker_missing(self, tmp_path):
        with patch("run.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()

        assert exc_info.value.code == 1


class TestMainCLI:
    """Tests for the click entry point."""

    def test_help_displays_usage(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Notekeeper Entry Point" in result.output
        assert "--action" in result.output

    def test_info_action(self, runner):
        result = runner.invoke(main, ["--action", "info"])

        assert result.exit_code == 0
        assert "Notekeeper 0.1.0" in result.output
        assert "Available Actions:" in result.output

    def test_verbose_flag_sets_info_logging(self, runner):
        with patch("run.setup_logging") as mock_setup:
            runner.invoke(main, ["--action", "info", "--verbose"])

        assert mock_setup.call_args.kwargs["level"] == "INFO"

    def test_debug_flag_sets_debug_logging(self, runner):
        with patch("run.setup_logging") as mock_setup:
            runner.invoke(main, ["--action", "info", "--debug"])

        assert mock_setup.call_args.kwargs["level"] == "DEBUG"

    def test_config_action_displays_sections(self, runner):
        result = runner.invoke(main, ["--action", "config"])

        assert result.exit_code == 0
        assert "Application Settings" in result.output
        assert "Security Settings" in result.output
        assert "max_limit" in result.output

    def test_health_action_runs_checks(self, runner):
        result = runner.invoke(main, ["--action", "health"])

        assert result.exit_code == 0, result.output
        assert "Health Check Results" in result.output
        assert "Tables: notes" in result.output

    def test_server_action_uses_configured_host(self, runner):
        with patch("run.subprocess.run") as mock_run:
            result = runner.invoke(main, ["--action", "server", "--port", "9001"])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert "notekeeper.backend.main:app" in cmd
        assert cmd[cmd.index("--host") + 1] == "127.0.0.1"
        assert cmd[cmd.index("--port") + 1] == "9001"

    def test_test_action_targets_test_type(self, runner):
        with patch("run.subprocess.run") as mock_run:
            mock_run.return_value.returncode = 0
            result = runner.invoke(main, ["--action", "test", "--test-type", "unit"])

        assert result.exit_code == 0
        assert "tests/unit" in mock_run.call_args.args[0]
