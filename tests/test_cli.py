"""Tests for the countdown CLI layer."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import click.testing
import pytest

from countdown.cli.main import EXIT_INTERRUPTED, cli


@pytest.fixture()
def runner() -> click.testing.CliRunner:
    """Return a Click CliRunner for invoking CLI commands."""
    return click.testing.CliRunner()


# ---------------------------------------------------------------------------
# countdown format
# ---------------------------------------------------------------------------


class TestFormatCommand:
    """Tests for ``countdown format <duration>``."""

    @pytest.mark.parametrize("value", ["3725", "3725.9", "62:05", "01:02:05", "1h2m5s", "1H2M5S"])
    def test_renders_hms(self, runner: click.testing.CliRunner, value: str) -> None:
        result = runner.invoke(cli, ["format", value])
        assert result.exit_code == 0
        assert result.output.strip() == "01:02:05"

    def test_hours_not_wrapped(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["format", "30h"])
        assert result.output.strip() == "30:00:00"

    @pytest.mark.parametrize("value", ["abc", "1:2:3:4", "1x", "5m10", "inf", ""])
    def test_invalid_duration(self, runner: click.testing.CliRunner, value: str) -> None:
        result = runner.invoke(cli, ["format", value])
        assert result.exit_code == 2

    def test_negative_duration(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["format", "--", "-5"])
        assert result.exit_code == 2

    def test_missing_argument(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["format"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# countdown run
# ---------------------------------------------------------------------------


class TestRunCommand:
    """Tests for ``countdown run <duration>``."""

    def test_runs_to_completion(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run", "0.05", "--interval", "0.005"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "00:00:00"
        assert lines[-1] == "Finished"

    def test_quiet_only_reports_completion(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run", "0.05", "--interval", "0.005", "--quiet"])
        assert result.exit_code == 0
        assert result.output.strip() == "Finished"

    def test_interval_from_environment(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(
            cli, ["run", "0.05", "--quiet"], env={"COUNTDOWN_RUN_INTERVAL": "0.005"}
        )
        assert result.exit_code == 0
        assert "Finished" in result.output

    def test_zero_duration_never_starts(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run", "0"])
        assert result.exit_code == 0
        assert "Nothing to count down" in result.output
        assert "Finished" not in result.output

    def test_invalid_interval(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run", "10", "--interval", "0"])
        assert result.exit_code == 2

    @patch("countdown.cli.main.TimerDriver.wait_finished")
    def test_interrupt_pauses_and_exits(
        self, mock_wait: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        mock_wait.side_effect = KeyboardInterrupt
        result = runner.invoke(cli, ["run", "1h"])
        assert result.exit_code == EXIT_INTERRUPTED
        assert "Stopped at 00:59:59" in result.output or "Stopped at 01:00:00" in result.output


# ---------------------------------------------------------------------------
# countdown --version / --verbose
# ---------------------------------------------------------------------------


class TestGroupOptions:
    def test_version_output(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @patch("countdown.cli.main.configure_logging")
    def test_verbose_enables_debug_logging(
        self, mock_configure: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        result = runner.invoke(cli, ["-v", "format", "10"])
        assert result.exit_code == 0
        mock_configure.assert_called_once_with(True)
