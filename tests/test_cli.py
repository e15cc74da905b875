"""Tests for the command line interface."""

import json

from click.testing import CliRunner

from cadence.cli.main import cli


def write_config(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return str(path)


class TestNextCommand:
    """Tests for `cadence next`."""

    def test_hourly_json(self):
        result = CliRunner().invoke(cli, ["next", "--every-hours", "3", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["in_seconds"] == 10800
        assert data["schedule"] == "every 3h"
        assert data["fires_in"] == "3h"

    def test_weekly(self):
        result = CliRunner().invoke(cli, ["next", "--weekday", "wed", "--time", "13:00"])

        assert result.exit_code == 0, result.output
        assert "NEXT TRIGGER" in result.output
        assert "Wednesday 13:00" in result.output

    def test_requires_exactly_one_schedule(self):
        runner = CliRunner()

        assert runner.invoke(cli, ["next"]).exit_code == 2
        assert runner.invoke(
            cli, ["next", "--weekday", "wed", "--every-hours", "1"]
        ).exit_code == 2

    def test_invalid_weekday(self):
        result = CliRunner().invoke(cli, ["next", "--weekday", "someday"])

        assert result.exit_code == 2
        assert "weekday" in result.output

    def test_zero_hours_rejected(self):
        result = CliRunner().invoke(cli, ["next", "--every-hours", "0"])

        assert result.exit_code == 2


class TestStatusCommand:
    """Tests for `cadence status`."""

    def test_json(self, tmp_path):
        path = write_config(
            tmp_path, {"weekly_report": {"weekday": "fri", "time": "17:30"}}
        )

        result = CliRunner().invoke(cli, ["--config", path, "status", "--json"])

        assert result.exit_code == 0, result.output
        data = {s["name"]: s for s in json.loads(result.output)}
        assert data["weekly_report"]["schedule"] == "Friday 17:30"
        assert data["hourly"]["schedule"] == "disabled"
        assert data["hourly"]["fires_at"] is None

    def test_table(self, tmp_path):
        path = write_config(tmp_path, {"hourly": {"interval_hours": 2}})

        result = CliRunner().invoke(cli, ["--config", path, "status"])

        assert result.exit_code == 0, result.output
        assert "every 2h" in result.output
        assert "Sunday 10:00" in result.output

    def test_invalid_config(self, tmp_path):
        path = write_config(tmp_path, {"hourly": {"interval_hours": -1}})

        result = CliRunner().invoke(cli, ["--config", path, "status"])

        assert result.exit_code == 1


class TestRunCommand:
    """Tests for `cadence run`."""

    def test_runs_for_duration(self, tmp_path):
        path = write_config(tmp_path, {"weekly_report": {"enabled": False}})

        result = CliRunner().invoke(
            cli, ["--config", path, "run", "--every-hours", "1", "--duration", "0.05"]
        )

        assert result.exit_code == 0, result.output
        assert "Weekly report: disabled" in result.output
        assert "Hourly: every 1h" in result.output
        assert "Shutdown complete." in result.output

    def test_weekly_override(self, tmp_path):
        path = write_config(tmp_path, {})

        result = CliRunner().invoke(
            cli, ["--config", path, "run", "--weekday", "tue", "--duration", "0"]
        )

        assert result.exit_code == 0, result.output
        assert "Weekly report: Tuesday 10:00" in result.output

    def test_invalid_time(self, tmp_path):
        path = write_config(tmp_path, {})

        result = CliRunner().invoke(
            cli, ["--config", path, "run", "--time", "99:99", "--duration", "0"]
        )

        assert result.exit_code == 2
