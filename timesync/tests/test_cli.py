"""
Tests for the timesync CLI.
"""

import json
import logging

import pytest
from typer.testing import CliRunner

from timesync.cli.main import app
from timesync.cli.commands.simulate import parse_steps

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    """simulate reconfigures the root logger; put it back after each test."""
    monkeypatch.delenv("TIMESYNC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TIMESYNC_LOG_FORMAT", raising=False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_parse_steps():
    assert parse_steps(["2", "intro", "1.5", "nan"]) == [2.0, "intro", 1.5, "nan"]


def test_simulate_json(monkeypatch):
    """Override with preserve timing, settled and persisted."""
    monkeypatch.delenv("TIMESYNC_FPS", raising=False)

    result = runner.invoke(app, ["simulate", "2", "a", "--set", "a=3", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["events"] == [
        {"name": "a", "initialTime": 2.0, "targetTime": 5.0, "offset": 3.0, "frame": 150}
    ]
    assert data["snapshot"] == [{"name": "a", "targetTime": 5.0}]
    assert data["writes"] == 2
    assert data["unknown"] == []


def test_simulate_from_snapshot():
    """Saved target times are honoured on the first pass."""
    result = runner.invoke(
        app,
        ["simulate", "4", "a", "--fps", "10", "--snapshot", '[{"name": "a", "targetTime": 5}]', "--json"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["events"][0]["offset"] == 1.0
    assert data["events"][0]["frame"] == 50
    assert data["writes"] == 0


def test_simulate_no_preserve_shifts_later_events():
    result = runner.invoke(
        app,
        ["simulate", "1", "a", "1", "b", "--fps", "10", "--set", "a=2", "--no-preserve", "--json"],
    )

    assert result.exit_code == 0, result.output
    events = {e["name"]: e for e in json.loads(result.output)["events"]}
    assert events["a"]["targetTime"] == 3.0
    assert events["b"]["initialTime"] == 4.0
    assert events["b"]["targetTime"] == 4.0


def test_simulate_reports_unknown_override():
    result = runner.invoke(app, ["simulate", "1", "a", "--set", "zzz=1", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["unknown"] == ["zzz"]


def test_simulate_table_output():
    result = runner.invoke(app, ["simulate", "1", "intro", "--fps", "10"])

    assert result.exit_code == 0, result.output
    assert "intro" in result.output
    assert "Snapshot writes" in result.output


def test_simulate_bad_snapshot():
    result = runner.invoke(app, ["simulate", "1", "a", "--snapshot", "[1]", "--json"])

    assert result.exit_code == 2
    assert "record 0" in json.loads(result.output)["error"]


def test_simulate_bad_override():
    result = runner.invoke(app, ["simulate", "1", "a", "--set", "a", "--json"])

    assert result.exit_code == 2
    assert "NAME=SECONDS" in json.loads(result.output)["error"]


def test_snapshot_check_valid():
    result = runner.invoke(app, ["snapshot", "check", '[{"name": "a", "targetTime": 5}]', "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["valid"] is True
    assert data["events"] == [{"name": "a", "targetTime": 5.0}]


def test_snapshot_check_invalid():
    result = runner.invoke(app, ["snapshot", "check", '[{"name": "a"}]'])

    assert result.exit_code == 2
    assert "Invalid snapshot" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "timesync" in result.output


def test_simulate_logs_collision_as_json(monkeypatch):
    """Duplicate event names are reported through the configured JSON log."""
    monkeypatch.setenv("TIMESYNC_LOG_FORMAT", "json")

    result = runner.invoke(app, ["simulate", "1", "a", "a", "--fps", "10"])

    assert result.exit_code == 0, result.output
    records = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    errors = [r for r in records if r["level"] == "ERROR"]
    assert len(errors) == 1
    assert errors[0]["event_name"] == "a"
    assert errors[0]["trace_id"] == "cli"
    assert 'name "a" has already been used' in errors[0]["message"]
