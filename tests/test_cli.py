"""
Tests for the command line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from weekslots import __version__
from weekslots.cli.app import app

runner = CliRunner()

RECORDS = [
    {
        "kind": "opening",
        "starts_at": "2014-08-04T09:30:00",
        "ends_at": "2014-08-04T12:30:00",
        "weekly_recurring": True,
    },
    {
        "kind": "appointment",
        "starts_at": "2014-08-11T10:30:00",
        "ends_at": "2014-08-11T11:30:00",
    },
]


@pytest.fixture
def config_file(tmp_path):
    events = tmp_path / "events.json"
    events.write_text(json.dumps(RECORDS), encoding="utf-8")

    path = tmp_path / "config.yaml"
    path.write_text("events_file: events.json\nlog_level: ERROR\n", encoding="utf-8")
    return path


def test_show_json(config_file):
    result = runner.invoke(app, ["show", "--date", "2014-08-10", "--config", str(config_file), "--json"])

    assert result.exit_code == 0
    days = json.loads(result.stdout)
    assert len(days) == 7
    assert days[0] == {"date": "2014-08-10", "slots": []}
    assert days[1] == {"date": "2014-08-11", "slots": ["9:30", "10:00", "11:30", "12:00"]}
    assert days[6]["date"] == "2014-08-16"


def test_show_table(config_file):
    result = runner.invoke(app, ["show", "--date", "2014-08-10", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "2014-08-11" in result.stdout
    assert "2014-08-16" in result.stdout


def test_show_events_option_overrides_config(config_file, tmp_path):
    other = tmp_path / "other.json"
    other.write_text("[]", encoding="utf-8")

    result = runner.invoke(
        app,
        ["show", "--date", "2014-08-10", "--config", str(config_file), "--events", str(other), "--json"],
    )

    assert result.exit_code == 0
    assert all(day["slots"] == [] for day in json.loads(result.stdout))


def test_show_invalid_date(config_file):
    result = runner.invoke(app, ["show", "--date", "10.08.2014", "--config", str(config_file)])

    assert result.exit_code == 1


def test_show_missing_config(tmp_path):
    result = runner.invoke(app, ["show", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1


def test_show_unknown_timezone(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("timezone: Mars/Olympus\n", encoding="utf-8")

    result = runner.invoke(app, ["show", "--date", "2014-08-10", "--config", str(path)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)


def test_events_lists_records(config_file):
    result = runner.invoke(app, ["events", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "opening" in result.stdout
    assert "appointment" in result.stdout


def test_events_missing_file(config_file, tmp_path):
    result = runner.invoke(
        app, ["events", "--config", str(config_file), "--events", str(tmp_path / "missing.json")]
    )

    assert result.exit_code == 1


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout
