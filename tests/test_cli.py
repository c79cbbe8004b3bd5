"""
Tests for the command line interface.
"""

import json

from typer.testing import CliRunner

from doctorslots.cli.app import app


runner = CliRunner()


def test_expand_weekly():
    result = runner.invoke(app, ["expand", "weekly", "sunday", "wednesday", "--now", "2024-09-04T00:00:00Z"])

    assert result.exit_code == 0
    assert "2024-09-08T00:00:00Z" in result.output
    assert "2024-09-04T00:00:00Z" in result.output
    assert "2 date(s)" in result.output


def test_expand_weekly_repeat():
    result = runner.invoke(app, ["expand", "weekly", "monday", "--repeat", "--now", "2024-09-04T00:00:00Z"])

    assert result.exit_code == 0
    assert "52 date(s)" in result.output


def test_expand_weekly_unknown_day():
    result = runner.invoke(app, ["expand", "weekly", "funday"])

    assert result.exit_code == 1
    assert "Unknown weekday name" in result.output


def test_expand_monthly():
    result = runner.invoke(app, ["expand", "monthly", "2024-01-31T00:00:00Z", "--repeat"])

    assert result.exit_code == 0
    assert "2024-02-29T00:00:00Z" in result.output
    assert "12 date(s)" in result.output


def test_upcoming_with_sample_data():
    result = runner.invoke(app, ["upcoming", "dr-rahman", "--now", "2030-01-07T10:00:00Z"])

    assert result.exit_code == 0
    assert "2 slot(s) on 2030-01-07" in result.output
    assert "Today" in result.output


def test_upcoming_shows_location_address():
    result = runner.invoke(app, ["upcoming", "dr-rahman", "--now", "2030-01-07T10:00:00Z"])

    assert result.exit_code == 0
    assert "Panthapath" in result.output


def test_upcoming_rejects_unparseable_date():
    result = runner.invoke(app, ["upcoming", "dr-rahman", "--date", "someday"])

    assert result.exit_code == 1
    assert "Could not parse --date" in result.output


def test_upcoming_skips_non_object_rows(tmp_path):
    path = tmp_path / "schedules.json"
    path.write_text(json.dumps({
        "locations": [{"id": "loc-1", "name": "Clinic", "address": "Road 2", "city": "Sylhet"}],
        "schedules": [
            "x",
            None,
            {"id": "s-1", "doctor_id": "dr-a", "location_id": "loc-1", "date": "2030-01-07",
             "start_time": "9:00", "end_time": "11:00"},
        ],
    }), encoding="utf-8")

    result = runner.invoke(app, ["upcoming", "dr-a", "--data", str(path), "--now", "2030-01-07T08:00:00Z"])

    assert result.exit_code == 0
    assert "1 slot(s) on 2030-01-07" in result.output


def test_upcoming_without_slots():
    result = runner.invoke(app, ["upcoming", "dr-nobody", "--now", "2030-01-07T10:00:00Z"])

    assert result.exit_code == 0
    assert "No upcoming schedules" in result.output


def test_add_writes_data_file(tmp_path):
    path = tmp_path / "schedules.json"
    path.write_text(json.dumps({
        "locations": [{"id": "loc-1", "name": "Clinic", "address": "Road 2", "city": "Sylhet"}],
        "schedules": [],
    }), encoding="utf-8")

    result = runner.invoke(app, [
        "add", "dr-a",
        "--location", "loc-1",
        "--start", "9:00",
        "--end", "11:00",
        "--day", "monday",
        "--data", str(path),
        "--now", "2024-09-04T00:00:00Z",
    ])

    assert result.exit_code == 0
    assert "1 schedule(s) created" in result.output
    rows = json.loads(path.read_text(encoding="utf-8"))["schedules"]
    assert len(rows) == 1
    assert rows[0]["date"].startswith("2024-09-09")
    assert rows[0]["doctor_id"] == "dr-a"


def test_add_requires_day_or_date(tmp_path):
    result = runner.invoke(app, [
        "add", "dr-a",
        "--location", "loc-1",
        "--start", "9:00",
        "--end", "11:00",
        "--data", str(tmp_path / "schedules.json"),
    ])

    assert result.exit_code == 1


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "doctorslots" in result.output
