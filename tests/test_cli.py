"""Tests for the mytime CLI."""

import json
from datetime import date
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mytime.cli import main
from mytime.config import Config


@pytest.fixture
def config(tmp_path):
    return Config(data_file=str(tmp_path / "schedule.json"), suggestion_days=1)


@pytest.fixture
def run(config):
    runner = CliRunner()

    def _run(*args: str):
        with patch("mytime.cli.load_config", return_value=config):
            return runner.invoke(main, list(args))
    return _run


class TestInterestCommands:
    def test_add_and_list(self, run):
        result = run("interest", "add", "Reading", "-m", "30", "-p", "5")
        assert result.exit_code == 0
        assert "Added Reading" in result.output

        listing = run("interest", "list", "--json")
        data = json.loads(listing.output)
        assert [i["name"] for i in data] == ["Reading"]
        assert data[0]["time_slot"] == "any"

    def test_preference_out_of_range(self, run):
        result = run("interest", "add", "Reading", "-m", "30", "-p", "9")
        assert result.exit_code != 0

    def test_zero_duration_rejected(self, run):
        result = run("interest", "add", "Nothing", "-m", "0")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_remove_unknown(self, run):
        result = run("interest", "remove", "nope")
        assert result.exit_code == 1
        assert "No interest with id nope" in result.output


class TestDayCommand:
    def test_day_shows_suggestions(self, run):
        run("interest", "add", "Reading", "-m", "30", "-p", "5")

        result = run("day", "--date", "2025-01-15", "--json")

        data = json.loads(result.output)
        assert len(data) == 12
        assert all(item["suggested"] for item in data)
        assert data[0]["start"] == "2025-01-15T07:00:00"

    def test_day_text_output(self, run):
        run("interest", "add", "Reading", "-m", "30", "-p", "5")
        run("task", "add", "Dinner", "--start", "2025-01-15 19:00", "-m", "60")

        result = run("day", "--date", "2025-01-15")

        assert "### Wednesday, January 15" in result.output
        assert "[ ] 19:00-20:00 Dinner" in result.output
        assert "[~] 07:00-07:30 Reading" in result.output

    def test_empty_day(self, run):
        result = run("day", "--date", "2025-01-15")
        assert "Nothing planned." in result.output


class TestTaskCommands:
    def test_conflict_reported(self, run):
        run("task", "add", "Dinner", "--start", "2025-01-15 19:00", "-m", "60")

        result = run("task", "add", "Call", "--start", "2025-01-15 19:30", "-m", "30")

        assert result.exit_code == 1
        assert "overlaps 'Dinner'" in result.output

    def test_done_and_profile_stats(self, run, config):
        start = f"{date.today().isoformat()} 19:00"
        run("task", "add", "Gym", "--start", start, "-m", "90")
        task_id = json.loads(run("task", "list", "--json").output)[0]["id"]

        result = run("task", "done", task_id)

        assert result.exit_code == 0
        assert "Completed tasks: 1 (1.5 h)" in run("profile", "show").output

    def test_remove_unknown(self, run):
        result = run("task", "remove", "nope")
        assert result.exit_code == 1
        assert "No task with id nope" in result.output


class TestProfileCommands:
    def test_set_and_show(self, run):
        result = run("profile", "set", "--sleep", "23:00-06:30", "--work", "10:00-17:00")
        assert result.exit_code == 0

        shown = run("profile", "show").output
        assert "Sleep: 23:00-06:30" in shown
        assert "Work:  10:00-17:00" in shown

    def test_bad_hours(self, run):
        result = run("profile", "set", "--work", "nine-to-five")
        assert result.exit_code == 1
        assert "Error:" in result.output
