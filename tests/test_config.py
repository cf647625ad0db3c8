"""Tests for configuration loading."""

from datetime import time
from pathlib import Path

import pytest

from mytime.config import DATA_DIR, Config, load_config, parse_hours


class TestParseHours:
    def test_parses_pair(self):
        assert parse_hours("22:00-07:00") == (time(22, 0), time(7, 0))

    def test_tolerates_spaces(self):
        assert parse_hours(" 09:30 - 17:45 ") == (time(9, 30), time(17, 45))

    @pytest.mark.parametrize("value", ["0900", "25:00-07:00", "nine-five"])
    def test_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            parse_hours(value)


class TestLoadConfig:
    def test_missing_file_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()

    def test_reads_values(self, tmp_path):
        path = tmp_path / "mytime.conf"
        path.write_text(
            "\n".join(
                [
                    "# mytime settings",
                    'DATA_FILE="~/plans/schedule.json"  # where data lives',
                    "TIMEZONE=Europe/Rome",
                    "SUGGESTION_DAYS=5",
                    "SKIP_OCCUPIED_DAYS=yes",
                    "SLEEP_HOURS=23:30-06:30",
                    "WORK_HOURS='08:00-16:00'",
                    "not a setting",
                ]
            )
        )

        config = load_config(path)

        assert config.data_file == "~/plans/schedule.json"
        assert config.timezone == "Europe/Rome"
        assert config.suggestion_days == 5
        assert config.skip_occupied_days is True
        assert config.sleep_hours == "23:30-06:30"
        assert config.work_hours == "08:00-16:00"

    def test_bad_values_keep_defaults(self, tmp_path, caplog):
        path = tmp_path / "mytime.conf"
        path.write_text("SUGGESTION_DAYS=lots\nWORK_HOURS=whenever\n")

        config = load_config(path)

        assert config.suggestion_days == 3
        assert config.work_hours == "09:00-18:00"
        assert "WORK_HOURS" in caplog.text


class TestConfig:
    def test_data_path_default(self):
        assert Config().data_path() == DATA_DIR / "schedule.json"

    def test_data_path_expands_user(self):
        path = Config(data_file="~/plans/s.json").data_path()
        assert path == Path.home() / "plans" / "s.json"

    def test_default_profile_from_hours(self):
        profile = Config(sleep_hours="23:00-06:00", work_hours="10:00-19:00").default_profile()

        assert (profile.sleep_start, profile.sleep_end) == (time(23, 0), time(6, 0))
        assert (profile.work_start, profile.work_end) == (time(10, 0), time(19, 0))

    def test_unknown_timezone_falls_back(self):
        assert Config(timezone="Nowhere/Special").tzinfo() is None
        assert Config().tzinfo() is None
