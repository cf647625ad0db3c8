"""Tests for core task logic."""

from datetime import date, datetime, time, timedelta

import pytest

from mytime.core.tasks import (
    Profile,
    Task,
    filter_fixed,
    filter_tasks_by_date,
    find_conflicting,
    sort_tasks_by_start,
)


# Fixtures
@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def make_task(today):
    """Factory for creating tasks."""
    def _make(name: str, hour: int, minutes: int = 60, suggested: bool = False, days: int = 0) -> Task:
        return Task(
            name=name,
            start=datetime.combine(today + timedelta(days=days), time(hour, 0)),
            duration=timedelta(minutes=minutes),
            is_suggested=suggested,
        )
    return _make


class TestTask:
    def test_end(self, make_task):
        task = make_task("Meeting", 14, 90)
        assert task.end.time() == time(15, 30)

    def test_format_time(self, make_task):
        assert make_task("Meeting", 14, 90).format_time() == "14:00-15:30"

    def test_rejects_non_positive_duration(self, today):
        with pytest.raises(ValueError):
            Task(name="Instant", start=datetime.combine(today, time(9, 0)), duration=timedelta(0))

    def test_ids_unique(self, make_task):
        assert make_task("a", 9).id != make_task("b", 9).id

    def test_days_spanned_single_day(self, make_task, today):
        assert make_task("Meeting", 14).days_spanned() == [today]

    def test_days_spanned_ending_at_midnight(self, make_task, today):
        assert make_task("Late", 23).days_spanned() == [today]

    def test_days_spanned_crossing_midnight(self, make_task, today):
        party = make_task("Party", 23, minutes=120)
        assert party.days_spanned() == [today, today + timedelta(days=1)]

    def test_from_dict(self):
        task = Task.from_dict(
            {
                "id": "t1",
                "name": "Dentist",
                "duration": 2700,
                "start_time": "2025-01-15T10:00:00",
                "is_suggested": False,
            }
        )

        assert task.id == "t1"
        assert task.end == datetime(2025, 1, 15, 10, 45)
        assert task.description == ""
        assert task.is_completed is False


class TestProfile:
    def test_defaults(self):
        profile = Profile()
        assert (profile.sleep_start, profile.sleep_end) == (time(22, 0), time(7, 0))
        assert (profile.work_start, profile.work_end) == (time(9, 0), time(18, 0))

    def test_from_dict_falls_back_per_field(self):
        defaults = Profile(work_start=time(8, 0))
        profile = Profile.from_dict({"sleep_start": "23:30", "nickname": "sam"}, defaults)

        assert profile.sleep_start == time(23, 30)
        assert profile.sleep_end == time(7, 0)
        assert profile.work_start == time(8, 0)
        assert profile.nickname == "sam"


class TestFilters:
    def test_filter_fixed(self, make_task):
        tasks = [make_task("Real", 9), make_task("Idea", 11, suggested=True)]
        assert [t.name for t in filter_fixed(tasks)] == ["Real"]

    def test_filter_by_date(self, make_task, today):
        tasks = [make_task("Today", 9), make_task("Tomorrow", 9, days=1)]
        assert [t.name for t in filter_tasks_by_date(tasks, today)] == ["Today"]

    def test_sort_by_start(self, make_task):
        tasks = [make_task("Late", 15), make_task("Early", 8)]
        assert [t.name for t in sort_tasks_by_start(tasks)] == ["Early", "Late"]


class TestFindConflicting:
    def test_overlap_with_real_task(self, make_task):
        existing = [make_task("Meeting", 10, 60)]
        assert find_conflicting(existing, make_task("Call", 10, 30)) == existing

    def test_suggestions_never_conflict(self, make_task):
        existing = [make_task("Reading", 10, 60, suggested=True)]
        assert find_conflicting(existing, make_task("Call", 10, 30)) == []

    def test_back_to_back_is_fine(self, make_task):
        existing = [make_task("Meeting", 10, 60)]
        assert find_conflicting(existing, make_task("Call", 11, 30)) == []
