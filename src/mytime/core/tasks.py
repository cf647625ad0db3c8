"""Pure task and profile domain logic - no I/O dependencies."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from .intervals import TimeInterval

SUGGESTION_DESCRIPTION = "Suggested from your interests"


@dataclass
class Task:
    """A fixed appointment, or a suggestion when is_suggested is set."""

    name: str
    start: datetime
    duration: timedelta
    description: str = ""
    location: str = ""
    is_completed: bool = False
    is_suggested: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if self.duration <= timedelta(0):
            raise ValueError(f"Task '{self.name}' needs a positive duration")

    @property
    def end(self) -> datetime:
        return self.start + self.duration

    @property
    def day(self) -> date:
        return self.start.date()

    def interval(self) -> TimeInterval:
        return TimeInterval(start=self.start, end=self.end)

    def days_spanned(self) -> list[date]:
        """Calendar days the task occupies; an end exactly at midnight adds no day."""
        last = (self.end - timedelta(microseconds=1)).date()
        return [self.day + timedelta(days=n) for n in range((last - self.day).days + 1)]

    def format_time(self) -> str:
        """Format the task time for display."""
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "duration": self.duration.total_seconds(),
            "location": self.location,
            "start_time": self.start.isoformat(),
            "is_completed": self.is_completed,
            "is_suggested": self.is_suggested,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a stored record."""
        return cls(
            id=data.get("id") or uuid.uuid4().hex,
            name=data["name"],
            description=data.get("description", ""),
            duration=timedelta(seconds=data["duration"]),
            location=data.get("location", ""),
            start=datetime.fromisoformat(data["start_time"]),
            is_completed=data.get("is_completed", False),
            is_suggested=data.get("is_suggested", False),
        )


@dataclass
class Profile:
    """User profile: daily sleep/work boundaries plus progress counters."""

    nickname: str = ""
    completed_tasks: int = 0
    total_hours: float = 0.0
    sleep_start: time = time(22, 0)
    sleep_end: time = time(7, 0)
    work_start: time = time(9, 0)
    work_end: time = time(18, 0)

    def to_dict(self) -> dict:
        return {
            "nickname": self.nickname,
            "completed_tasks": self.completed_tasks,
            "total_hours": self.total_hours,
            "sleep_start": self.sleep_start.strftime("%H:%M"),
            "sleep_end": self.sleep_end.strftime("%H:%M"),
            "work_start": self.work_start.strftime("%H:%M"),
            "work_end": self.work_end.strftime("%H:%M"),
        }

    @classmethod
    def from_dict(cls, data: dict, defaults: "Profile | None" = None) -> "Profile":
        """Create Profile from a stored record, falling back to defaults per field."""
        base = defaults or cls()

        def _time(key: str, fallback: time) -> time:
            value = data.get(key)
            return time.fromisoformat(value) if value else fallback

        return cls(
            nickname=data.get("nickname", base.nickname),
            completed_tasks=data.get("completed_tasks", base.completed_tasks),
            total_hours=data.get("total_hours", base.total_hours),
            sleep_start=_time("sleep_start", base.sleep_start),
            sleep_end=_time("sleep_end", base.sleep_end),
            work_start=_time("work_start", base.work_start),
            work_end=_time("work_end", base.work_end),
        )


def filter_fixed(tasks: list[Task]) -> list[Task]:
    """Filter out suggestions, leaving real commitments."""
    return [t for t in tasks if not t.is_suggested]


def filter_tasks_by_date(tasks: list[Task], target_date: date) -> list[Task]:
    """Filter to tasks whose start falls on a date."""
    return [t for t in tasks if t.day == target_date]


def sort_tasks_by_start(tasks: list[Task]) -> list[Task]:
    """Sort tasks by start time."""
    return sorted(tasks, key=lambda t: t.start)


def find_conflicting(tasks: list[Task], candidate: Task) -> list[Task]:
    """
    Find real tasks that overlap a candidate.

    Suggestions never conflict; they are regenerated around the candidate.
    Pure function - no I/O.
    """
    window = candidate.interval()
    return [t for t in filter_fixed(tasks) if t.id != candidate.id and t.interval().overlaps(window)]
