"""Pure interest domain logic - no I/O dependencies."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


class TimeOfDay(str, Enum):
    """Coarse bucket restricting when an interest may be suggested."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANY = "any"

    @classmethod
    def parse(cls, value: "str | TimeOfDay | None") -> "TimeOfDay":
        """Parse a tag; unrecognized values fall back to ANY."""
        if isinstance(value, TimeOfDay):
            return value
        if not value:
            return cls.ANY
        return _TAG_ALIASES.get(value.strip().lower(), cls.ANY)

    def matches(self, dt: datetime) -> bool:
        """Check if a start time falls inside this bucket."""
        hours = _TAG_HOURS.get(self)
        if hours is None:
            return True
        start_hour, end_hour = hours
        return start_hour <= dt.hour < end_hour


_TAG_HOURS = {
    TimeOfDay.MORNING: (6, 12),
    TimeOfDay.AFTERNOON: (12, 18),
    TimeOfDay.EVENING: (18, 23),
}

# Italian labels come from data written by the original mobile app
_TAG_ALIASES = {
    "morning": TimeOfDay.MORNING,
    "mattina": TimeOfDay.MORNING,
    "afternoon": TimeOfDay.AFTERNOON,
    "pomeriggio": TimeOfDay.AFTERNOON,
    "evening": TimeOfDay.EVENING,
    "sera": TimeOfDay.EVENING,
    "any": TimeOfDay.ANY,
}


@dataclass
class Interest:
    """A personal interest the engine can suggest in free time."""

    name: str
    preferred_duration: timedelta
    preference_level: int
    time_of_day: TimeOfDay = TimeOfDay.ANY
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if self.preferred_duration <= timedelta(0):
            raise ValueError(f"Interest '{self.name}' needs a positive duration")
        if not 1 <= self.preference_level <= 5:
            raise ValueError(
                f"Interest '{self.name}' preference must be 1-5, got {self.preference_level}"
            )
        self.time_of_day = TimeOfDay.parse(self.time_of_day)

    def duration_minutes(self) -> int:
        return int(self.preferred_duration.total_seconds() / 60)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.preferred_duration.total_seconds(),
            "preference_level": self.preference_level,
            "time_slot": self.time_of_day.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Interest":
        """Create Interest from a stored record."""
        return cls(
            id=data.get("id") or uuid.uuid4().hex,
            name=data["name"],
            preferred_duration=timedelta(seconds=data["duration"]),
            preference_level=int(data.get("preference_level", 3)),
            time_of_day=TimeOfDay.parse(data.get("time_slot")),
        )


def filter_by_time_of_day(interests: list[Interest], at: datetime) -> list[Interest]:
    """Filter to interests whose time-of-day tag accepts a start at `at`."""
    return [i for i in interests if i.time_of_day.matches(at)]


def rank_interests(interests: list[Interest]) -> list[Interest]:
    """
    Sort interests by preference level (descending).

    Pure function - no I/O. Stable, so ties keep input order.
    """
    return sorted(interests, key=lambda i: -i.preference_level)
