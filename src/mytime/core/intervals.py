"""Pure interval arithmetic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

DAY_LENGTH = timedelta(hours=24)


@dataclass(frozen=True)
class TimeInterval:
    """A half-open span of time [start, end)."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() / 60)

    def format(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')} ({self.duration_minutes()} min)"

    def contains(self, dt: datetime) -> bool:
        """Check if a datetime falls within this interval."""
        return self.start <= dt < self.end

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps with another. Abutting intervals do not."""
        return self.start < other.end and other.start < self.end


def day_window(day: date, tz: tzinfo | None = None) -> TimeInterval:
    """The 24h window [00:00, 00:00 + 24h) for a calendar day."""
    day_start = datetime.combine(day, time(0, 0), tzinfo=tz)
    return TimeInterval(start=day_start, end=day_start + DAY_LENGTH)


def at_time(day: date, t: time, tz: tzinfo | None = None) -> datetime:
    """Resolve a time-of-day onto a concrete day."""
    return datetime.combine(day, t.replace(tzinfo=None), tzinfo=tz)


def merge_intervals(intervals: list[TimeInterval]) -> list[TimeInterval]:
    """
    Merge overlapping or abutting intervals.

    Pure function - no I/O.

    Returns an ascending, non-overlapping list.
    """
    merged: list[TimeInterval] = []
    for interval in sorted(intervals, key=lambda i: i.start):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            if interval.end > last.end:
                merged[-1] = TimeInterval(start=last.start, end=interval.end)
        else:
            merged.append(interval)
    return merged


def find_overlaps(intervals: list[TimeInterval]) -> list[tuple[TimeInterval, TimeInterval]]:
    """
    Find overlapping pairs.

    Returns list of (interval1, interval2) tuples that overlap.
    Pure function - no I/O.
    """
    overlaps = []
    ordered = sorted(intervals, key=lambda i: i.start)

    for i, a in enumerate(ordered):
        for b in ordered[i + 1 :]:
            # b starts at or after a ends - no more overlaps possible
            if b.start >= a.end:
                break
            overlaps.append((a, b))

    return overlaps
