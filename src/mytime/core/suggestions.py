"""
Free-time suggestion engine - pure functions, no I/O.

Builds the busy intervals of a day from sleep/work boundaries and real tasks,
extracts the free slots left over, and greedily packs them with interests.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo

from .interests import Interest, filter_by_time_of_day, rank_interests
from .intervals import DAY_LENGTH, TimeInterval, at_time, day_window, merge_intervals
from .tasks import SUGGESTION_DESCRIPTION, Profile, Task, filter_fixed

logger = logging.getLogger(__name__)

MIN_SLOT = timedelta(seconds=900)


@dataclass
class Suggestion:
    """An interest placed into a free slot."""

    start: datetime
    end: datetime
    interest_name: str
    interest_id: str = ""
    is_suggested: bool = field(default=True, init=False)

    def interval(self) -> TimeInterval:
        return TimeInterval(start=self.start, end=self.end)

    def to_task(self) -> Task:
        return Task(
            name=self.interest_name,
            start=self.start,
            duration=self.interval().duration,
            description=SUGGESTION_DESCRIPTION,
            is_suggested=True,
        )


def compute_busy_intervals(
    day: date,
    sleep_start: time,
    sleep_end: time,
    work_start: time,
    work_end: time,
    user_tasks: list[Task],
    tz: tzinfo | None = None,
) -> list[TimeInterval]:
    """
    Merge a day's fixed commitments into sorted, non-overlapping busy intervals.

    Sleep may cross midnight (sleep_end <= sleep_start); when it does, last
    night's block also covers the early hours of `day`. Work never wraps: an
    end at or before the start just drops the work block.
    """
    blocks: list[TimeInterval] = []

    sleep_from = at_time(day, sleep_start, tz)
    sleep_to = at_time(day, sleep_end, tz)
    if sleep_end <= sleep_start:
        blocks.append(TimeInterval(start=sleep_from - DAY_LENGTH, end=sleep_to))
        blocks.append(TimeInterval(start=sleep_from, end=sleep_to + DAY_LENGTH))
    else:
        blocks.append(TimeInterval(start=sleep_from, end=sleep_to))

    if work_end > work_start:
        blocks.append(TimeInterval(start=at_time(day, work_start, tz), end=at_time(day, work_end, tz)))

    blocks.extend(t.interval() for t in filter_fixed(user_tasks))

    return merge_intervals(blocks)


def compute_free_slots(
    day: date,
    busy_intervals: list[TimeInterval],
    tz: tzinfo | None = None,
) -> list[TimeInterval]:
    """
    Find free slots of at least MIN_SLOT between busy intervals.

    Pure function - no I/O.

    Args:
        day: Calendar day; the window is [00:00, 00:00 + 24h)
        busy_intervals: Sorted, merged busy intervals (see compute_busy_intervals)
        tz: Timezone for the window (defaults to the intervals' own)

    Returns:
        Ascending list of free TimeIntervals
    """
    if tz is None and busy_intervals:
        tz = busy_intervals[0].start.tzinfo
    window = day_window(day, tz)

    free_slots = []
    cursor = window.start

    for busy in busy_intervals:
        if busy.start > cursor:
            gap_end = min(busy.start, window.end)
            if gap_end - cursor >= MIN_SLOT:
                free_slots.append(TimeInterval(start=cursor, end=gap_end))
        cursor = max(cursor, busy.end)

    if window.end - cursor >= MIN_SLOT:
        free_slots.append(TimeInterval(start=cursor, end=window.end))

    return free_slots


def _next_fit(interests: list[Interest], cursor: datetime, remaining: timedelta) -> Interest | None:
    """Highest-ranked interest allowed at `cursor` that fits in `remaining`."""
    for interest in rank_interests(filter_by_time_of_day(interests, cursor)):
        if timedelta(0) < interest.preferred_duration <= remaining:
            return interest
    return None


def pack_interests(free_slots: list[TimeInterval], interests: list[Interest]) -> list[Suggestion]:
    """
    Greedily fill each free slot with interests.

    Each placement moves the cursor, so the time-of-day filter and the ranking
    are redone before the next pick. An interest can be placed any number of
    times. Slots are filled independently and a slot may keep a remainder
    shorter than every interest.
    """
    suggestions = []

    for slot in free_slots:
        cursor = slot.start
        remaining = slot.duration

        while (interest := _next_fit(interests, cursor, remaining)) is not None:
            end = cursor + interest.preferred_duration
            suggestions.append(
                Suggestion(start=cursor, end=end, interest_name=interest.name, interest_id=interest.id)
            )
            cursor = end
            remaining -= interest.preferred_duration

    return suggestions


def recompute_day(
    day: date,
    profile: Profile,
    user_tasks: list[Task],
    interests: list[Interest],
    tz: tzinfo | None = None,
) -> list[Suggestion]:
    """
    Regenerate the suggestions for one day from scratch.

    Existing suggestions in `user_tasks` are ignored, never treated as busy.
    """
    window = day_window(day, tz)
    fixed = [t for t in filter_fixed(user_tasks) if t.interval().overlaps(window)]

    busy = compute_busy_intervals(
        day,
        profile.sleep_start,
        profile.sleep_end,
        profile.work_start,
        profile.work_end,
        fixed,
        tz=tz,
    )
    free_slots = compute_free_slots(day, busy, tz=tz)
    suggestions = pack_interests(free_slots, interests)

    logger.debug(
        f"{day}: {len(fixed)} tasks, {len(busy)} busy, {len(free_slots)} free, "
        f"{len(suggestions)} suggestions"
    )
    return suggestions


def recompute_range(
    days: list[date],
    profile: Profile,
    user_tasks: list[Task],
    interests: list[Interest],
    skip_if_occupied: bool = False,
    tz: tzinfo | None = None,
) -> dict[date, list[Suggestion]]:
    """
    Regenerate suggestions for each day in `days`.

    With skip_if_occupied, a day that already holds any task (real or
    suggested) is left out of the result, so the caller leaves it untouched.
    """
    results: dict[date, list[Suggestion]] = {}
    for day in days:
        if skip_if_occupied and any(t.day == day for t in user_tasks):
            logger.debug(f"{day}: occupied, skipping")
            continue
        results[day] = recompute_day(day, profile, user_tasks, interests, tz=tz)
    return results


def days_from(start: date, count: int) -> list[date]:
    """Contiguous span of `count` days beginning at `start`."""
    return [start + timedelta(days=offset) for offset in range(count)]
