"""Functional core - pure business logic with no I/O."""

from .intervals import TimeInterval, day_window, merge_intervals, find_overlaps
from .interests import Interest, TimeOfDay, filter_by_time_of_day, rank_interests
from .tasks import Task, Profile, filter_fixed, filter_tasks_by_date, find_conflicting
from .suggestions import (
    MIN_SLOT,
    Suggestion,
    compute_busy_intervals,
    compute_free_slots,
    pack_interests,
    recompute_day,
    recompute_range,
    days_from,
)

__all__ = [
    # Intervals
    "TimeInterval",
    "day_window",
    "merge_intervals",
    "find_overlaps",
    # Interests
    "Interest",
    "TimeOfDay",
    "filter_by_time_of_day",
    "rank_interests",
    # Tasks
    "Task",
    "Profile",
    "filter_fixed",
    "filter_tasks_by_date",
    "find_conflicting",
    # Suggestions
    "MIN_SLOT",
    "Suggestion",
    "compute_busy_intervals",
    "compute_free_slots",
    "pack_interests",
    "recompute_day",
    "recompute_range",
    "days_from",
]
