"""Schedule store - owns tasks, interests and profile, recomputes suggestions.

Every mutation runs under one lock, then replaces the suggestions of the
affected day(s) wholesale and saves through the repository.
"""

import logging
import threading
from datetime import date, time, timedelta, tzinfo
from typing import Callable

from .core.interests import Interest
from .core.suggestions import Suggestion, days_from, recompute_day, recompute_range
from .core.tasks import (
    Profile,
    Task,
    filter_fixed,
    filter_tasks_by_date,
    find_conflicting,
    sort_tasks_by_start,
)
from .ports.schedule_repo import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleError(Exception):
    """Base error for rejected schedule mutations."""

    pass


class TaskConflictError(ScheduleError):
    """Raised when a new task overlaps an existing real task."""

    pass


class TaskNotFoundError(ScheduleError):
    """Raised when no task has the given id."""

    pass


class InterestNotFoundError(ScheduleError):
    """Raised when no interest has the given id."""

    pass


class ScheduleStore:
    """
    Single-writer owner of the schedule.

    Suggestions are derived data: they are dropped and regenerated for a day
    whenever something that feeds that day changes.
    """

    def __init__(
        self,
        repo: ScheduleRepository,
        default_profile: Profile | None = None,
        horizon_days: int = 3,
        skip_occupied_days: bool = False,
        tz: tzinfo | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.repo = repo
        self.horizon_days = horizon_days
        self.skip_occupied_days = skip_occupied_days
        self.tz = tz
        self._today = today
        self._lock = threading.RLock()
        self._tasks: list[Task] = [_localize(t, tz) for t in repo.load_tasks()]
        self._interests: list[Interest] = repo.load_interests()
        self._profile: Profile = repo.load_profile() or default_profile or Profile()

    @property
    def tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    @property
    def interests(self) -> list[Interest]:
        with self._lock:
            return list(self._interests)

    @property
    def profile(self) -> Profile:
        return self._profile

    def horizon(self) -> list[date]:
        """Days covered by range recomputation: today plus the next few."""
        return days_from(self._today(), self.horizon_days)

    # ============== Tasks ==============

    def add_task(self, task: Task) -> Task:
        """Add a real task and regenerate suggestions around it."""
        if task.is_suggested:
            raise ValueError("Suggested tasks are generated, not added")
        with self._lock:
            _localize(task, self.tz)
            conflicts = find_conflicting(self._tasks, task)
            if conflicts:
                raise TaskConflictError(
                    f"'{task.name}' overlaps '{conflicts[0].name}' at {conflicts[0].format_time()}"
                )
            self._tasks.append(task)
            logger.info(f"Added task '{task.name}' on {task.day}")
            self._recompute_days(task.days_spanned())
            self._save_tasks()
        return task

    def remove_task(self, task_id: str) -> Task:
        with self._lock:
            task = self._find_task(task_id)
            self._tasks = [t for t in self._tasks if t.id != task_id]
            logger.info(f"Removed task '{task.name}' on {task.day}")
            self._recompute_days(task.days_spanned())
            self._save_tasks()
        return task

    def complete_task(self, task_id: str) -> Task:
        """Mark a task done and credit its hours to the profile."""
        with self._lock:
            task = self._find_task(task_id)
            if task.is_completed:
                return task
            task.is_completed = True
            self._profile.completed_tasks += 1
            self._profile.total_hours += task.duration.total_seconds() / 3600
            self._save_tasks()
            self.repo.save_profile(self._profile)
        return task

    def tasks_on(self, day: date) -> list[Task]:
        """All tasks starting on a day, suggestions included, by start time."""
        with self._lock:
            return sort_tasks_by_start(filter_tasks_by_date(self._tasks, day))

    def suggestions_on(self, day: date) -> list[Task]:
        return [t for t in self.tasks_on(day) if t.is_suggested]

    # ============== Interests ==============

    def add_interest(self, interest: Interest) -> Interest:
        with self._lock:
            self._interests.append(interest)
            logger.info(f"Added interest '{interest.name}'")
            self.repo.save_interests(self._interests)
            self._recompute_horizon()
        return interest

    def remove_interest(self, interest_id: str) -> Interest:
        with self._lock:
            interest = self._find_interest(interest_id)
            self._interests = [i for i in self._interests if i.id != interest_id]
            logger.info(f"Removed interest '{interest.name}'")
            self.repo.save_interests(self._interests)
            self._recompute_horizon()
        return interest

    def update_interest(self, interest: Interest) -> Interest:
        """Replace the interest with the same id, keeping its position."""
        with self._lock:
            self._find_interest(interest.id)
            self._interests = [interest if i.id == interest.id else i for i in self._interests]
            logger.info(f"Updated interest '{interest.name}'")
            self.repo.save_interests(self._interests)
            self._recompute_horizon()
        return interest

    # ============== Profile ==============

    def update_profile(
        self,
        sleep_start: time | None = None,
        sleep_end: time | None = None,
        work_start: time | None = None,
        work_end: time | None = None,
        nickname: str | None = None,
    ) -> Profile:
        """Edit profile fields; boundary edits regenerate the horizon."""
        boundaries = {
            "sleep_start": sleep_start,
            "sleep_end": sleep_end,
            "work_start": work_start,
            "work_end": work_end,
        }
        with self._lock:
            changed = False
            for name, value in boundaries.items():
                if value is not None and value != getattr(self._profile, name):
                    setattr(self._profile, name, value)
                    changed = True
            if nickname is not None:
                self._profile.nickname = nickname
            self.repo.save_profile(self._profile)
            if changed:
                logger.info("Sleep/work hours changed")
                self._recompute_horizon()
        return self._profile

    # ============== Recomputation ==============

    def refresh(self, days: list[date] | None = None) -> dict[date, list[Task]]:
        """Regenerate suggestions for the given days (default: the horizon)."""
        with self._lock:
            replaced = self._recompute_range(days or self.horizon())
            self._save_tasks()
        return {day: self.suggestions_on(day) for day in replaced}

    def _recompute_days(self, days: list[date]) -> None:
        """Single-day recompute for each day, swapped in together."""
        self._replace_suggestions(
            {
                day: recompute_day(day, self._profile, self._tasks, self._interests, tz=self.tz)
                for day in days
            }
        )

    def _recompute_range(self, days: list[date]) -> list[date]:
        results = recompute_range(
            days,
            self._profile,
            self._tasks,
            self._interests,
            skip_if_occupied=self.skip_occupied_days,
            tz=self.tz,
        )
        self._replace_suggestions(results)
        return list(results)

    def _recompute_horizon(self) -> None:
        self._recompute_range(self.horizon())
        self._save_tasks()

    def _replace_suggestions(self, results: dict[date, list[Suggestion]]) -> None:
        """Swap in new suggestions for every day in results."""
        kept = [t for t in self._tasks if not (t.is_suggested and t.day in results)]
        fresh = [s.to_task() for suggestions in results.values() for s in suggestions]
        self._tasks = kept + fresh
        logger.debug(f"Replaced suggestions for {len(results)} day(s): {len(fresh)} new")

    def _save_tasks(self) -> None:
        self.repo.save_tasks(self._tasks)

    def _find_task(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(f"No task with id {task_id}")

    def _find_interest(self, interest_id: str) -> Interest:
        for interest in self._interests:
            if interest.id == interest_id:
                return interest
        raise InterestNotFoundError(f"No interest with id {interest_id}")


def fixed_tasks_between(tasks: list[Task], start: date, days: int) -> list[Task]:
    """Real tasks starting in [start, start + days)."""
    end = start + timedelta(days=days)
    return sort_tasks_by_start([t for t in filter_fixed(tasks) if start <= t.day < end])


def _localize(task: Task, tz: tzinfo | None) -> Task:
    """Read a naive start in the store's timezone so it compares with the day window."""
    if tz is not None and task.start.tzinfo is None:
        task.start = task.start.replace(tzinfo=tz)
    return task
