"""Ports - interfaces/protocols for external dependencies."""

from .schedule_repo import ScheduleRepository

__all__ = [
    "ScheduleRepository",
]
