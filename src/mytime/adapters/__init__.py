"""Adapters - I/O implementations of ports."""

from .json_store import JsonScheduleStore

__all__ = [
    "JsonScheduleStore",
]
