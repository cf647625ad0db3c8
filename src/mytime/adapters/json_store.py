"""JSON file schedule storage adapter."""

import json
import logging
from pathlib import Path

from mytime.core.interests import Interest
from mytime.core.tasks import Profile, Task

logger = logging.getLogger(__name__)


class JsonScheduleStore:
    """
    JSON file schedule storage.

    Implements ScheduleRepository protocol. Tasks, interests and the profile
    live side by side in one document.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable schedule file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_key(self, key: str, value) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def load_tasks(self) -> list[Task]:
        """Load all tasks, skipping malformed records."""
        tasks = []
        for item in self._read().get("tasks", []):
            try:
                tasks.append(Task.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed task record: {e}")
        return tasks

    def save_tasks(self, tasks: list[Task]) -> None:
        self._write_key("tasks", [t.to_dict() for t in tasks])

    def load_interests(self) -> list[Interest]:
        """Load interests in stored order, skipping malformed records."""
        interests = []
        for item in self._read().get("interests", []):
            try:
                interests.append(Interest.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed interest record: {e}")
        return interests

    def save_interests(self, interests: list[Interest]) -> None:
        self._write_key("interests", [i.to_dict() for i in interests])

    def load_profile(self) -> Profile | None:
        """Load the profile. Returns None if not found."""
        data = self._read().get("profile")
        if not data:
            return None
        try:
            return Profile.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed profile record: {e}")
            return None

    def save_profile(self, profile: Profile) -> None:
        self._write_key("profile", profile.to_dict())
