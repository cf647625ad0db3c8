"""Schedule repository interface."""

from typing import Protocol

from mytime.core.interests import Interest
from mytime.core.tasks import Profile, Task


class ScheduleRepository(Protocol):
    """Interface for loading and saving tasks, interests and the profile."""

    def load_tasks(self) -> list[Task]:
        """Load all tasks, suggestions included."""
        ...

    def save_tasks(self, tasks: list[Task]) -> None:
        """Replace all stored tasks."""
        ...

    def load_interests(self) -> list[Interest]:
        """Load interests in their original order."""
        ...

    def save_interests(self, interests: list[Interest]) -> None:
        """Replace all stored interests."""
        ...

    def load_profile(self) -> Profile | None:
        """Load the profile. Returns None if none was saved."""
        ...

    def save_profile(self, profile: Profile) -> None:
        """Overwrite the stored profile."""
        ...
