"""Configuration management for mytime."""

import logging
import os
from dataclasses import dataclass
from datetime import time
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.tasks import Profile

logger = logging.getLogger(__name__)

MYTIME_HOME = Path(os.environ.get("MYTIME_HOME", Path.home() / "mytime"))
CONFIG_FILE = MYTIME_HOME / "config" / "mytime.conf"
DATA_DIR = MYTIME_HOME / "data"


@dataclass
class Config:
    """mytime configuration."""

    data_file: str = ""
    timezone: str = ""
    suggestion_days: int = 3
    skip_occupied_days: bool = False
    sleep_hours: str = "22:00-07:00"
    work_hours: str = "09:00-18:00"

    def data_path(self) -> Path:
        """Resolve the schedule file from config."""
        if self.data_file:
            return Path(self.data_file).expanduser()
        return DATA_DIR / "schedule.json"

    def tzinfo(self) -> ZoneInfo | None:
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.timezone!r}, using local time")
            return None

    def default_profile(self) -> Profile:
        """Profile seeded with the configured sleep/work hours."""
        profile = Profile()
        profile.sleep_start, profile.sleep_end = parse_hours(self.sleep_hours)
        profile.work_start, profile.work_end = parse_hours(self.work_hours)
        return profile


def parse_hours(value: str) -> tuple[time, time]:
    """Parse "HH:MM-HH:MM" into a (start, end) pair of times."""
    start_str, sep, end_str = value.partition("-")
    if not sep:
        raise ValueError(f"Expected HH:MM-HH:MM, got {value!r}")
    return time.fromisoformat(start_str.strip()), time.fromisoformat(end_str.strip())


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(path: Path | None = None) -> Config:
    """Load configuration from mytime.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value[:1] in ('"', "'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "data_file":
                config.data_file = value
            case "timezone":
                config.timezone = value
            case "suggestion_days":
                try:
                    config.suggestion_days = max(1, int(value))
                except ValueError:
                    logger.warning(f"Invalid SUGGESTION_DAYS: {value}")
            case "skip_occupied_days":
                config.skip_occupied_days = _parse_bool(value)
            case "sleep_hours" | "work_hours":
                try:
                    parse_hours(value)
                except ValueError as e:
                    logger.warning(f"Invalid {key.upper()}: {e}")
                    continue
                setattr(config, key, value)

    return config
