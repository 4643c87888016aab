"""
Injectable time source for ``dateAnalyzed``.

The analysis service takes a Clock in its constructor and never reads the
wall clock itself, so tests can pin the timestamp in the profile.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

DEFAULT_FIXED_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):
    @abstractmethod
    def now_utc(self) -> datetime:
        """Current time, timezone-aware, in UTC."""


class SystemClock(Clock):
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """Returns a pinned instant until advanced."""

    def __init__(self, fixed_time: datetime | None = None):
        self._current = (fixed_time or DEFAULT_FIXED_TIME).astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._current

    def advance(self, seconds: int = 1) -> None:
        self._current += timedelta(seconds=seconds)
