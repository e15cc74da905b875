"""Wall-clock sources used by schedule policies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta


class Clock(ABC):
    """Source of the current local time."""

    @abstractmethod
    def now(self) -> datetime:
        """Get the current local time as a naive datetime."""
        ...


class SystemClock(Clock):
    """The host's local wall clock."""

    def now(self) -> datetime:
        return datetime.now()


class FrozenClock(Clock):
    """Clock that only moves when told to.

    Usage:
        clock = FrozenClock(datetime(2024, 1, 3, 9, 0))
        policy = WeeklyPolicy(clock=clock)
        clock.advance(timedelta(hours=4))
    """

    def __init__(self, moment: datetime):
        self._moment = moment

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime) -> None:
        """Jump to an absolute moment."""
        self._moment = moment

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward by delta."""
        self._moment += delta
