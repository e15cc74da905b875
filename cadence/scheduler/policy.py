"""Schedule policies.

A policy turns a schedule input into the time left until the next trigger,
measured from the instant it is evaluated. Two policies ship here:

- WeeklyPolicy: fixed weekday and time of day
- HourlyPolicy: fixed number of hours, None meaning disabled
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from enum import IntEnum
from typing import Generic, TypeVar

from ..core.errors import ScheduleParseError
from .clock import Clock, SystemClock

InputT = TypeVar("InputT")


class Weekday(IntEnum):
    """Day of the week, numbered like datetime.weekday()."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: str | int | Weekday) -> Weekday:
        """Parse a weekday from a name, abbreviation or number.

        Args:
            value: 'Wednesday', 'wed', 2 or Weekday.WEDNESDAY.

        Returns:
            The matching Weekday.

        Raises:
            ScheduleParseError: If the value names no weekday.
        """
        if isinstance(value, Weekday):
            return value

        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ScheduleParseError("weekday", str(value)) from None

        if not isinstance(value, str):
            raise ScheduleParseError("weekday", value)

        text = value.strip().lower()
        for day in cls:
            name = day.name.lower()
            if text == name or (len(text) >= 3 and name.startswith(text)):
                return day

        raise ScheduleParseError("weekday", value)

    @property
    def label(self) -> str:
        return self.name.capitalize()


def parse_time(value: str | time) -> time:
    """Parse a time of day in 'HH:MM' or 'HH:MM:SS' form.

    Raises:
        ScheduleParseError: If the text is not a valid time.
    """
    if isinstance(value, time):
        return value

    if not isinstance(value, str):
        raise ScheduleParseError("time", value)

    text = value.strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue

    raise ScheduleParseError("time", value)


@dataclass(frozen=True)
class WeeklySchedule:
    """Input for WeeklyPolicy.

    Attributes:
        weekday: Day the trigger fires on.
        time: Local time of day the trigger fires at.
    """

    weekday: Weekday
    time: time

    @classmethod
    def parse(cls, weekday: str | int | Weekday, time_of_day: str | time) -> WeeklySchedule:
        """Build a schedule from loosely typed values."""
        return cls(weekday=Weekday.parse(weekday), time=parse_time(time_of_day))

    def __str__(self) -> str:
        return f"{self.weekday.label} {self.time.strftime('%H:%M')}"


class Policy(ABC, Generic[InputT]):
    """Computes the time until the next trigger for a schedule input.

    Policies read the clock but hold no other state, so two calls with the
    same input differ only by the time that passed in between.
    """

    def __init__(self, clock: Clock | None = None):
        """Initialize policy.

        Args:
            clock: Time source. Defaults to the local wall clock.
        """
        self.clock = clock or SystemClock()

    @abstractmethod
    def next(self, schedule: InputT) -> timedelta | None:
        """Time from now until the next trigger.

        Args:
            schedule: Policy specific schedule input.

        Returns:
            Non-negative delay, or None if the input disables the schedule.
        """
        ...

    def next_fire_at(self, schedule: InputT) -> datetime | None:
        """Local datetime of the next trigger, or None if disabled."""
        now = self.clock.now()
        delay = self.next(schedule)
        if delay is None:
            return None
        return now + delay


class WeeklyPolicy(Policy[WeeklySchedule]):
    """Fires once a week on a fixed weekday and time.

    If today is the scheduled weekday and the time has already passed (or is
    exactly now), the trigger moves to the same weekday next week. Otherwise
    it is the nearest matching date, which may be today.
    """

    def next(self, schedule: WeeklySchedule) -> timedelta:
        now = self.clock.now()
        target = now.date()

        if now.weekday() == schedule.weekday and now.time() >= schedule.time:
            target += timedelta(weeks=1)
        else:
            target += timedelta(days=(schedule.weekday - now.weekday()) % 7)

        return datetime.combine(target, schedule.time) - now


class HourlyPolicy(Policy[int | None]):
    """Fires every N hours; None disables it.

    Zero or negative intervals are outside the contract and clamp to an
    immediate trigger.
    """

    def next(self, schedule: int | None) -> timedelta | None:
        if schedule is None:
            return None
        return timedelta(hours=max(0, schedule))
