"""Error types raised by cadence.

The scheduling loop itself has no failure surface: task errors are contained
and logged. These types cover the seams around it (channel closure,
configuration and schedule parsing).
"""

from __future__ import annotations

from typing import Any


class CadenceError(Exception):
    """Base class for cadence errors."""


class ChannelClosed(CadenceError):
    """Raised by a control channel once it has been closed and drained."""

    def __init__(self, name: str = "control"):
        self.name = name
        super().__init__(f"{name} channel is closed")


class ConfigError(CadenceError):
    """Configuration file could not be read or failed validation."""

    def __init__(self, message: str, details: Any | None = None):
        self.details = details
        super().__init__(message)


class ScheduleParseError(CadenceError, ValueError):
    """A weekday or time-of-day string could not be understood."""

    def __init__(self, kind: str, value: str):
        self.kind = kind
        self.value = value
        super().__init__(f"Invalid {kind}: {value!r}")
