"""Cancellable one-shot timer for the scheduling loop."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

from ..core.utils import utc_now


class CancellableTimer:
    """A single pending delay that can be replaced or dropped at any time.

    Only one sleep is ever live: arm() cancels the previous one first.
    Waiting on an unarmed timer blocks until the waiter is cancelled.

    Usage:
        timer = CancellableTimer()
        timer.arm(timedelta(seconds=5))
        waiter = timer.wait()   # awaitable, finishes after 5s
        timer.cancel()          # waiter never finishes now
    """

    def __init__(self) -> None:
        self._sleep: asyncio.Task | None = None
        self._deadline: datetime | None = None

    @property
    def armed(self) -> bool:
        """Whether a delay is currently pending."""
        return self._sleep is not None and not self._sleep.done()

    @property
    def deadline(self) -> datetime | None:
        """UTC time the pending delay elapses at."""
        return self._deadline if self.armed else None

    def arm(self, duration: timedelta) -> None:
        """Start a new delay, cancelling any pending one.

        Args:
            duration: How long to wait. Negative values fire immediately.
        """
        self.cancel()

        seconds = max(0.0, duration.total_seconds())
        self._deadline = utc_now() + timedelta(seconds=seconds)
        self._sleep = asyncio.ensure_future(asyncio.sleep(seconds))

    def cancel(self) -> None:
        """Drop the pending delay without blocking."""
        if self._sleep is not None and not self._sleep.done():
            self._sleep.cancel()
        self._sleep = None
        self._deadline = None

    def wait(self) -> asyncio.Future:
        """Future that resolves when the current delay elapses.

        The returned future belongs to this arming only; after cancel() or a
        new arm() it is cancelled and never resolves.
        """
        if self._sleep is None:
            return asyncio.get_running_loop().create_future()
        return self._sleep
