"""Control channel used by hosts to reschedule a running Runner."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..core.errors import ChannelClosed

InputT = TypeVar("InputT")

_CLOSED = object()


@dataclass(frozen=True)
class ScheduleUpdate(Generic[InputT]):
    """A new schedule input, or None to disable the schedule."""

    schedule: InputT | None

    @property
    def disables(self) -> bool:
        return self.schedule is None


class ControlChannel(Generic[InputT]):
    """Unbounded FIFO of schedule updates with a single consumer.

    Any number of producers may call send()/disable(); sending never blocks
    and is not acknowledged. Updates sent before close() are still delivered,
    after which receive() raises ChannelClosed.
    """

    def __init__(self, name: str = "control"):
        self.name = name
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closing = False
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether close() was called."""
        return self._closing

    def send(self, schedule: InputT | None) -> None:
        """Push a new schedule input. None is the same as disable().

        Raises:
            ChannelClosed: If the channel was closed.
        """
        if self._closing:
            raise ChannelClosed(self.name)
        self._queue.put_nowait(ScheduleUpdate(schedule))

    def disable(self) -> None:
        """Push the disabling marker."""
        self.send(None)

    def close(self) -> None:
        """Stop accepting updates. Idempotent."""
        if self._closing:
            return
        self._closing = True
        self._queue.put_nowait(_CLOSED)

    def pending(self) -> int:
        """Number of updates waiting to be received."""
        return self._queue.qsize() - (1 if self._closing and not self._closed else 0)

    async def receive(self) -> ScheduleUpdate[InputT]:
        """Wait for the next update.

        Raises:
            ChannelClosed: Once the channel is closed and drained.
        """
        if self._closed:
            raise ChannelClosed(self.name)

        item = await self._queue.get()
        if item is _CLOSED:
            self._closed = True
            raise ChannelClosed(self.name)
        return item
