"""Reconfigurable scheduling loop.

A Runner owns one cancellable timer and one control channel. Each loop
iteration races the timer against the next schedule update:

- update received: cancel the timer, re-evaluate the policy from now, arm
- disable received: cancel the timer and wait for updates only
- timer elapsed: run the task to completion, then re-arm with the same input

At most one timer is pending at any time, and a cancelled timer never
reaches the task.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Generic, TypeVar

from ..core.errors import ChannelClosed
from ..core.utils import format_duration, format_local, get_logger, utc_now
from .channel import ControlChannel, ScheduleUpdate
from .policy import Policy
from .task import Task
from .timer import CancellableTimer

logger = get_logger(__name__)

InputT = TypeVar("InputT")


class RunnerState(str, Enum):
    """Runner loop state."""

    IDLE = "idle"  # No timer, waiting for a schedule
    ARMED = "armed"  # Timer pending
    EXECUTING = "executing"  # Task in flight
    STOPPED = "stopped"


class ExecutionStatus(Enum):
    """Task execution outcome."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class ExecutionRecord:
    """Record of a task execution.

    Attributes:
        started_at: When the execution started.
        ended_at: When the execution ended.
        status: Final status.
        error: Error message if failed.
    """

    started_at: datetime
    ended_at: datetime | None = None
    status: ExecutionStatus = ExecutionStatus.RUNNING
    error: str | None = None

    @property
    def duration_seconds(self) -> float:
        """Get execution duration."""
        if self.ended_at is None:
            return (utc_now() - self.started_at).total_seconds()
        return (self.ended_at - self.started_at).total_seconds()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "started_at": self.started_at.isoformat(),
            "status": self.status.value,
            "duration": self.duration_seconds,
            "error": self.error,
        }


class Runner(Generic[InputT]):
    """Runs a task on a schedule that can be replaced while running.

    Usage:
        runner = Runner(WeeklyPolicy(), report_task)
        runner.start()

        # Any time later, from anywhere in the process
        runner.update(WeeklySchedule.parse("wed", "13:00"))
        runner.disable()

        await runner.stop()
    """

    def __init__(
        self,
        policy: Policy[InputT],
        task: Task,
        channel: ControlChannel[InputT] | None = None,
        *,
        name: str | None = None,
        max_history: int = 100,
    ):
        """Initialize runner.

        Args:
            policy: Computes the delay until the next trigger.
            task: Work to run on each trigger.
            channel: Control channel to consume. A private one is created
                if omitted.
            name: Name used in logs. Defaults to the task name.
            max_history: Max execution records to keep.
        """
        self.policy = policy
        self.task = task
        self.name = name or task.name
        self.channel: ControlChannel[InputT] = channel or ControlChannel(self.name)

        self.last_run: ExecutionRecord | None = None
        self.history: list[ExecutionRecord] = []
        self.executions = 0

        self._max_history = max_history
        self._timer = CancellableTimer()
        self._schedule: InputT | None = None
        self._state = RunnerState.IDLE
        self._loop_task: asyncio.Task | None = None
        self._in_loop = False
        self._stopping = False
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def schedule(self) -> InputT | None:
        """Schedule input currently in effect, None when idle."""
        return self._schedule

    @property
    def next_fire_at(self) -> datetime | None:
        """Local time of the pending trigger, like Policy.next_fire_at."""
        deadline = self._timer.deadline
        if deadline is None:
            return None
        return deadline.astimezone().replace(tzinfo=None)

    @property
    def running(self) -> bool:
        if self._loop_task is not None and not self._loop_task.done():
            return True
        return self._in_loop

    def update(self, schedule: InputT | None) -> None:
        """Send a new schedule input (None disables)."""
        self.channel.send(schedule)

    def disable(self) -> None:
        """Send the disabling marker."""
        self.channel.disable()

    async def run(self) -> None:
        """Scheduling loop.

        Runs until the channel is closed, stop() is called or the awaiting
        task is cancelled. A schedule held from an earlier run is re-armed
        from now.
        """
        receive: asyncio.Future | None = None
        self._in_loop = True
        self._stopping = False
        self._state = RunnerState.IDLE

        try:
            if self._schedule is not None:
                self._arm()

            while True:
                if receive is None:
                    receive = asyncio.ensure_future(self.channel.receive())

                fired = self._timer.wait()
                done, _ = await asyncio.wait(
                    {receive, fired}, return_when=asyncio.FIRST_COMPLETED
                )

                # An update wins over a simultaneous fire; the timer is being
                # replaced anyway.
                if receive in done:
                    fired.cancel()
                    update = receive.result()
                    receive = None
                    self._apply(update)
                    continue

                if fired.cancelled():
                    continue

                await self._execute()

                if self._stopping:
                    break

                self._arm()

        except ChannelClosed:
            logger.info(f"Control channel for '{self.name}' closed, stopping")

        finally:
            self._timer.cancel()
            if receive is not None and not receive.done():
                receive.cancel()
            self._state = RunnerState.STOPPED
            self._in_loop = False

    def _apply(self, update: ScheduleUpdate[InputT]) -> None:
        """Handle one schedule update: cancel, then arm from now."""
        self._timer.cancel()

        if update.disables:
            self._disable()
            return

        logger.debug(f"Got new {self.name} schedule", schedule=str(update.schedule))
        self._schedule = update.schedule
        self._arm()

    def _arm(self) -> None:
        """Arm the timer for the current schedule, measured from now."""
        if self._schedule is None:
            self._disable()
            return

        delay = self.policy.next(self._schedule)
        if delay is None:
            self._disable()
            return

        self._timer.arm(delay)
        self._state = RunnerState.ARMED

        logger.debug(
            f"Next scheduled {self.name} task in {format_duration(delay)} "
            f"({format_local(datetime.now() + max(delay, timedelta(0)))})"
        )

    def _disable(self) -> None:
        self._timer.cancel()
        self._schedule = None
        self._state = RunnerState.IDLE
        logger.debug(f"Schedule for {self.name} disabled")

    async def _execute(self) -> None:
        """Run the task once, containing any error it raises."""
        record = ExecutionRecord(started_at=utc_now())
        self.last_run = record
        self._state = RunnerState.EXECUTING
        self._idle.clear()

        try:
            logger.debug(f"Executing {self.name} task")
            await self.task.run()
            record.status = ExecutionStatus.COMPLETED

        except asyncio.CancelledError:
            record.status = ExecutionStatus.CANCELLED
            logger.info(f"Task '{self.name}' cancelled")
            raise

        except Exception as e:
            record.status = ExecutionStatus.FAILED
            record.error = str(e)
            logger.exception(f"Task '{self.name}' failed", error=str(e))

        finally:
            record.ended_at = utc_now()
            self.executions += 1
            self.history.append(record)
            if len(self.history) > self._max_history:
                self.history = self.history[-self._max_history:]
            self._idle.set()

    def start(self) -> None:
        """Run the loop in a background asyncio task."""
        if self.running:
            logger.warning(f"Runner '{self.name}' already running")
            return

        self._loop_task = asyncio.create_task(self.run(), name=f"runner:{self.name}")
        logger.info(f"Started runner '{self.name}'")

    async def stop(self, *, wait_for_task: bool = True, timeout: float = 10.0) -> None:
        """Stop the loop.

        Args:
            wait_for_task: Let an in-flight execution finish before stopping.
            timeout: Max seconds to wait for that execution; it is cancelled
                afterwards.

        Only a loop spawned by start() can be stopped here. A loop awaited
        directly through run() ends when its channel is closed or the
        awaiting task is cancelled.
        """
        task = self._loop_task
        if task is None or task.done():
            if self._in_loop:
                logger.warning(
                    f"Runner '{self.name}' was not started with start(), "
                    "close its channel to stop it"
                )
            return

        self._stopping = True

        if wait_for_task and not self._idle.is_set():
            try:
                await asyncio.wait_for(self._idle.wait(), timeout=timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    f"Task '{self.name}' still running after {timeout}s, cancelling"
                )

        if not task.done():
            task.cancel()
        await asyncio.wait({task})

        logger.info(f"Stopped runner '{self.name}'")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        next_fire = self.next_fire_at
        return {
            "name": self.name,
            "task": self.task.name,
            "state": self._state.value,
            "schedule": None if self._schedule is None else str(self._schedule),
            "next_run": next_fire.isoformat() if next_fire else None,
            "executions": self.executions,
            "pending_updates": self.channel.pending(),
            "last_run": self.last_run.to_dict() if self.last_run else None,
        }
