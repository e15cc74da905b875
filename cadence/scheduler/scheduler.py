"""Registry of named runners sharing one event loop.

Each runner keeps its own timer and control channel; the scheduler only
starts, stops and addresses them by name.
"""

from __future__ import annotations

import asyncio
from typing import Any

from ..core.utils import get_logger
from .policy import Policy
from .runner import Runner
from .task import Task

logger = get_logger(__name__)


class Scheduler:
    """Async scheduler for reconfigurable recurring tasks.

    Usage:
        scheduler = Scheduler()

        scheduler.add_runner(
            name="weekly_report",
            policy=WeeklyPolicy(),
            task=report_task,
            schedule=WeeklySchedule.parse("sun", "10:00"),
        )

        scheduler.add_runner(
            name="notifications",
            policy=HourlyPolicy(),
            task=notify_task,
        )

        await scheduler.start()

        # Later, e.g. after a settings change
        scheduler.update("notifications", 3)

        await scheduler.stop()
    """

    def __init__(
        self,
        max_history_per_runner: int = 100,
        wait_for_tasks: bool = True,
    ):
        """Initialize scheduler.

        Args:
            max_history_per_runner: Max executions to keep per runner.
            wait_for_tasks: Let in-flight executions finish on stop().
        """
        self._runners: dict[str, Runner] = {}
        self._running = False
        self._max_history = max_history_per_runner
        self._wait_for_tasks = wait_for_tasks

    def add_runner(
        self,
        name: str,
        policy: Policy,
        task: Task,
        schedule: Any | None = None,
    ) -> Runner:
        """Add a runner to the scheduler.

        Args:
            name: Unique runner name.
            policy: Policy computing trigger delays.
            task: Task to run.
            schedule: Initial schedule input. None leaves the runner idle.

        Returns:
            The created Runner.
        """
        if name in self._runners:
            raise ValueError(f"Runner '{name}' already exists")

        runner: Runner = Runner(
            policy,
            task,
            name=name,
            max_history=self._max_history,
        )
        if schedule is not None:
            runner.update(schedule)

        self._runners[name] = runner
        logger.info(f"Added runner '{name}' with schedule {schedule}")

        if self._running:
            runner.start()

        return runner

    async def remove_runner(self, name: str) -> None:
        """Stop and remove a runner.

        Args:
            name: Runner name to remove.
        """
        runner = self._runners.pop(name, None)
        if runner is None:
            return

        await runner.stop(wait_for_task=self._wait_for_tasks)
        logger.info(f"Removed runner '{name}'")

    def get_runner(self, name: str) -> Runner | None:
        """Get a runner by name."""
        return self._runners.get(name)

    def get_all_runners(self) -> list[Runner]:
        """Get all runners."""
        return list(self._runners.values())

    def update(self, name: str, schedule: Any | None) -> None:
        """Send a new schedule to a runner.

        Args:
            name: Runner name.
            schedule: New schedule input, None disables.

        Raises:
            KeyError: If no runner has that name.
        """
        if name not in self._runners:
            raise KeyError(f"Runner '{name}' not found")

        self._runners[name].update(schedule)

    def disable(self, name: str) -> None:
        """Disable a runner's schedule."""
        self.update(name, None)

    async def start(self) -> None:
        """Start the scheduler.

        Runs every runner in its own task.
        """
        if self._running:
            logger.warning("Scheduler already running")
            return

        self._running = True
        logger.info(f"Starting scheduler with {len(self._runners)} runners")

        for runner in self._runners.values():
            runner.start()

    async def stop(self, timeout: float = 10.0) -> None:
        """Stop the scheduler.

        Args:
            timeout: Max seconds to wait for in-flight tasks to finish.
        """
        if not self._running:
            return

        self._running = False
        logger.info("Stopping scheduler...")

        await asyncio.gather(
            *(
                runner.stop(wait_for_task=self._wait_for_tasks, timeout=timeout)
                for runner in self._runners.values()
            )
        )

        logger.info("Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    def get_status(self) -> dict:
        """Get scheduler status.

        Returns:
            Dictionary with runner states.
        """
        return {
            "running": self._running,
            "runners": [runner.to_dict() for runner in self._runners.values()],
            "total_runners": len(self._runners),
            "armed_runners": sum(
                1 for r in self._runners.values() if r.next_fire_at is not None
            ),
        }
