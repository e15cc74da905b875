"""Units of recurring work run by a Runner."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Coroutine

from ..core.utils import get_logger

logger = get_logger(__name__)


class Task(ABC):
    """Named unit of work invoked once per trigger.

    The name is only used for diagnostics. Implementations should report
    their own failures; an exception escaping run() is logged by the Runner
    and does not stop the schedule.
    """

    name: str = "task"

    @abstractmethod
    async def run(self) -> None:
        """Execute the work."""
        ...


class FunctionTask(Task):
    """Task wrapping a zero-argument coroutine function.

    Usage:
        async def send_report():
            ...

        task = FunctionTask("weekly_report", send_report)
    """

    def __init__(self, name: str, func: Callable[[], Coroutine[Any, Any, Any]]):
        self.name = name
        self.func = func

    async def run(self) -> None:
        await self.func()

    def __repr__(self) -> str:
        return f"FunctionTask(name={self.name!r})"


class LogTask(Task):
    """Task that only logs that it ran. Used by the CLI demo host."""

    def __init__(self, name: str, message: str = "Task triggered"):
        self.name = name
        self.message = message
        self.runs = 0

    async def run(self) -> None:
        self.runs += 1
        logger.info(self.message, task=self.name, run=self.runs)
