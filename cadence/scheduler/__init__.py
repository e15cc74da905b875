"""Reconfigurable task scheduling.

This package provides:
- Schedule policies (weekly, hourly) over an injectable clock
- A cancellable timer and a control channel for schedule updates
- Runner: the loop tying policy, timer, channel and task together
- Scheduler: a registry of named runners
"""

from .channel import ControlChannel, ScheduleUpdate
from .clock import Clock, FrozenClock, SystemClock
from .policy import HourlyPolicy, Policy, Weekday, WeeklyPolicy, WeeklySchedule, parse_time
from .runner import ExecutionRecord, ExecutionStatus, Runner, RunnerState
from .scheduler import Scheduler
from .task import FunctionTask, LogTask, Task
from .timer import CancellableTimer

__all__ = [
    "CancellableTimer",
    "Clock",
    "ControlChannel",
    "ExecutionRecord",
    "ExecutionStatus",
    "FrozenClock",
    "FunctionTask",
    "HourlyPolicy",
    "LogTask",
    "Policy",
    "Runner",
    "RunnerState",
    "ScheduleUpdate",
    "Scheduler",
    "SystemClock",
    "Task",
    "Weekday",
    "WeeklyPolicy",
    "WeeklySchedule",
    "parse_time",
]
