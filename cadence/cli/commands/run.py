"""Run command - start the scheduler.

Starts a scheduler that:
- Runs the weekly report runner on its configured weekday and time
- Runs the hourly runner while an interval is configured
- Stops on SIGINT/SIGTERM or after a fixed duration
"""

from __future__ import annotations

import asyncio
import signal
import sys

import click

from ..utils import async_command
from ...core.config import Config
from ...core.errors import ScheduleParseError
from ...core.utils import get_logger
from ...scheduler.policy import HourlyPolicy, WeeklyPolicy, WeeklySchedule
from ...scheduler.scheduler import Scheduler
from ...scheduler.task import LogTask

logger = get_logger(__name__)


def build_scheduler(
    config: Config,
    weekly: WeeklySchedule | None,
    every_hours: int | None,
) -> Scheduler:
    """Create a scheduler with the weekly and hourly runners.

    Args:
        config: Loaded configuration.
        weekly: Weekly schedule, None leaves that runner idle.
        every_hours: Hourly interval, None leaves that runner idle.

    Returns:
        Configured Scheduler.
    """
    scheduler = Scheduler(
        max_history_per_runner=config.runner.max_history,
        wait_for_tasks=config.runner.wait_for_task_on_stop,
    )

    scheduler.add_runner(
        name="weekly_report",
        policy=WeeklyPolicy(),
        task=LogTask("weekly_report", "Weekly report due"),
        schedule=weekly,
    )

    scheduler.add_runner(
        name="hourly",
        policy=HourlyPolicy(),
        task=LogTask("hourly", "Hourly check due"),
        schedule=every_hours,
    )

    return scheduler


async def run_live(scheduler: Scheduler, duration: float | None, stop_timeout: float) -> None:
    """Run the scheduler until a signal arrives or duration elapses.

    Args:
        scheduler: Scheduler to run.
        duration: Seconds to run for, None runs until interrupted.
        stop_timeout: Max seconds to wait for in-flight tasks on shutdown.
    """
    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_shutdown(sig, frame):
        logger.info(f"Received signal {sig}, shutting down...")
        loop.call_soon_threadsafe(shutdown_event.set)

    # Register signal handlers (Unix only)
    previous = {}
    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            previous[sig] = signal.signal(sig, handle_shutdown)

    await scheduler.start()

    try:
        await asyncio.wait_for(shutdown_event.wait(), timeout=duration)
    except asyncio.TimeoutError:
        pass
    finally:
        await scheduler.stop(timeout=stop_timeout)
        for sig, handler in previous.items():
            signal.signal(sig, handler)


@click.command()
@click.option("--weekday", help="Override the weekly report weekday (e.g. wed).")
@click.option("--time", "time_of_day", help="Override the weekly report time (HH:MM).")
@click.option(
    "--every-hours",
    type=click.IntRange(min=1),
    help="Override the hourly interval.",
)
@click.option(
    "--duration",
    type=click.FloatRange(min=0),
    default=None,
    help="Stop after this many seconds (default: run until interrupted).",
)
@click.pass_context
@async_command
async def run(
    ctx: click.Context,
    weekday: str | None,
    time_of_day: str | None,
    every_hours: int | None,
    duration: float | None,
) -> None:
    """Start the scheduler with the configured schedules.

    \b
    Examples:
      python -m cadence run
      python -m cadence run --weekday fri --time 17:30
      python -m cadence run --every-hours 1 --duration 60
    """
    config: Config = ctx.obj["config"]

    weekly = config.weekly_report.schedule
    if weekday is not None or time_of_day is not None:
        try:
            weekly = WeeklySchedule.parse(
                weekday if weekday is not None else config.weekly_report.weekday,
                time_of_day if time_of_day is not None else config.weekly_report.time,
            )
        except ScheduleParseError as e:
            raise click.BadParameter(str(e)) from e

    if every_hours is None:
        every_hours = config.hourly.interval_hours

    scheduler = build_scheduler(config, weekly, every_hours)

    click.echo("Starting scheduler...")
    click.echo(f"  Weekly report: {weekly or 'disabled'}")
    click.echo(f"  Hourly: {f'every {every_hours}h' if every_hours else 'disabled'}")
    click.echo("Press Ctrl+C to stop.")
    click.echo("-" * 50)

    await run_live(scheduler, duration, config.runner.stop_timeout_seconds)

    click.echo("Shutdown complete.")
