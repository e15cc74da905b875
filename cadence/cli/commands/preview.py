"""Next command - preview when a schedule fires."""

from __future__ import annotations

import click

from ..utils import describe_next, output_json, print_header, print_table_row
from ...core.errors import ScheduleParseError
from ...scheduler.policy import HourlyPolicy, WeeklyPolicy, WeeklySchedule


@click.command("next")
@click.option("--weekday", help="Weekday for a weekly schedule (e.g. wed).")
@click.option(
    "--time",
    "time_of_day",
    default="10:00",
    show_default=True,
    help="Time of day for a weekly schedule (HH:MM).",
)
@click.option(
    "--every-hours",
    type=click.IntRange(min=1),
    help="Interval in hours for an hourly schedule.",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def next_trigger(
    weekday: str | None,
    time_of_day: str,
    every_hours: int | None,
    as_json: bool,
) -> None:
    """Preview the next trigger of a schedule.

    \b
    Examples:
      python -m cadence next --weekday wed --time 13:00
      python -m cadence next --every-hours 3 --json
    """
    if (weekday is None) == (every_hours is None):
        raise click.UsageError("Pass exactly one of --weekday or --every-hours.")

    if weekday is not None:
        try:
            schedule = WeeklySchedule.parse(weekday, time_of_day)
        except ScheduleParseError as e:
            raise click.BadParameter(str(e)) from e
        info = describe_next("weekly", WeeklyPolicy(), schedule)
    else:
        info = describe_next(
            "hourly", HourlyPolicy(), every_hours, label=f"every {every_hours}h"
        )

    if as_json:
        output_json(info)
        return

    print_header("NEXT TRIGGER")
    print_table_row("Schedule", info["schedule"])
    print_table_row("Fires at", info["fires_at"])
    print_table_row("Fires in", info["fires_in"])
