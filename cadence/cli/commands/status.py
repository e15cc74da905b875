"""Status command - show configured schedules."""

from __future__ import annotations

import click

from ..utils import describe_next, output_json, output_table, print_header
from ...core.config import Config
from ...scheduler.policy import HourlyPolicy, WeeklyPolicy


def configured_schedules(config: Config) -> list[dict]:
    """Describe every schedule in the configuration."""
    hours = config.hourly.interval_hours
    return [
        describe_next("weekly_report", WeeklyPolicy(), config.weekly_report.schedule),
        describe_next(
            "hourly",
            HourlyPolicy(),
            hours,
            label=f"every {hours}h" if hours else None,
        ),
    ]


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show configured schedules and their next triggers.

    \b
    Examples:
      python -m cadence status
      python -m cadence --config my.json status --json
    """
    schedules = configured_schedules(ctx.obj["config"])

    if as_json:
        output_json(schedules)
        return

    print_header("SCHEDULES")
    output_table(
        ["Name", "Schedule", "Fires at", "Fires in"],
        [
            [s["name"], s["schedule"], s["fires_at"] or "-", s["fires_in"] or "-"]
            for s in schedules
        ],
    )
