"""cadence - Unified CLI.

Usage:
    python -m cadence --help
    python -m cadence next --weekday wed --time 13:00
    python -m cadence status
    python -m cadence run --every-hours 1
"""

from __future__ import annotations

import click

from ..core.config import load_config
from ..core.errors import ConfigError
from ..core.utils import setup_logging
from .utils import handle_error


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="CADENCE_CONFIG",
    default=None,
    help="Path to a JSON config file.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Set logging level (overrides config).",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default=None,
    help="Set logging format (overrides config).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    log_level: str | None,
    log_format: str | None,
) -> None:
    """cadence - recurring tasks on schedules that change at runtime.

    \b
    Schedules:
      - weekly: fixed weekday and time of day (local time)
      - hourly: every N hours, disabled when unset

    \b
    Examples:
      python -m cadence next --weekday wed --time 13:00
      python -m cadence next --every-hours 3 --json
      python -m cadence status
      python -m cadence run --every-hours 1 --duration 60
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        handle_error(e)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    setup_logging(
        level=log_level or config.general.log_level,
        log_format=log_format or config.general.log_format,
    )


# Import and register commands
from .commands import preview, run, status

cli.add_command(preview.next_trigger)
cli.add_command(run.run)
cli.add_command(status.status)


if __name__ == "__main__":
    cli()
