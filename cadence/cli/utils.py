"""CLI utility functions.

Provides:
- Async execution helper for Click commands
- Output formatting utilities
- Common error handling
"""

from __future__ import annotations

import asyncio
import json
import sys
from functools import wraps
from typing import Any, Callable, TypeVar

import click

from ..core.utils import format_duration, get_logger
from ..scheduler.policy import Policy

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Decorator to run async functions in Click commands.

    Usage:
        @cli.command()
        @async_command
        async def my_command():
            await some_async_operation()
    """
    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))
    return wrapper  # type: ignore


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header."""
    click.echo("=" * width)
    click.echo(f"  {title}")
    click.echo("=" * width)


def print_table_row(label: str, value: str, width: int = 20) -> None:
    """Print a formatted table row."""
    click.echo(f"  {label:<{width}} {value}")


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Handle and display errors consistently."""
    if verbose:
        logger.exception("Command failed", error=str(error))
    click.echo(f"\nError: {error}", err=True)
    sys.exit(1)


def output_json(data: Any) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=2, default=str))


def output_table(headers: list[str], rows: list[list[Any]]) -> None:
    """Output data as formatted table."""
    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    # Print header
    header_line = " | ".join(f"{h:<{widths[i]}}" for i, h in enumerate(headers))
    click.echo(header_line)
    click.echo("-" * len(header_line))

    # Print rows
    for row in rows:
        row_line = " | ".join(f"{str(cell):<{widths[i]}}" for i, cell in enumerate(row))
        click.echo(row_line)


def describe_next(
    name: str,
    policy: Policy,
    schedule: Any | None,
    label: str | None = None,
) -> dict:
    """Summarize when a schedule fires next.

    Args:
        name: Label for the schedule.
        policy: Policy to evaluate.
        schedule: Schedule input, None if disabled.
        label: Display text for the schedule. Defaults to str(schedule).

    Returns:
        Dictionary with the schedule text, fire time and remaining duration.
    """
    delay = None if schedule is None else policy.next(schedule)
    if delay is None:
        return {
            "name": name,
            "schedule": "disabled",
            "fires_at": None,
            "fires_in": None,
            "in_seconds": None,
        }

    fires_at = policy.clock.now() + delay
    return {
        "name": name,
        "schedule": label or str(schedule),
        "fires_at": fires_at.isoformat(timespec="seconds"),
        "fires_in": format_duration(delay),
        "in_seconds": delay.total_seconds(),
    }
