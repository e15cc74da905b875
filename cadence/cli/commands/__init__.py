"""CLI command modules.

Commands:
- next: Preview when a schedule fires next
- status: Show the configured schedules
- run: Start the scheduler with the configured schedules
"""

from . import preview, run, status

__all__ = ["preview", "run", "status"]
