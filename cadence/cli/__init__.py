"""CLI package for cadence.

Provides a command-line interface for:
- Previewing when a schedule fires next
- Showing configured schedules
- Running the scheduler
"""

from .main import cli

__all__ = ["cli"]
