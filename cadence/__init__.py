"""cadence - recurring tasks on schedules that can change while running."""

__version__ = "0.2.0"
