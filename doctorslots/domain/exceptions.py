"""
Domain-specific exception hierarchy for the doctor scheduling core.
"""

from typing import Sequence


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class InvalidWeekdayName(SchedulingError, ValueError):
    """Raised when a weekly recurrence names a day outside the seven English weekdays."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown weekday name: '{name}'")


class InvalidTimeRange(SchedulingError, ValueError):
    """Raised when a new schedule's start/end times are malformed or out of order."""


class ScheduleOverlapError(SchedulingError):
    """Raised when new schedule dates collide with already persisted slots."""

    def __init__(self, dates: Sequence):
        self.dates = list(dates)
        listed = ", ".join(d.strftime("%Y-%m-%d") for d in self.dates)
        super().__init__(f"Schedule is overlapped with another schedule on: {listed}")


class ScheduleStoreError(SchedulingError):
    """Raised when schedule data cannot be read or written."""
