"""
Domain layer - Pure scheduling logic without external dependencies.
"""

from .availability import (
    check_overlap,
    describe_day_offset,
    resolve_upcoming,
    upcoming_by_day,
)
from .exceptions import (
    InvalidTimeRange,
    InvalidWeekdayName,
    ScheduleOverlapError,
    ScheduleStoreError,
    SchedulingError,
)
from .models import Location, NewSchedule, ScheduleSlot, TimeRange
from .recurrence import (
    MonthlyRecurrence,
    WeeklyRecurrence,
    expand_monthly,
    expand_recurrence,
    expand_weekly,
)
from .timeofday import format_time_of_day, format_time_to_two_digits

__all__ = [
    "check_overlap",
    "describe_day_offset",
    "resolve_upcoming",
    "upcoming_by_day",
    "InvalidTimeRange",
    "InvalidWeekdayName",
    "ScheduleOverlapError",
    "ScheduleStoreError",
    "SchedulingError",
    "Location",
    "NewSchedule",
    "ScheduleSlot",
    "TimeRange",
    "MonthlyRecurrence",
    "WeeklyRecurrence",
    "expand_monthly",
    "expand_recurrence",
    "expand_weekly",
    "format_time_of_day",
    "format_time_to_two_digits",
]
