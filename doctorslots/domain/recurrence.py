"""
Recurrence expansion: turns a compact schedule description into concrete dates.

Two families are supported:

- monthly: one calendar date, optionally repeated on the same day of month
  for the next ``months`` months
- weekly: a set of weekday names, each resolved to its nearest occurrence
  and optionally repeated every 7 days for ``weeks`` weeks

All dates produced for weekly recurrences sit at midnight UTC.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple, Union

import pendulum
from pendulum import DateTime

from .clock import as_datetime, resolve_now
from .exceptions import InvalidWeekdayName


REPEAT_WEEKS = 52
REPEAT_MONTHS = 12

# Indexed like datetime.weekday(): 0=Monday, 6=Sunday
WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass(frozen=True)
class MonthlyRecurrence:
    """A single date, optionally repeated monthly."""
    start_date: Union[str, datetime]
    repeat: bool = False


@dataclass(frozen=True)
class WeeklyRecurrence:
    """A set of weekdays, optionally repeated weekly. Day order is kept."""
    days: Tuple[str, ...]
    repeat: bool = False

    def __post_init__(self):
        if isinstance(self.days, str):
            object.__setattr__(self, "days", (self.days,))
        else:
            object.__setattr__(self, "days", tuple(self.days))


RecurrenceSpec = Union[MonthlyRecurrence, WeeklyRecurrence]


def weekday_index(name: str) -> int:
    """
    Map an English weekday name to its ``datetime.weekday()`` index.

    Raises:
        InvalidWeekdayName: If the name is not one of the seven weekdays
    """
    if not isinstance(name, str):
        raise InvalidWeekdayName(str(name))

    key = name.strip().lower()
    if key not in WEEKDAY_NAMES:
        raise InvalidWeekdayName(name)

    return WEEKDAY_NAMES.index(key)


def expand_monthly(
    start_date: Union[str, datetime],
    repeat: bool,
    months: int = REPEAT_MONTHS
) -> List[DateTime]:
    """
    Expand a single date into its monthly repetitions.

    Without ``repeat`` the start date is returned as given. With it, entry
    ``i`` is the start date advanced by ``i`` calendar months; month ends
    clamp (Jan 31 + 1 month is the last day of February).
    """
    if not repeat:
        if isinstance(start_date, datetime):
            return [start_date]
        return [as_datetime(start_date)]

    base = as_datetime(start_date)
    return [base.add(months=i) for i in range(months)]


def next_weekday_occurrence(index: int, now: DateTime) -> DateTime:
    """
    Return midnight UTC of the nearest date on weekday ``index``.

    Today counts when it already falls on that weekday.
    """
    today = now.date()
    days_ahead = (index - today.weekday()) % 7
    midnight = pendulum.datetime(today.year, today.month, today.day, tz="UTC")
    return midnight.add(days=days_ahead)


def expand_weekly(
    days: Iterable[str],
    repeat: bool,
    now: Optional[Union[str, datetime]] = None,
    weeks: int = REPEAT_WEEKS
) -> List[DateTime]:
    """
    Expand weekday names into concrete dates.

    Without ``repeat`` one date per distinct day name is returned, in the
    order the names were given. With it, every day contributes ``weeks``
    weekly occurrences and the result is merged chronologically.

    Raises:
        InvalidWeekdayName: If any name is not an English weekday
    """
    if isinstance(days, str):
        days = [days]

    current = resolve_now(now)

    indexes: List[int] = []
    for name in days:
        index = weekday_index(name)
        if index not in indexes:
            indexes.append(index)

    first_occurrences = [next_weekday_occurrence(index, current) for index in indexes]

    if not repeat:
        return first_occurrences

    occurrences = [
        first.add(weeks=week)
        for first in first_occurrences
        for week in range(weeks)
    ]
    return sorted(occurrences)


def expand_recurrence(
    recurrence: RecurrenceSpec,
    now: Optional[Union[str, datetime]] = None,
    weeks: int = REPEAT_WEEKS,
    months: int = REPEAT_MONTHS
) -> List[DateTime]:
    """Expand either recurrence family into its concrete dates."""
    if isinstance(recurrence, MonthlyRecurrence):
        return expand_monthly(recurrence.start_date, recurrence.repeat, months=months)
    if isinstance(recurrence, WeeklyRecurrence):
        return expand_weekly(recurrence.days, recurrence.repeat, now=now, weeks=weeks)
    raise TypeError(f"Unsupported recurrence: {recurrence!r}")
