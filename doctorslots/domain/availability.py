"""
Availability resolution over persisted schedule slots.

Slots are parsed first and anything with an unusable date or time is
discarded; only the survivors are compared against the clock. Nothing in
this module raises for dirty slot data.
"""

from datetime import date, datetime, time
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Union

import pendulum
from pendulum import DateTime

from .clock import resolve_now
from .exceptions import InvalidTimeRange
from .models import ScheduleSlot, SlotDate, TimeRange
from .timeofday import parse_slot_date, parse_time_of_day


class ParsedSlot(NamedTuple):
    """A slot whose date and times parsed successfully."""
    day: date
    start: time
    end: time
    slot: ScheduleSlot


def parse_slot(slot: ScheduleSlot) -> Optional[ParsedSlot]:
    """Parse a slot's date and times, or return None if any of them is invalid."""
    day = parse_slot_date(slot.date)
    start = parse_time_of_day(slot.start_time)
    end = parse_time_of_day(slot.end_time)

    if day is None or start is None or end is None:
        return None

    return ParsedSlot(day=day, start=start, end=end, slot=slot)


def _window(day: date, start: time, end: time, reference: DateTime) -> Optional[TimeRange]:
    """Build the time range of a slot on its day, in the reference timezone."""
    midnight = reference.on(day.year, day.month, day.day).start_of("day")
    opens = midnight.at(start.hour, start.minute)
    closes = midnight.at(end.hour, end.minute)

    if opens >= closes:
        return None

    return TimeRange(start=opens, end=closes)


def _upcoming_sorted(
    slots: Iterable[ScheduleSlot],
    now: DateTime,
    day: Optional[date] = None
) -> List[ParsedSlot]:
    """
    Return the valid, unexpired slots sorted by (date, start time).

    A slot dated today whose end time has passed is expired.
    """
    today = now.date()
    upcoming: List[ParsedSlot] = []

    for slot in slots:
        parsed = parse_slot(slot)
        if parsed is None:
            continue

        if parsed.day < today:
            continue

        if day is not None and parsed.day != day:
            continue

        ends_at = now.on(parsed.day.year, parsed.day.month, parsed.day.day).at(
            parsed.end.hour, parsed.end.minute
        )
        if ends_at <= now:
            continue

        upcoming.append(parsed)

    return sorted(upcoming, key=lambda p: (p.day, p.start))


def resolve_upcoming(
    slots: Iterable[ScheduleSlot],
    now: Optional[Union[str, datetime]] = None,
    day: Optional[SlotDate] = None
) -> List[ScheduleSlot]:
    """
    Return the slots of the nearest day that still has bookable slots.

    Algorithm:
    1. Drop slots with an invalid date, start time or end time
    2. Drop slots dated before today or whose end time has passed
    3. Sort by date, then start time
    4. Keep only the slots on the earliest remaining date

    Args:
        slots: A doctor's persisted schedule slots
        now: Current instant; defaults to the wall clock
        day: Optional calendar date to restrict the lookup to

    Returns:
        Slots of a single day in start-time order, or an empty list
    """
    current = resolve_now(now)

    restrict_to = None
    if day is not None:
        restrict_to = parse_slot_date(day)
        if restrict_to is None:
            return []

    upcoming = _upcoming_sorted(slots, current, restrict_to)

    if not upcoming:
        return []

    nearest_day = upcoming[0].day

    return [p.slot for p in upcoming if p.day == nearest_day]


def upcoming_by_day(
    slots: Iterable[ScheduleSlot],
    now: Optional[Union[str, datetime]] = None
) -> Dict[date, List[ScheduleSlot]]:
    """Group every valid, unexpired slot by date, earliest date first."""
    current = resolve_now(now)
    grouped: Dict[date, List[ScheduleSlot]] = {}

    for parsed in _upcoming_sorted(slots, current):
        grouped.setdefault(parsed.day, []).append(parsed.slot)

    return grouped


def check_overlap(
    dates: Sequence[SlotDate],
    existing: Iterable[ScheduleSlot],
    start_time: str,
    end_time: str
) -> List[bool]:
    """
    Check proposed schedule dates against already persisted slots.

    For each date, reports whether the proposed ``start_time``-``end_time``
    window touches any existing slot on the same calendar date. Windows that
    only share an endpoint count as overlapping. Existing slots with invalid
    data never overlap.

    Raises:
        InvalidTimeRange: If the proposed times are malformed or out of order
    """
    start = parse_time_of_day(start_time)
    end = parse_time_of_day(end_time)
    if start is None or end is None:
        raise InvalidTimeRange(f"Invalid schedule times: '{start_time}' - '{end_time}'")

    reference = pendulum.datetime(2000, 1, 1, tz="UTC")

    existing_by_day: Dict[date, List[TimeRange]] = {}
    for slot in existing:
        parsed = parse_slot(slot)
        if parsed is None:
            continue
        window = _window(parsed.day, parsed.start, parsed.end, reference)
        if window is not None:
            existing_by_day.setdefault(parsed.day, []).append(window)

    results: List[bool] = []

    for candidate in dates:
        day = parse_slot_date(candidate)
        if day is None:
            results.append(False)
            continue

        proposed = _window(day, start, end, reference)
        if proposed is None:
            raise InvalidTimeRange(f"Start time {start_time} must be before end time {end_time}")

        results.append(
            any(proposed.touches(window) for window in existing_by_day.get(day, []))
        )

    return results


def describe_day_offset(
    slot_date: SlotDate,
    start_time: str,
    end_time: str,
    now: Optional[Union[str, datetime]] = None
) -> str:
    """
    Describe how far away a slot's day is: "Today", "in 1 day", "in 2 weeks".

    Returns "" if the slot data is invalid or the date has passed.
    """
    day = parse_slot_date(slot_date)
    if day is None or parse_time_of_day(start_time) is None or parse_time_of_day(end_time) is None:
        return ""

    current = resolve_now(now)
    days_ahead = day.toordinal() - current.date().toordinal()

    if days_ahead < 0:
        return ""
    if days_ahead == 0:
        return "Today"

    return f"in {pendulum.duration(days=days_ahead).in_words(locale='en')}"
