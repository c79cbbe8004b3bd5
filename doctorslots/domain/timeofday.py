"""
Parsing and formatting of the raw date and time-of-day values stored on schedule rows.

Every function here degrades to ``None`` or an empty string on bad input
instead of raising, so dirty rows can be filtered out by callers.
"""

import re
from datetime import date, datetime, time
from typing import Optional

import pendulum


TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
DATETIME_PREFIX_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]", re.ASCII)


def parse_time_of_day(raw: Optional[str]) -> Optional[time]:
    """
    Parse an ``H:mm`` / ``HH:mm`` string into a time.

    Returns None for missing, malformed or out-of-range values.
    """
    if not raw or not isinstance(raw, str):
        return None

    match = TIME_OF_DAY_PATTERN.match(raw.strip())
    if not match:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None

    return time(hour=hour, minute=minute)


def _utc_date(value: datetime) -> date:
    moment = pendulum.instance(value).in_timezone("UTC")
    return date(moment.year, moment.month, moment.day)


def parse_slot_date(value) -> Optional[date]:
    """
    Resolve a stored schedule date to a calendar date.

    Accepts date and datetime objects, strict ``YYYY-MM-DD`` strings and full
    ISO-8601 timestamps. Aware datetimes and timestamps are read in UTC, the
    zone schedule dates are written in.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return date(value.year, value.month, value.day)
        return _utc_date(value)

    if isinstance(value, date):
        return date(value.year, value.month, value.day)

    if not value or not isinstance(value, str):
        return None

    text = value.strip()

    if DATE_PATTERN.match(text):
        try:
            parsed = pendulum.from_format(text, "YYYY-MM-DD", tz="UTC")
        except ValueError:
            return None
        return date(parsed.year, parsed.month, parsed.day)

    if not DATETIME_PREFIX_PATTERN.match(text):
        return None

    try:
        parsed = pendulum.parse(text, tz="UTC")
    except ValueError:
        return None

    if not isinstance(parsed, datetime):
        return None

    return _utc_date(parsed)


def format_time_of_day(raw: Optional[str]) -> str:
    """
    Render a stored time as a 12-hour clock string.

    Example: "14:30" -> "02:30 PM". Returns "" when the value can't be parsed.
    """
    parsed = parse_time_of_day(raw)
    if parsed is None:
        return ""

    moment = pendulum.datetime(2000, 1, 1, parsed.hour, parsed.minute)
    return moment.format("hh:mm A", locale="en")


def format_time_to_two_digits(raw: Optional[str]) -> str:
    """Normalize a stored time to zero-padded 24-hour ``HH:mm``, or "" if invalid."""
    parsed = parse_time_of_day(raw)
    if parsed is None:
        return ""
    return f"{parsed.hour:02d}:{parsed.minute:02d}"
