"""
Helpers for the injectable wall clock used by the scheduling functions.
"""

from datetime import datetime
from typing import Optional, Union

import pendulum
from pendulum import DateTime


def as_datetime(value: Union[str, datetime]) -> DateTime:
    """
    Coerce an ISO-8601 string or datetime into a pendulum DateTime.

    Naive datetimes are taken as UTC.
    """
    if isinstance(value, DateTime):
        return value
    if isinstance(value, datetime):
        return pendulum.instance(value)
    return pendulum.parse(value)


def resolve_now(now: Optional[Union[str, datetime]] = None, timezone: str = "UTC") -> DateTime:
    """Return ``now`` as a pendulum DateTime, reading the wall clock when omitted."""
    if now is None:
        return pendulum.now(timezone)
    return as_datetime(now)
