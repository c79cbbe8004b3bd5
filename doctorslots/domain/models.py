"""
Domain models for schedule slots, locations and time ranges.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from pendulum import DateTime


SlotDate = Union[str, date, datetime]


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable time range with start and end datetime.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def touches(self, other: "TimeRange") -> bool:
        """
        Check if this range overlaps with or shares an endpoint with another.

        A schedule ending at 11:00 and one starting at 11:00 touch.
        """
        return self.start <= other.end and self.end >= other.start


@dataclass(frozen=True)
class Location:
    """A practice location a doctor holds schedules at."""
    id: str
    name: str
    address: str
    city: str
    state: Optional[str] = None
    zip: Optional[str] = None

    def display_address(self) -> str:
        """Format the address on a single line, skipping missing parts."""
        parts = [self.address, self.city]
        region = " ".join(p for p in (self.state, self.zip) if p)
        if region:
            parts.append(region)
        return ", ".join(parts)


@dataclass
class ScheduleSlot:
    """
    A persisted schedule row: one bookable date, time window and location.

    ``date``, ``start_time`` and ``end_time`` are stored as they came from
    storage and may be malformed; consumers parse them and drop what fails.
    """
    id: str
    date: SlotDate
    start_time: str
    end_time: str
    location: Optional[Location] = None
    serial_fee: Optional[float] = None
    visit_fee: Optional[float] = None
    discount_fee: Optional[float] = None
    doctor_id: Optional[str] = None
    max_appointments: Optional[int] = None


@dataclass
class NewSchedule:
    """A schedule row produced by recurrence expansion, not yet persisted."""
    doctor_id: str
    location_id: str
    date: DateTime
    start_time: str
    end_time: str
    max_appointments: Optional[int] = None
    serial_fee: Optional[float] = None
    visit_fee: Optional[float] = None
    discount_fee: Optional[float] = None
