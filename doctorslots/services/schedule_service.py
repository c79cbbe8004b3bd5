"""
Application services for creating schedules and looking up availability.

The service coordinates reading and writing schedule rows through a store
adapter and delegates recurrence expansion, overlap detection and
availability resolution to the domain layer. The store dependency is a
simple protocol so tests can swap in an in-memory stub.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Protocol, Union

from pendulum import DateTime

from ..domain.availability import check_overlap, resolve_upcoming
from ..domain.clock import resolve_now
from ..domain.exceptions import InvalidTimeRange, ScheduleOverlapError
from ..domain.models import NewSchedule, ScheduleSlot, SlotDate
from ..domain.recurrence import (
    REPEAT_MONTHS,
    REPEAT_WEEKS,
    RecurrenceSpec,
    expand_recurrence,
)
from ..domain.timeofday import parse_time_of_day

logger = logging.getLogger(__name__)


class ScheduleStoreProtocol(Protocol):
    """Protocol describing the storage behaviour needed by the service."""

    async def list_schedules(self, doctor_id: str) -> List[ScheduleSlot]:
        """Return every persisted schedule slot of a doctor, joined with its location."""

    async def create_schedules(self, rows: List[NewSchedule]) -> List[ScheduleSlot]:
        """Persist all rows at once and return them as schedule slots."""


class ScheduleService:
    """
    Orchestrates schedule creation and upcoming-slot lookup.

    Wall-clock access goes through the ``now`` arguments, which default to the
    current instant in the configured timezone.
    """

    def __init__(
        self,
        store: ScheduleStoreProtocol,
        timezone: str = "UTC",
        repeat_weeks: int = REPEAT_WEEKS,
        repeat_months: int = REPEAT_MONTHS,
    ) -> None:
        self._store = store
        self._timezone = timezone
        self._repeat_weeks = repeat_weeks
        self._repeat_months = repeat_months

    def plan_dates(
        self,
        recurrence: RecurrenceSpec,
        now: Optional[Union[str, datetime]] = None,
    ) -> List[DateTime]:
        """Expand a recurrence into the dates new schedule rows would be created on."""
        dates = expand_recurrence(
            recurrence,
            now=resolve_now(now, self._timezone),
            weeks=self._repeat_weeks,
            months=self._repeat_months,
        )
        logger.debug("Expanded %r into %d date(s)", recurrence, len(dates))
        return dates

    async def create_schedules(
        self,
        *,
        doctor_id: str,
        location_id: str,
        recurrence: RecurrenceSpec,
        start_time: str,
        end_time: str,
        max_appointments: Optional[int] = None,
        visit_fee: Optional[float] = None,
        serial_fee: Optional[float] = None,
        discount_fee: Optional[float] = None,
        now: Optional[Union[str, datetime]] = None,
    ) -> List[ScheduleSlot]:
        """
        Expand a recurrence and persist one schedule row per resulting date.

        Nothing is written when any date collides with an existing slot of
        the doctor.

        Raises:
            InvalidTimeRange: If the times are malformed or not in order
            InvalidWeekdayName: If a weekly recurrence names an unknown day
            ScheduleOverlapError: If any date overlaps an existing schedule
        """
        self._validate_times(start_time, end_time)

        dates = self.plan_dates(recurrence, now=now)
        existing = await self._store.list_schedules(doctor_id)

        overlaps = check_overlap(dates, existing, start_time, end_time)
        clashing = [date for date, overlapped in zip(dates, overlaps) if overlapped]

        if clashing:
            logger.warning(
                "Refusing to create schedules for doctor %s: %d date(s) overlap",
                doctor_id,
                len(clashing),
            )
            raise ScheduleOverlapError(clashing)

        rows = [
            NewSchedule(
                doctor_id=doctor_id,
                location_id=location_id,
                date=date,
                start_time=start_time.strip(),
                end_time=end_time.strip(),
                max_appointments=max_appointments,
                visit_fee=visit_fee,
                serial_fee=serial_fee,
                discount_fee=discount_fee,
            )
            for date in dates
        ]

        created = await self._store.create_schedules(rows)
        logger.info("Created %d schedule(s) for doctor %s", len(created), doctor_id)
        return created

    async def upcoming(
        self,
        doctor_id: str,
        now: Optional[Union[str, datetime]] = None,
        day: Optional[SlotDate] = None,
    ) -> List[ScheduleSlot]:
        """Return the doctor's slots for the nearest day that can still be booked."""
        schedules = await self._store.list_schedules(doctor_id)
        return resolve_upcoming(
            schedules,
            now=resolve_now(now, self._timezone),
            day=day,
        )

    @staticmethod
    def _validate_times(start_time: str, end_time: str) -> None:
        """Ensure both times parse and the window opens before it closes."""
        start = parse_time_of_day(start_time)
        end = parse_time_of_day(end_time)

        if start is None or end is None:
            raise InvalidTimeRange(
                f"Times must use the H:mm format, got '{start_time}' - '{end_time}'"
            )

        if start >= end:
            raise InvalidTimeRange(f"Start time {start_time} must be before end time {end_time}")
