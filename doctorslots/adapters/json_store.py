"""
Schedule store backed by a JSON document.

Used for demos and the CLI in place of a database. The document holds
``locations`` and ``schedules`` lists; schedule rows reference locations by
``location_id`` and are joined when listed.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..domain.exceptions import ScheduleStoreError
from ..domain.models import Location, NewSchedule, ScheduleSlot


logger = logging.getLogger(__name__)

SAMPLE_DATA_FILE = Path(__file__).parent / "sample_schedules.json"


class JsonScheduleStore:
    """
    Schedule store that keeps rows in memory and writes them back to a JSON file.

    Stored dates and times are kept exactly as found in the file, dirty
    values included; filtering them is the availability resolver's job.
    """

    def __init__(self, path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            path: JSON file to load from and save to. A missing file starts
                an empty store; None keeps the store in memory only.
        """
        self.path = path
        self.locations: Dict[str, Location] = {}
        self.rows: List[Dict[str, Any]] = []
        self._load()

    @classmethod
    def sample(cls) -> "JsonScheduleStore":
        """Load the bundled sample data without binding the store to a file."""
        store = cls(path=SAMPLE_DATA_FILE)
        store.path = None
        return store

    def _load(self) -> None:
        """Load locations and schedule rows from the JSON file."""
        if self.path is None or not self.path.exists():
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ScheduleStoreError(f"Invalid JSON in {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ScheduleStoreError(f"{self.path} must contain a JSON object at the root level.")

        locations = data.get("locations", [])
        schedules = data.get("schedules", [])
        if not isinstance(locations, list) or not isinstance(schedules, list):
            raise ScheduleStoreError(f"'locations' and 'schedules' in {self.path} must be lists.")

        for raw in locations:
            if not isinstance(raw, dict):
                raise ScheduleStoreError(f"Location entries must be objects, got {raw!r}")
            try:
                location = Location(
                    id=str(raw["id"]),
                    name=raw["name"],
                    address=raw["address"],
                    city=raw["city"],
                    state=raw.get("state"),
                    zip=raw.get("zip"),
                )
            except KeyError as exc:
                raise ScheduleStoreError(f"Location is missing field {exc}") from exc
            self.locations[location.id] = location

        self.rows = [row for row in schedules if isinstance(row, dict)]
        skipped = len(schedules) - len(self.rows)
        if skipped:
            logger.warning("Skipped %d schedule row(s) in %s that are not objects", skipped, self.path)

    def save(self) -> None:
        """Write all locations and schedule rows back to the JSON file."""
        if self.path is None:
            raise ScheduleStoreError("This schedule store is not bound to a file.")

        data = {
            "locations": [
                {
                    "id": loc.id,
                    "name": loc.name,
                    "address": loc.address,
                    "city": loc.city,
                    "state": loc.state,
                    "zip": loc.zip,
                }
                for loc in self.locations.values()
            ],
            "schedules": self.rows,
        }

        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            raise ScheduleStoreError(f"Could not write {self.path}: {exc}") from exc

    def _to_slot(self, row: Dict[str, Any]) -> ScheduleSlot:
        """Join a raw row with its location."""
        location_id = row.get("location_id")
        return ScheduleSlot(
            id=str(row.get("id", "")),
            date=row.get("date"),
            start_time=row.get("start_time"),
            end_time=row.get("end_time"),
            location=self.locations.get(str(location_id)) if location_id is not None else None,
            serial_fee=row.get("serial_fee"),
            visit_fee=row.get("visit_fee"),
            discount_fee=row.get("discount_fee"),
            doctor_id=row.get("doctor_id"),
            max_appointments=row.get("max_appointments"),
        )

    async def list_schedules(self, doctor_id: str) -> List[ScheduleSlot]:
        """Return the doctor's schedule slots joined with their locations."""
        return [
            self._to_slot(row)
            for row in self.rows
            if row.get("doctor_id") == doctor_id
        ]

    async def create_schedules(self, rows: List[NewSchedule]) -> List[ScheduleSlot]:
        """
        Persist new schedule rows in one step.

        Raises:
            ScheduleStoreError: If a row references an unknown location
        """
        unknown = {row.location_id for row in rows if row.location_id not in self.locations}
        if unknown:
            raise ScheduleStoreError(f"Unknown location id(s): {', '.join(sorted(unknown))}")

        created: List[Dict[str, Any]] = []
        for row in rows:
            created.append(
                {
                    "id": uuid.uuid4().hex,
                    "doctor_id": row.doctor_id,
                    "location_id": row.location_id,
                    "date": row.date.isoformat(),
                    "start_time": row.start_time,
                    "end_time": row.end_time,
                    "max_appointments": row.max_appointments,
                    "serial_fee": row.serial_fee,
                    "visit_fee": row.visit_fee,
                    "discount_fee": row.discount_fee,
                }
            )

        self.rows.extend(created)
        return [self._to_slot(row) for row in created]
