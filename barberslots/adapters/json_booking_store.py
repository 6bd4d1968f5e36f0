"""
Booking storage backed by a JSON file.

File layout::

    {
      "<professional_id>": {
        "YYYY-MM-DD": [{"time": "10:00", "duration": 30}, ...]
      }
    }
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Tuple

from ..domain.exceptions import BookingStoreError
from ..domain.models import BookingRequest

logger = logging.getLogger(__name__)


class JsonBookingStore:
    """
    Reads and appends bookings in a JSON file.

    A missing file is treated as an empty store and is created on the first
    write. Writes replace the file through a temporary sibling.
    """

    def __init__(self, data_file: Path):
        self.data_file = Path(data_file)

    async def fetch_bookings(self, professional_id: str, day: date) -> List[Tuple[str, int]]:
        """
        Load existing bookings of a professional on a date.

        Returns:
            List of (start "HH:MM", duration_minutes) pairs
        """
        entries = self._day_entries(self._load(), professional_id, day)

        bookings: List[Tuple[str, int]] = []
        for entry in entries:
            try:
                bookings.append((entry["time"], entry["duration"]))
            except (KeyError, TypeError) as exc:
                raise BookingStoreError(
                    f"Malformed booking entry for {professional_id} on {day.isoformat()}: {entry!r}"
                ) from exc

        return bookings

    async def save_booking(self, request: BookingRequest) -> None:
        """Append an accepted booking."""
        data = self._load()
        day_entries = self._day_entries(data, request.professional_id, request.date, create=True)
        day_entries.append(
            {"time": request.start_time.format(), "duration": request.duration}
        )
        day_entries.sort(key=lambda entry: entry["time"])
        self._write(data)

    @staticmethod
    def _day_entries(data: dict, professional_id: str, day: date, create: bool = False) -> List[dict]:
        """Return the booking list of a professional on a date, checking its shape."""
        if create:
            days = data.setdefault(professional_id, {})
        else:
            days = data.get(professional_id, {})
        if not isinstance(days, dict):
            raise BookingStoreError(
                f"Bookings of {professional_id} must be a mapping of dates, got {type(days).__name__}"
            )

        key = day.isoformat()
        entries = days.setdefault(key, []) if create else days.get(key, [])
        if not isinstance(entries, list):
            raise BookingStoreError(
                f"Bookings of {professional_id} on {key} must be a list, got {type(entries).__name__}"
            )
        return entries

    def _load(self) -> Dict[str, Dict[str, List[dict]]]:
        if not self.data_file.exists():
            return {}

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read booking file %s: %s", self.data_file, exc)
            raise BookingStoreError(f"Could not read booking file {self.data_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise BookingStoreError(
                f"Booking file {self.data_file} must contain a mapping at the root level."
            )

        return data

    def _write(self, data: Dict[str, Dict[str, List[dict]]]) -> None:
        tmp_file = self.data_file.with_suffix(self.data_file.suffix + ".tmp")
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)
            tmp_file.replace(self.data_file)
        except OSError as exc:
            logger.warning("Could not save booking file %s: %s", self.data_file, exc)
            raise BookingStoreError(f"Could not save booking file {self.data_file}: {exc}") from exc
