"""
Core business logic for generating the bookable slots of a business day.

Pure domain logic: no storage, no clock reads, no I/O. Everything the
algorithm depends on, including "now", is passed in by the caller.
"""

from datetime import date, datetime
from typing import List, Optional

from .availability import AvailabilityRules
from .exceptions import InvalidDuration
from .models import Slot, UnavailabilityReason, Weekday
from .occupancy import OccupancyIndex
from .time_grid import TimeOfDay, add_minutes


def validate_service_duration(service_duration: int) -> None:
    """
    Raises:
        InvalidDuration: if the duration is not a positive integer
    """
    if isinstance(service_duration, bool) or not isinstance(service_duration, int):
        raise InvalidDuration(f"Service duration must be an integer, got {service_duration!r}")
    if service_duration <= 0:
        raise InvalidDuration(f"Service duration must be greater than zero, got {service_duration}")


def passed_cutoff(day: date, now: Optional[datetime]) -> Optional[TimeOfDay]:
    """
    Latest start time that has already passed on ``day``.

    Returns None when nothing has passed (no ``now`` or a future day). For a
    day before today the cutoff lies beyond every time of day.
    """
    if now is None:
        return None

    today = now.date()
    if day > today:
        return None
    if day < today:
        return TimeOfDay(24 * 60)
    return TimeOfDay(now.hour * 60 + now.minute)


class SlotGenerator:
    """
    Produces every candidate slot of a day, each tagged available or not.

    Algorithm, for each candidate start from the rules:
    1. end = start + service duration (never wraps past midnight)
    2. fits_before_close = end <= close_time
    3. in_lunch = [start, end) intersects the lunch break
    4. conflict = [start, end) intersects an occupied interval
    5. available = fits_before_close and not in_lunch and not conflict

    Reason priority when several apply: lunch break, conflict, insufficient
    room before close, already passed.
    """

    def __init__(self, rules: AvailabilityRules):
        self.rules = rules

    def generate(
        self,
        day: date,
        service_duration: int,
        occupancy: Optional[OccupancyIndex] = None,
        now: Optional[datetime] = None,
    ) -> List[Slot]:
        """
        Generate the ordered slots of ``day``.

        Args:
            day: Calendar date being booked
            service_duration: Length of the requested service in minutes
            occupancy: Existing bookings of the professional on ``day``
            now: Current local datetime; when given, starts at or before the
                current minute of today are marked already passed

        Returns:
            List of Slot ordered by time. Empty when the business is closed
            on that weekday, which is distinct from a fully booked day.

        Raises:
            InvalidDuration: if service_duration is zero or negative
        """
        validate_service_duration(service_duration)

        if not self.rules.is_weekday_open(Weekday.of(day)):
            return []

        occupancy = occupancy or OccupancyIndex()
        cutoff = passed_cutoff(day, now)

        return [
            self._build_slot(start, service_duration, occupancy, cutoff)
            for start in self.rules.generate_candidate_start_times()
        ]

    def available_times(
        self,
        day: date,
        service_duration: int,
        occupancy: Optional[OccupancyIndex] = None,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """Return only the HH:MM labels of the available slots."""
        return [
            slot.time.format()
            for slot in self.generate(day, service_duration, occupancy, now)
            if slot.available
        ]

    def _build_slot(
        self,
        start: TimeOfDay,
        service_duration: int,
        occupancy: OccupancyIndex,
        cutoff: Optional[TimeOfDay],
    ) -> Slot:
        end = add_minutes(start, service_duration)

        reason = unavailability_reason(self.rules, occupancy, start, end)
        if reason is None and cutoff is not None and start <= cutoff:
            reason = UnavailabilityReason.ALREADY_PASSED

        return Slot(time=start, end_time=end, available=reason is None, reason=reason)


def unavailability_reason(
    rules: AvailabilityRules,
    occupancy: OccupancyIndex,
    start: TimeOfDay,
    end: TimeOfDay,
) -> Optional[UnavailabilityReason]:
    """
    Check one [start, end) interval against lunch, occupancy and closing time.

    Shared by slot generation and write-time booking validation.
    """
    if rules.overlaps_lunch(start, end):
        return UnavailabilityReason.LUNCH_BREAK
    if occupancy.overlaps(start, end):
        return UnavailabilityReason.CONFLICT
    if not rules.fits_before_close(end):
        return UnavailabilityReason.INSUFFICIENT_ROOM_BEFORE_CLOSE
    return None
