"""
Write-time validation of a booking request.

The slots a client picked from may have been computed against an older
occupancy snapshot, so the request is checked again against the latest one
right before it is persisted. This narrows the time-of-check/time-of-use gap
but is not linearizable: the persistence layer still needs its own unique
constraint as the final backstop.
"""

from datetime import datetime
from typing import Optional

from .availability import AvailabilityRules
from .exceptions import InvalidDuration
from .models import Accept, BookingDecision, BookingRequest, Reject, RejectionReason, Weekday
from .occupancy import OccupancyIndex
from .slot_generator import passed_cutoff, unavailability_reason, validate_service_duration


class BookingConflictGuard:
    """Accepts or rejects a single booking request. Never raises for a bad request."""

    def __init__(self, rules: AvailabilityRules):
        self.rules = rules

    def validate(
        self,
        request: BookingRequest,
        occupancy: OccupancyIndex,
        now: Optional[datetime] = None,
    ) -> BookingDecision:
        """
        Check, in order: duration, weekday, business hours, lunch break,
        conflicts, closing time and (when ``now`` is given) whether the start
        already passed.
        """
        try:
            validate_service_duration(request.duration)
        except InvalidDuration:
            return Reject(RejectionReason.INVALID_DURATION)

        if not self.rules.is_weekday_open(Weekday.of(request.date)):
            return Reject(RejectionReason.CLOSED_DAY)

        if not self.rules.is_within_business_hours(request.start_time):
            return Reject(RejectionReason.OUTSIDE_BUSINESS_HOURS)

        reason = unavailability_reason(
            self.rules, occupancy, request.start_time, request.end_time
        )
        if reason is not None:
            return Reject(RejectionReason(reason.value))

        cutoff = passed_cutoff(request.date, now)
        if cutoff is not None and request.start_time <= cutoff:
            return Reject(RejectionReason.ALREADY_PASSED)

        return Accept()
