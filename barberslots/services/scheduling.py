"""
Application service for listing dates and slots and committing bookings.

The service fetches existing bookings through a storage protocol and hands
the actual availability decisions to the domain layer. Occupancy is always
fetched fresh: once when slots are listed and again immediately before a
booking is committed.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Protocol, Sequence, Tuple

from ..domain.availability import AvailabilityRules
from ..domain.conflict_guard import BookingConflictGuard
from ..domain.date_range import DateRangeFilter
from ..domain.models import (
    BookingDecision,
    BookingRequest,
    CandidateDate,
    Reject,
    RejectionReason,
    Slot,
)
from ..domain.occupancy import OccupancyIndex
from ..domain.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)

StoredBooking = Tuple[str, int]


class BookingStoreProtocol(Protocol):
    """Protocol describing the booking storage needed by the service."""

    async def fetch_bookings(self, professional_id: str, day: date) -> Sequence[StoredBooking]:
        """Return (start "HH:MM", duration_minutes) pairs for a professional and date."""

    async def save_booking(self, request: BookingRequest) -> None:
        """Persist an accepted booking."""


class SchedulingService:
    """
    Orchestrates booking retrieval and the scheduling engine.

    Conflict avoidance is best-effort: two requests validated concurrently
    against the same snapshot can both be accepted unless the store rejects
    the second write.
    """

    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        rules: AvailabilityRules,
        horizon_days: int = 15,
    ) -> None:
        self._booking_store = booking_store
        self._rules = rules
        self._horizon_days = horizon_days
        self._slot_generator = SlotGenerator(rules)
        self._date_filter = DateRangeFilter(rules)
        self._guard = BookingConflictGuard(rules)

    @property
    def rules(self) -> AvailabilityRules:
        return self._rules

    @property
    def horizon_days(self) -> int:
        return self._horizon_days

    def available_dates(self, today: date) -> List[CandidateDate]:
        """Candidate dates from today through the end of the horizon."""
        return self._date_filter.generate(today, self._horizon_days)

    async def fetch_occupancy(self, professional_id: str, day: date) -> OccupancyIndex:
        """Build a fresh occupancy snapshot from the store."""
        bookings = await self._booking_store.fetch_bookings(professional_id, day)
        return OccupancyIndex.from_bookings(bookings)

    async def slots_for(
        self,
        professional_id: str,
        day: date,
        service_duration: int,
        now: Optional[datetime] = None,
    ) -> List[Slot]:
        """Retrieve current bookings and compute the slots of the day."""
        occupancy = await self.fetch_occupancy(professional_id, day)
        return self._slot_generator.generate(day, service_duration, occupancy, now=now)

    async def validate_booking(
        self,
        request: BookingRequest,
        today: date,
        now: Optional[datetime] = None,
    ) -> BookingDecision:
        """Re-validate a request against the latest occupancy snapshot."""
        if not self._date_filter.is_within_horizon(request.date, today, self._horizon_days):
            return Reject(RejectionReason.OUTSIDE_HORIZON)

        occupancy = await self.fetch_occupancy(request.professional_id, request.date)
        return self._guard.validate(request, occupancy, now=now)

    async def book(
        self,
        request: BookingRequest,
        today: date,
        now: Optional[datetime] = None,
    ) -> BookingDecision:
        """
        Validate a request and persist it when accepted.

        Returns:
            The decision; the store is only written on Accept.
        """
        decision = await self.validate_booking(request, today, now=now)

        if not decision.accepted:
            logger.info(
                "Rejected booking for %s on %s at %s: %s",
                request.professional_id,
                request.date.isoformat(),
                request.start_time,
                decision.reason.value,
            )
            return decision

        await self._booking_store.save_booking(request)
        logger.info(
            "Accepted booking for %s on %s at %s (%d min)",
            request.professional_id,
            request.date.isoformat(),
            request.start_time,
            request.duration,
        )
        return decision
