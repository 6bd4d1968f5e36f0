"""
Tests for the SchedulingService orchestration layer.
"""

import asyncio
from datetime import date, datetime
from typing import Dict, List, Tuple

from barberslots.domain.models import BookingRequest, Reject, RejectionReason, UnavailabilityReason
from barberslots.domain.time_grid import parse
from barberslots.services.scheduling import SchedulingService

MONDAY = date(2025, 1, 6)
TODAY = date(2025, 1, 1)


class StubBookingStore:
    """Minimal in-memory store matching BookingStoreProtocol."""

    def __init__(self, bookings: Dict[Tuple[str, str], List[Tuple[str, int]]] | None = None):
        self._bookings = bookings or {}
        self.fetch_calls: List[Tuple[str, str]] = []
        self.saved: List[BookingRequest] = []

    async def fetch_bookings(self, professional_id, day):
        key = (professional_id, day.isoformat())
        self.fetch_calls.append(key)
        return list(self._bookings.get(key, []))

    async def save_booking(self, request):
        self.saved.append(request)
        key = (request.professional_id, request.date.isoformat())
        self._bookings.setdefault(key, []).append((request.start_time.format(), request.duration))


def _request(start: str, duration: int = 30, day: date = MONDAY) -> BookingRequest:
    return BookingRequest(professional_id="joao", date=day, start_time=parse(start), duration=duration)


def test_available_dates_uses_configured_horizon(salon_rules):
    service = SchedulingService(StubBookingStore(), salon_rules, horizon_days=30)

    candidates = service.available_dates(TODAY)

    assert len(candidates) == 31
    assert candidates[-1].date == date(2025, 1, 31)


def test_slots_for_reads_bookings_of_professional(salon_rules):
    store = StubBookingStore({("joao", "2025-01-06"): [("14:00", 40)]})
    service = SchedulingService(store, salon_rules)

    slots = asyncio.run(service.slots_for("joao", MONDAY, 30))
    by_time = {slot.time.format(): slot for slot in slots}

    assert store.fetch_calls == [("joao", "2025-01-06")]
    assert by_time["14:00"].reason is UnavailabilityReason.CONFLICT
    assert by_time["14:40"].available


def test_slots_for_other_professional_are_free(salon_rules):
    store = StubBookingStore({("joao", "2025-01-06"): [("14:00", 40)]})
    service = SchedulingService(store, salon_rules)

    slots = asyncio.run(service.slots_for("maria", MONDAY, 30))

    assert next(s for s in slots if s.time == parse("14:00")).available


def test_slots_for_passes_now(salon_rules):
    service = SchedulingService(StubBookingStore(), salon_rules)

    slots = asyncio.run(service.slots_for("joao", MONDAY, 30, now=datetime(2025, 1, 6, 12, 0)))

    assert slots[0].reason is UnavailabilityReason.ALREADY_PASSED


def test_book_saves_accepted_request(salon_rules):
    store = StubBookingStore()
    service = SchedulingService(store, salon_rules)

    decision = asyncio.run(service.book(_request("10:00"), TODAY))

    assert decision.accepted
    assert store.saved == [_request("10:00")]


def test_book_refetches_occupancy_before_saving(salon_rules):
    """A second request for the same slot is rejected using fresh data."""
    store = StubBookingStore()
    service = SchedulingService(store, salon_rules)

    first = asyncio.run(service.book(_request("10:00"), TODAY))
    second = asyncio.run(service.book(_request("10:20"), TODAY))

    assert first.accepted
    assert second == Reject(RejectionReason.CONFLICT)
    assert len(store.saved) == 1
    assert len(store.fetch_calls) == 2


def test_book_rejects_date_outside_horizon(salon_rules):
    store = StubBookingStore()
    service = SchedulingService(store, salon_rules, horizon_days=3)

    decision = asyncio.run(service.book(_request("10:00"), TODAY))

    assert decision == Reject(RejectionReason.OUTSIDE_HORIZON)
    assert store.saved == []
    assert store.fetch_calls == []


def test_validate_booking_does_not_save(salon_rules):
    store = StubBookingStore()
    service = SchedulingService(store, salon_rules)

    decision = asyncio.run(service.validate_booking(_request("10:00"), TODAY))

    assert decision.accepted
    assert store.saved == []
