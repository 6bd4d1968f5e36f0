"""
Tests for write-time booking validation.
"""

from datetime import date, datetime

import pytest

from barberslots.domain.conflict_guard import BookingConflictGuard
from barberslots.domain.models import Accept, BookingRequest, Reject, RejectionReason
from barberslots.domain.occupancy import OccupancyIndex
from barberslots.domain.slot_generator import SlotGenerator
from barberslots.domain.time_grid import parse

MONDAY = date(2025, 1, 6)


def _request(start: str, duration: int = 30, day: date = MONDAY) -> BookingRequest:
    return BookingRequest(professional_id="joao", date=day, start_time=parse(start), duration=duration)


class TestBookingConflictGuard:
    """Tests for BookingConflictGuard."""

    def test_accepts_free_slot(self, salon_rules):
        decision = BookingConflictGuard(salon_rules).validate(_request("10:00"), OccupancyIndex())

        assert decision == Accept()
        assert decision.accepted

    @pytest.mark.parametrize(
        "start, duration, bookings, reason",
        [
            ("11:45", 30, [], RejectionReason.LUNCH_BREAK),
            ("12:30", 15, [], RejectionReason.LUNCH_BREAK),
            ("14:00", 30, [("14:00", 40)], RejectionReason.CONFLICT),
            ("13:50", 30, [("14:00", 40)], RejectionReason.CONFLICT),
            ("17:01", 60, [], RejectionReason.INSUFFICIENT_ROOM_BEFORE_CLOSE),
            ("08:30", 30, [], RejectionReason.OUTSIDE_BUSINESS_HOURS),
            ("18:00", 30, [], RejectionReason.OUTSIDE_BUSINESS_HOURS),
            ("10:00", 0, [], RejectionReason.INVALID_DURATION),
            ("10:00", -15, [], RejectionReason.INVALID_DURATION),
        ],
    )
    def test_rejections(self, salon_rules, start, duration, bookings, reason):
        occupancy = OccupancyIndex.from_bookings(bookings)

        decision = BookingConflictGuard(salon_rules).validate(_request(start, duration), occupancy)

        assert decision == Reject(reason)
        assert not decision.accepted

    def test_accepts_booking_touching_existing_one(self, salon_rules):
        occupancy = OccupancyIndex.from_bookings([("14:00", 40)])

        decision = BookingConflictGuard(salon_rules).validate(_request("14:40"), occupancy)

        assert decision.accepted

    def test_accepts_booking_ending_at_close(self, salon_rules):
        decision = BookingConflictGuard(salon_rules).validate(_request("17:00", 60), OccupancyIndex())

        assert decision.accepted

    def test_rejects_closed_day(self, salon_rules):
        decision = BookingConflictGuard(salon_rules).validate(
            _request("10:00", day=date(2025, 1, 5)), OccupancyIndex()
        )

        assert decision == Reject(RejectionReason.CLOSED_DAY)

    def test_rejects_start_already_passed(self, salon_rules):
        guard = BookingConflictGuard(salon_rules)
        now = datetime(2025, 1, 6, 10, 30)

        assert guard.validate(_request("10:00"), OccupancyIndex(), now=now) == Reject(
            RejectionReason.ALREADY_PASSED
        )
        assert guard.validate(_request("11:00"), OccupancyIndex(), now=now).accepted

    def test_stale_slot_is_rejected_after_concurrent_booking(self, salon_rules):
        """A slot shown as free is refused once someone else booked it."""
        snapshot = OccupancyIndex()
        slots = SlotGenerator(salon_rules).generate(MONDAY, 30, snapshot)
        assert next(s for s in slots if s.time == parse("15:00")).available

        latest = OccupancyIndex.from_bookings([("15:00", 30)])
        decision = BookingConflictGuard(salon_rules).validate(_request("15:00"), latest)

        assert decision == Reject(RejectionReason.CONFLICT)

    def test_guard_agrees_with_generator(self, salon_rules):
        """Every generated slot gets the same verdict from the guard."""
        occupancy = OccupancyIndex.from_bookings([("09:40", 30), ("14:00", 40), ("16:20", 20)])
        guard = BookingConflictGuard(salon_rules)

        for slot in SlotGenerator(salon_rules).generate(MONDAY, 30, occupancy):
            decision = guard.validate(_request(slot.time.format()), occupancy)
            assert decision.accepted == slot.available
            if not slot.available:
                assert decision.reason.value == slot.reason.value
