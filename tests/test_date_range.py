"""
Tests for the booking horizon date filter.
"""

from datetime import date

import pytest

from barberslots.domain.date_range import DateRangeFilter
from barberslots.domain.exceptions import InvalidConfiguration
from barberslots.domain.models import CandidateDate, Weekday


class TestDateRangeFilter:
    """Tests for DateRangeFilter."""

    def test_horizon_is_inclusive(self, salon_rules):
        """Fifteen days ahead from 2025-01-01 gives sixteen dates."""
        candidates = DateRangeFilter(salon_rules).generate(date(2025, 1, 1), 15)

        assert len(candidates) == 16
        assert candidates[0].date == date(2025, 1, 1)
        assert candidates[-1].date == date(2025, 1, 16)
        assert all(date(2025, 1, 1) <= c.date <= date(2025, 1, 16) for c in candidates)

    def test_dates_are_consecutive(self, salon_rules):
        candidates = DateRangeFilter(salon_rules).generate(date(2025, 2, 25), 5)

        assert [c.date.isoformat() for c in candidates] == [
            "2025-02-25", "2025-02-26", "2025-02-27", "2025-02-28", "2025-03-01", "2025-03-02",
        ]

    def test_closed_weekdays_are_not_selectable(self, salon_rules):
        candidates = DateRangeFilter(salon_rules).generate(date(2025, 1, 1), 15)

        closed = [c.date for c in candidates if not c.selectable]

        assert closed == [date(2025, 1, 5), date(2025, 1, 12)]
        assert all(c.weekday is Weekday.SUNDAY for c in candidates if not c.selectable)

    def test_zero_horizon_is_today_only(self, salon_rules):
        candidates = DateRangeFilter(salon_rules).generate(date(2025, 1, 6), 0)

        assert len(candidates) == 1
        assert candidates[0].weekday is Weekday.MONDAY

    def test_negative_horizon_raises(self, salon_rules):
        with pytest.raises(InvalidConfiguration):
            DateRangeFilter(salon_rules).generate(date(2025, 1, 1), -1)

    def test_selectable_dates(self, salon_rules):
        candidates = DateRangeFilter(salon_rules).selectable_dates(date(2025, 1, 1), 6)

        assert len(candidates) == 6
        assert date(2025, 1, 5) not in [c.date for c in candidates]

    def test_is_within_horizon(self):
        today = date(2025, 1, 1)

        assert DateRangeFilter.is_within_horizon(date(2025, 1, 1), today, 15)
        assert DateRangeFilter.is_within_horizon(date(2025, 1, 16), today, 15)
        assert not DateRangeFilter.is_within_horizon(date(2025, 1, 17), today, 15)
        assert not DateRangeFilter.is_within_horizon(date(2024, 12, 31), today, 15)


class TestCandidateDate:
    """Tests for CandidateDate display."""

    def test_format_display(self):
        candidate = CandidateDate(date=date(2025, 1, 6), weekday=Weekday.MONDAY, selectable=True)

        assert candidate.format_display("dddd, DD MMMM", locale="en") == "Monday, 06 January"

    def test_weekday_of_date(self):
        assert Weekday.of(date(2025, 1, 5)) is Weekday.SUNDAY
        assert Weekday.of(date(2025, 1, 11)) is Weekday.SATURDAY

    def test_weekday_abbreviation(self):
        assert Weekday.MONDAY.abbreviation == "seg"
        assert Weekday.parse("sab") is Weekday.SATURDAY
