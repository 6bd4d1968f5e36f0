"""
Selectable calendar dates inside a booking horizon.
"""

from datetime import date
from typing import List

import pendulum

from .availability import AvailabilityRules
from .exceptions import InvalidConfiguration
from .models import CandidateDate, Weekday


class DateRangeFilter:
    """
    Lists the dates from today through today + horizon_days (inclusive).

    ``today`` is always supplied by the caller.
    """

    def __init__(self, rules: AvailabilityRules):
        self.rules = rules

    def generate(self, today: date, horizon_days: int) -> List[CandidateDate]:
        """
        Produce horizon_days + 1 candidate dates starting at today.

        Raises:
            InvalidConfiguration: if horizon_days is negative
        """
        _validate_horizon(horizon_days)

        start = pendulum.date(today.year, today.month, today.day)
        candidates: List[CandidateDate] = []

        for offset in range(horizon_days + 1):
            current = start.add(days=offset)
            weekday = Weekday.of(current)
            candidates.append(
                CandidateDate(
                    date=current,
                    weekday=weekday,
                    selectable=self.rules.is_weekday_open(weekday),
                )
            )

        return candidates

    def selectable_dates(self, today: date, horizon_days: int) -> List[CandidateDate]:
        return [
            candidate for candidate in self.generate(today, horizon_days)
            if candidate.selectable
        ]

    @staticmethod
    def is_within_horizon(day: date, today: date, horizon_days: int) -> bool:
        """True if today <= day <= today + horizon_days."""
        _validate_horizon(horizon_days)
        offset = day.toordinal() - today.toordinal()
        return 0 <= offset <= horizon_days


def _validate_horizon(horizon_days: int) -> None:
    if isinstance(horizon_days, bool) or not isinstance(horizon_days, int) or horizon_days < 0:
        raise InvalidConfiguration(
            f"Booking horizon must be a non-negative number of days, got {horizon_days!r}"
        )
