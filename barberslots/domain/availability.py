"""
Operating configuration of one business: hours, lunch break, open weekdays
and slot granularity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from .exceptions import InvalidConfiguration, InvalidFormat
from .models import Weekday
from .time_grid import TimeOfDay, add_minutes, normalize, parse

DEFAULT_OPEN_TIME = "09:00"
DEFAULT_CLOSE_TIME = "19:00"
DEFAULT_SLOT_GRANULARITY = 20
DEFAULT_OPEN_WEEKDAYS = frozenset(
    {
        Weekday.MONDAY,
        Weekday.TUESDAY,
        Weekday.WEDNESDAY,
        Weekday.THURSDAY,
        Weekday.FRIDAY,
        Weekday.SATURDAY,
    }
)


@dataclass(frozen=True)
class AvailabilityRules:
    """
    Immutable business hours for one tenant.

    Invariants:
    - open_time < close_time
    - lunch_start and lunch_end are both set or both None
    - open_time <= lunch_start < lunch_end <= close_time
    - slot_granularity > 0
    """
    open_time: TimeOfDay
    close_time: TimeOfDay
    lunch_start: Optional[TimeOfDay] = None
    lunch_end: Optional[TimeOfDay] = None
    open_weekdays: frozenset = field(default=DEFAULT_OPEN_WEEKDAYS)
    slot_granularity: int = DEFAULT_SLOT_GRANULARITY

    def __post_init__(self):
        if self.open_time >= self.close_time:
            raise InvalidConfiguration(
                f"Opening time {self.open_time} must be before closing time {self.close_time}"
            )
        if self.close_time.overflowed:
            raise InvalidConfiguration(f"Closing time {self.close_time} is past midnight")

        if (self.lunch_start is None) != (self.lunch_end is None):
            raise InvalidConfiguration("Lunch break needs both a start and an end")
        if self.lunch_start is not None and not (
            self.open_time <= self.lunch_start < self.lunch_end <= self.close_time
        ):
            raise InvalidConfiguration(
                f"Lunch break {self.lunch_start} - {self.lunch_end} must lie within "
                f"{self.open_time} - {self.close_time} and start before it ends"
            )

        if isinstance(self.slot_granularity, bool) or not isinstance(self.slot_granularity, int):
            raise InvalidConfiguration(
                f"Slot granularity must be an integer, got {self.slot_granularity!r}"
            )
        if self.slot_granularity <= 0:
            raise InvalidConfiguration(
                f"Slot granularity must be greater than zero, got {self.slot_granularity}"
            )

        try:
            weekdays = frozenset(Weekday.parse(day) for day in self.open_weekdays)
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(str(exc)) from exc
        object.__setattr__(self, "open_weekdays", weekdays)

    @classmethod
    def from_config(
        cls,
        open_time: str | None = None,
        close_time: str | None = None,
        lunch_start: str | None = None,
        lunch_end: str | None = None,
        weekdays: Iterable[int | str] | None = None,
        slot_granularity: int | None = None,
    ) -> "AvailabilityRules":
        """
        Build rules from loosely typed tenant configuration.

        Time strings may carry seconds ("09:00:00"); empty or missing values
        fall back to the defaults. Lunch only applies when both ends are set;
        a half-configured lunch is ignored.

        Raises:
            InvalidConfiguration: if any value is malformed or the
                resulting hours violate the invariants
        """
        try:
            opening = _read_time(open_time, DEFAULT_OPEN_TIME)
            closing = _read_time(close_time, DEFAULT_CLOSE_TIME)
            lunch_from = _read_time(lunch_start)
            lunch_to = _read_time(lunch_end)
            open_weekdays = DEFAULT_OPEN_WEEKDAYS if weekdays is None else frozenset(weekdays)
        except (InvalidFormat, TypeError) as exc:
            raise InvalidConfiguration(f"Malformed business hours: {exc}") from exc

        if lunch_from is None or lunch_to is None:
            lunch_from = lunch_to = None

        return cls(
            open_time=opening,
            close_time=closing,
            lunch_start=lunch_from,
            lunch_end=lunch_to,
            open_weekdays=open_weekdays,
            slot_granularity=DEFAULT_SLOT_GRANULARITY if slot_granularity is None else slot_granularity,
        )

    @property
    def has_lunch(self) -> bool:
        return self.lunch_start is not None

    def is_weekday_open(self, weekday: Weekday) -> bool:
        return weekday in self.open_weekdays

    def is_within_lunch(self, t: TimeOfDay) -> bool:
        """True if lunch is configured and lunch_start <= t < lunch_end."""
        if not self.has_lunch:
            return False
        return self.lunch_start <= t < self.lunch_end

    def overlaps_lunch(self, start: TimeOfDay, end: TimeOfDay) -> bool:
        """True if [start, end) intersects the lunch break."""
        if not self.has_lunch:
            return False
        return start < self.lunch_end and self.lunch_start < end

    def is_within_business_hours(self, t: TimeOfDay) -> bool:
        return self.open_time <= t < self.close_time

    def fits_before_close(self, end: TimeOfDay) -> bool:
        """Overflowed ends never fit."""
        return end <= self.close_time

    def generate_candidate_start_times(self) -> Iterator[TimeOfDay]:
        """
        Yield open_time, open_time + granularity, ... while before close_time.

        Each call returns a fresh iterator starting from open_time.
        """
        current = self.open_time
        while current < self.close_time:
            yield current
            current = add_minutes(current, self.slot_granularity)


def _read_time(value: object, default: str | None = None) -> Optional[TimeOfDay]:
    """Parse a stored time; None or "" falls back to default."""
    if value is None or value == "":
        return parse(default) if default is not None else None
    if not isinstance(value, str):
        raise InvalidConfiguration(f"Expected time as HH:MM, got {value!r}")
    return parse(normalize(value))
