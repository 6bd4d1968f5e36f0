"""
Domain models for scheduling: weekdays, booked intervals, slots and decisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum
from typing import Union

import pendulum

from .exceptions import InvalidDuration
from .time_grid import TimeOfDay, add_minutes


class Weekday(IntEnum):
    """Day of week, Sunday first."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def abbreviation(self) -> str:
        """Abbreviation used by the tenant configuration store."""
        return _ABBREVIATIONS[self.value]

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Weekday of a calendar date."""
        # date.weekday() counts from Monday=0
        return cls((day.weekday() + 1) % 7)

    @classmethod
    def parse(cls, value: "int | str | Weekday") -> "Weekday":
        """
        Accept a Weekday, an int 0..6 (Sunday=0), a store abbreviation
        ('dom', 'seg', ...) or an English name ('monday', 'mon').

        Raises:
            ValueError: if the value names no weekday
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unknown weekday: {value!r}")
        if isinstance(value, int):
            if 0 <= value <= 6:
                return cls(value)
            raise ValueError(f"Weekday must be between 0 and 6, got {value}")
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _ABBREVIATIONS:
                return cls(_ABBREVIATIONS.index(key))
            for weekday in cls:
                name = weekday.name.lower()
                if key == name or key == name[:3]:
                    return weekday
        raise ValueError(f"Unknown weekday: {value!r}")


_ABBREVIATIONS = ("dom", "seg", "ter", "qua", "qui", "sex", "sab")


class UnavailabilityReason(str, Enum):
    """Why a generated slot cannot be booked."""
    LUNCH_BREAK = "lunch_break"
    CONFLICT = "conflict"
    INSUFFICIENT_ROOM_BEFORE_CLOSE = "insufficient_room_before_close"
    ALREADY_PASSED = "already_passed"


class RejectionReason(str, Enum):
    """Why a booking request was refused at write time."""
    LUNCH_BREAK = "lunch_break"
    CONFLICT = "conflict"
    INSUFFICIENT_ROOM_BEFORE_CLOSE = "insufficient_room_before_close"
    CLOSED_DAY = "closed_day"
    INVALID_DURATION = "invalid_duration"
    OUTSIDE_BUSINESS_HOURS = "outside_business_hours"
    ALREADY_PASSED = "already_passed"
    OUTSIDE_HORIZON = "outside_horizon"


@dataclass(frozen=True)
class OccupiedInterval:
    """
    One existing booking for a professional on a date.

    Invariant: duration is non-negative.
    """
    start_time: TimeOfDay
    duration: int

    def __post_init__(self):
        if self.duration < 0:
            raise InvalidDuration(f"Duration cannot be negative, got {self.duration}")

    @property
    def end_time(self) -> TimeOfDay:
        return add_minutes(self.start_time, self.duration)

    def overlaps(self, start: TimeOfDay, end: TimeOfDay) -> bool:
        """Half-open overlap: touching intervals do not overlap."""
        return start < self.end_time and self.start_time < end

    def __str__(self) -> str:
        return f"{self.start_time} - {self.end_time}"


@dataclass(frozen=True)
class Slot:
    """One candidate start time of a business day."""
    time: TimeOfDay
    end_time: TimeOfDay
    available: bool
    reason: UnavailabilityReason | None = None

    def format_display(self) -> str:
        """Format: HH:MM - HH:MM (reason)"""
        text = f"{self.time} - {self.end_time}"
        if self.reason is not None:
            text += f" ({self.reason.value})"
        return text


@dataclass(frozen=True)
class CandidateDate:
    """A calendar date inside the booking horizon."""
    date: date
    weekday: Weekday
    selectable: bool

    def format_display(self, fmt: str = "dddd, DD [de] MMMM", locale: str = "pt_br") -> str:
        """
        Human label for the date, e.g. "segunda-feira, 06 de janeiro".

        Args:
            fmt: pendulum format string
            locale: pendulum locale name
        """
        day = pendulum.date(self.date.year, self.date.month, self.date.day)
        return day.format(fmt, locale=locale)


@dataclass(frozen=True)
class BookingRequest:
    """A booking a client wants to create."""
    professional_id: str
    date: date
    start_time: TimeOfDay
    duration: int

    @property
    def end_time(self) -> TimeOfDay:
        return add_minutes(self.start_time, max(self.duration, 0))


@dataclass(frozen=True)
class Accept:
    """The request may be persisted."""

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Reject:
    """The request must not be persisted."""
    reason: RejectionReason

    @property
    def accepted(self) -> bool:
        return False


BookingDecision = Union[Accept, Reject]
