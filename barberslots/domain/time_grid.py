"""
Time arithmetic within a single synthetic business day.

A ``TimeOfDay`` is stored as minutes since midnight. Parsed values always lie
in 00:00..23:59. ``add_minutes`` never wraps past midnight: a result of 24:00
or later is *overflowed* and compares later than every valid time of day, so
a service ending past midnight can never fit before closing time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidDuration, InvalidFormat

MINUTES_PER_DAY = 24 * 60


class Ordering(Enum):
    """Result of comparing two times of day."""
    BEFORE = -1
    EQUAL = 0
    AFTER = 1


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    Immutable hours:minutes value without a date component.

    Invariant: minutes is never negative. Values >= 24:00 only come out of
    ``add_minutes`` and are flagged by ``overflowed``.
    """
    minutes: int

    def __post_init__(self):
        if self.minutes < 0:
            raise ValueError(f"TimeOfDay cannot be negative, got {self.minutes}")

    @classmethod
    def of(cls, hour: int, minute: int = 0) -> "TimeOfDay":
        """Build a valid time of day from hour and minute."""
        if not 0 <= hour <= 23 or not 0 <= minute <= 59:
            raise InvalidFormat(f"Invalid time of day: {hour:02d}:{minute:02d}")
        return cls(hour * 60 + minute)

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    @property
    def overflowed(self) -> bool:
        """True when the value lies beyond the end of the business day."""
        return self.minutes >= MINUTES_PER_DAY

    def format(self) -> str:
        """Render as HH:MM (overflowed values keep hours >= 24)."""
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.format()


def parse(text: str) -> TimeOfDay:
    """
    Parse a strict 24h ``HH:MM`` string.

    Raises:
        InvalidFormat: wrong length, missing colon, non-digits,
            hour > 23 or minute > 59
    """
    if not isinstance(text, str) or len(text) != 5 or text[2] != ":":
        raise InvalidFormat(f"Expected time as HH:MM, got {text!r}")

    hour_text, minute_text = text[:2], text[3:]
    if not (hour_text.isdigit() and minute_text.isdigit()):
        raise InvalidFormat(f"Expected time as HH:MM, got {text!r}")

    hour, minute = int(hour_text), int(minute_text)
    if hour > 23 or minute > 59:
        raise InvalidFormat(f"Time out of range: {text!r}")

    return TimeOfDay(hour * 60 + minute)


def normalize(text: str) -> str:
    """
    Trim a stored time value down to ``HH:MM``.

    Database time columns come back as ``HH:MM:SS``; anything with a colon
    and at least five characters keeps its first five.
    """
    cleaned = text.strip()
    if len(cleaned) >= 5 and ":" in cleaned:
        return cleaned[:5]
    return cleaned


def add_minutes(t: TimeOfDay, duration: int) -> TimeOfDay:
    """
    Add a non-negative number of minutes without wrapping at midnight.

    The result may be overflowed (>= 24:00).

    Raises:
        InvalidDuration: if duration is negative
    """
    if duration < 0:
        raise InvalidDuration(f"Duration cannot be negative, got {duration}")
    return TimeOfDay(t.minutes + duration)


def compare(a: TimeOfDay, b: TimeOfDay) -> Ordering:
    if a.minutes < b.minutes:
        return Ordering.BEFORE
    if a.minutes > b.minutes:
        return Ordering.AFTER
    return Ordering.EQUAL


def minutes_between(start: TimeOfDay, end: TimeOfDay) -> int:
    """Signed number of minutes from start to end."""
    return end.minutes - start.minutes
