"""
Already-booked intervals for one professional on one date.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

from .exceptions import InvalidDuration, InvalidFormat
from .models import OccupiedInterval
from .time_grid import TimeOfDay, normalize, parse


class OccupancyIndex:
    """
    Immutable, queryable set of OccupiedInterval.

    The index is never mutated in place; ``with_added`` returns a new one.
    """

    def __init__(self, intervals: Iterable[OccupiedInterval] = ()):
        self._intervals: Tuple[OccupiedInterval, ...] = tuple(
            sorted(intervals, key=lambda interval: (interval.start_time, interval.duration))
        )

    @classmethod
    def from_bookings(cls, bookings: Iterable[Sequence]) -> "OccupancyIndex":
        """
        Build an index from storage pairs of (start "HH:MM", duration_minutes).

        Raises:
            InvalidFormat: if a start time is malformed
            InvalidDuration: if a duration is negative or not an integer
        """
        intervals: List[OccupiedInterval] = []

        for start_text, duration in bookings:
            if not isinstance(start_text, str):
                raise InvalidFormat(f"Booking start must be an HH:MM string, got {start_text!r}")
            if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
                raise InvalidDuration(
                    f"Booking at {start_text!r} has an invalid duration: {duration!r}"
                )
            intervals.append(
                OccupiedInterval(start_time=parse(normalize(start_text)), duration=duration)
            )

        return cls(intervals)

    def overlaps(self, candidate_start: TimeOfDay, candidate_end: TimeOfDay) -> bool:
        """
        True if any stored interval overlaps [candidate_start, candidate_end).

        Half-open: a booking ending exactly when the candidate starts does not
        overlap.
        """
        return any(
            interval.overlaps(candidate_start, candidate_end)
            for interval in self._intervals
        )

    def conflicting(self, candidate_start: TimeOfDay, candidate_end: TimeOfDay) -> List[OccupiedInterval]:
        """Return the stored intervals that overlap the candidate."""
        return [
            interval for interval in self._intervals
            if interval.overlaps(candidate_start, candidate_end)
        ]

    def with_added(self, interval: OccupiedInterval) -> "OccupancyIndex":
        return OccupancyIndex(self._intervals + (interval,))

    def __iter__(self) -> Iterator[OccupiedInterval]:
        return iter(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupancyIndex):
            return NotImplemented
        return self._intervals == other._intervals

    def __hash__(self) -> int:
        return hash(self._intervals)

    def __repr__(self) -> str:
        return f"OccupancyIndex({list(self._intervals)!r})"
