"""
Domain-specific exception hierarchy for the scheduling engine.
"""


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class InvalidFormat(SchedulingError, ValueError):
    """Raised when a time or date string cannot be parsed."""


class InvalidConfiguration(SchedulingError, ValueError):
    """Raised when business hours violate their invariants."""


class InvalidDuration(SchedulingError, ValueError):
    """Raised when a service or booking duration is zero or negative."""


class BookingStoreError(SchedulingError):
    """Raised when existing bookings cannot be read or written."""
