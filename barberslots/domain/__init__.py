"""
Domain layer - Pure scheduling logic without external dependencies.
"""

from .availability import AvailabilityRules
from .conflict_guard import BookingConflictGuard
from .date_range import DateRangeFilter
from .exceptions import (
    BookingStoreError,
    InvalidConfiguration,
    InvalidDuration,
    InvalidFormat,
    SchedulingError,
)
from .models import (
    Accept,
    BookingDecision,
    BookingRequest,
    CandidateDate,
    OccupiedInterval,
    Reject,
    RejectionReason,
    Slot,
    UnavailabilityReason,
    Weekday,
)
from .occupancy import OccupancyIndex
from .slot_generator import SlotGenerator
from .time_grid import Ordering, TimeOfDay

__all__ = [
    "Accept",
    "AvailabilityRules",
    "BookingConflictGuard",
    "BookingDecision",
    "BookingRequest",
    "BookingStoreError",
    "CandidateDate",
    "DateRangeFilter",
    "InvalidConfiguration",
    "InvalidDuration",
    "InvalidFormat",
    "OccupancyIndex",
    "OccupiedInterval",
    "Ordering",
    "Reject",
    "RejectionReason",
    "SchedulingError",
    "Slot",
    "SlotGenerator",
    "TimeOfDay",
    "UnavailabilityReason",
    "Weekday",
]
