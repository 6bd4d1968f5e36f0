"""
Adapters layer - External integrations (booking storage).
"""

from .json_booking_store import JsonBookingStore

__all__ = ["JsonBookingStore"]
