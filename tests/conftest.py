"""
Shared fixtures for scheduling tests.
"""

import pytest

from barberslots.domain.availability import AvailabilityRules


@pytest.fixture
def salon_rules() -> AvailabilityRules:
    """09:00-18:00, lunch 12:00-13:00, Monday to Saturday, 20 minute grid."""
    return AvailabilityRules.from_config(
        open_time="09:00",
        close_time="18:00",
        lunch_start="12:00",
        lunch_end="13:00",
        weekdays=["seg", "ter", "qua", "qui", "sex", "sab"],
        slot_granularity=20,
    )
