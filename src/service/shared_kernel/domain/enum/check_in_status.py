"""Check-in Status Enum"""

from enum import StrEnum


class CheckInStatus(StrEnum):
    # PENDING is never stored: it means "no check-in record yet"
    PENDING = 'pending'
    CHECKED_IN = 'checked_in'
    NO_SHOW = 'no_show'
