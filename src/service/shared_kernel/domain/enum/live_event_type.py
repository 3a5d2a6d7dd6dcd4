"""
Live Event Type Enum

Types of Server-Sent Events pushed to viewers of a trip.
"""

from enum import StrEnum


class LiveEventType(StrEnum):
    INITIAL_SEAT_MAP = 'initial_seat_map'
    SEAT_CLAIMED = 'seat_claimed'
    SEAT_RELEASED = 'seat_released'
    SEAT_BOOKED = 'seat_booked'
    CHECK_IN_CHANGED = 'check_in_changed'
    TRIP_STATUS_CHANGED = 'trip_status_changed'
