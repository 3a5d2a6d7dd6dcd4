"""Seat Status Enum - status of one cell in the seat grid"""

from enum import StrEnum


class SeatStatus(StrEnum):
    AVAILABLE = 'available'
    HELD = 'held'
    BOOKED = 'booked'
    CHECKED_IN = 'checked_in'
    NO_SHOW = 'no_show'
