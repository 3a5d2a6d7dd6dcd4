"""Trip Status Enum"""

from enum import StrEnum


class TripStatus(StrEnum):
    SCHEDULED = 'scheduled'
    BOARDING = 'boarding'
    DEPARTED = 'departed'
    ARRIVED = 'arrived'
    CANCELLED = 'cancelled'

    @property
    def is_terminal(self) -> bool:
        return self in (TripStatus.ARRIVED, TripStatus.CANCELLED)

    @property
    def accepts_bookings(self) -> bool:
        return self in (TripStatus.SCHEDULED, TripStatus.BOARDING)
