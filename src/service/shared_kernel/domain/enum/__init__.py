"""Shared Kernel Enums"""

from src.service.shared_kernel.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus
from src.service.shared_kernel.domain.enum.trip_status import TripStatus

__all__ = [
    'BookingStatus',
    'CheckInStatus',
    'LiveEventType',
    'PaymentStatus',
    'SeatStatus',
    'TripStatus',
]
