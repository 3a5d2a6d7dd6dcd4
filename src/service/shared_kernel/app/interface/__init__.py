"""Application layer interfaces (Ports)"""

from src.service.shared_kernel.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.shared_kernel.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.shared_kernel.app.interface.i_check_in_repo import ICheckInRepo
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.app.interface.i_notification_publisher import (
    INotificationPublisher,
)
from src.service.shared_kernel.app.interface.i_trip_repo import ITripRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'ICheckInRepo',
    'ILiveUpdateBroadcaster',
    'INotificationPublisher',
    'ITripRepo',
]
