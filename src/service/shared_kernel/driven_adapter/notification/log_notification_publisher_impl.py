from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface.i_notification_publisher import (
    INotificationPublisher,
)
from src.service.shared_kernel.domain.domain_event.notification_event import (
    BookingConfirmedEvent,
    CheckInChangedEvent,
)


class LogNotificationPublisherImpl(INotificationPublisher):
    """Local dev and tests: notifications only go to the log"""

    async def publish_booking_confirmed(self, *, event: BookingConfirmedEvent) -> None:
        Logger.base.info(
            f'📨 [NOTIFY] booking_confirmed {event.booking_reference} '
            f'trip={event.trip_id} seats={event.seat_ids}'
        )

    async def publish_check_in_changed(self, *, event: CheckInChangedEvent) -> None:
        Logger.base.info(
            f'📨 [NOTIFY] check_in_changed {event.booking_reference} '
            f'trip={event.trip_id} status={event.status}'
        )
