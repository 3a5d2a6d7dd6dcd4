from typing import Protocol

from src.service.shared_kernel.domain.domain_event.notification_event import (
    BookingConfirmedEvent,
    CheckInChangedEvent,
)


class INotificationPublisher(Protocol):
    """
    Outbound passenger notifications

    Implementations swallow and log delivery failures; a lost notification
    must never undo a booking or a check-in.
    """

    async def publish_booking_confirmed(self, *, event: BookingConfirmedEvent) -> None: ...

    async def publish_check_in_changed(self, *, event: CheckInChangedEvent) -> None: ...
