from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.message_queue.event_publisher import publish_domain_event
from src.service.shared_kernel.app.interface.i_notification_publisher import (
    INotificationPublisher,
)
from src.service.shared_kernel.domain.domain_event.mq_domain_event import MqDomainEvent
from src.service.shared_kernel.domain.domain_event.notification_event import (
    BookingConfirmedEvent,
    CheckInChangedEvent,
)


class KafkaNotificationPublisherImpl(INotificationPublisher):
    """Publishes passenger notifications to Kafka, keyed by booking id"""

    async def _publish(self, *, event: MqDomainEvent, topic: str, key: str) -> None:
        try:
            await publish_domain_event(event=event, topic=topic, key=key)
        except Exception as e:
            Logger.base.error(
                f'❌ [NOTIFY] Failed to publish {event.__class__.__name__} (key={key}): {e}'
            )

    @Logger.io
    async def publish_booking_confirmed(self, *, event: BookingConfirmedEvent) -> None:
        await self._publish(
            event=event, topic=settings.KAFKA_TOPIC_BOOKING_CONFIRMED, key=event.booking_id
        )

    @Logger.io
    async def publish_check_in_changed(self, *, event: CheckInChangedEvent) -> None:
        await self._publish(
            event=event, topic=settings.KAFKA_TOPIC_CHECK_IN_CHANGED, key=event.booking_id
        )
