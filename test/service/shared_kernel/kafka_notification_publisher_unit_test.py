from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from src.platform.config.core_setting import settings
from src.service.shared_kernel.domain.domain_event.notification_event import (
    BookingConfirmedEvent,
    CheckInChangedEvent,
)
from src.service.shared_kernel.driven_adapter.notification.kafka_notification_publisher_impl import (
    KafkaNotificationPublisherImpl,
)


NOW = datetime(2025, 1, 10, 6, 0, tzinfo=timezone.utc)
PUBLISH = (
    'src.service.shared_kernel.driven_adapter.notification.'
    'kafka_notification_publisher_impl.publish_domain_event'
)


@pytest.fixture
def booking_confirmed() -> BookingConfirmedEvent:
    return BookingConfirmedEvent(
        booking_id='0194a1b2-0000-7000-8000-000000000001',
        booking_reference='BK7Q2M9XA4',
        trip_id=1,
        passenger_id=7,
        passenger_name='Ana Souza',
        seat_ids=['1A', '1B'],
        occurred_at=NOW,
    )


@pytest.mark.unit
class TestKafkaNotificationPublisher:
    @pytest.mark.asyncio
    async def test_booking_confirmed_goes_to_its_topic_keyed_by_booking(self, booking_confirmed):
        with patch(PUBLISH, new_callable=AsyncMock) as publish:
            await KafkaNotificationPublisherImpl().publish_booking_confirmed(event=booking_confirmed)

        publish.assert_awaited_once_with(
            event=booking_confirmed,
            topic=settings.KAFKA_TOPIC_BOOKING_CONFIRMED,
            key=booking_confirmed.booking_id,
        )

    @pytest.mark.asyncio
    async def test_check_in_changed_goes_to_its_topic(self):
        event = CheckInChangedEvent(
            booking_id='0194a1b2-0000-7000-8000-000000000001',
            booking_reference='BK7Q2M9XA4',
            trip_id=1,
            passenger_id=7,
            status='checked_in',
            check_in_time=NOW,
            occurred_at=NOW,
        )

        with patch(PUBLISH, new_callable=AsyncMock) as publish:
            await KafkaNotificationPublisherImpl().publish_check_in_changed(event=event)

        assert publish.await_args.kwargs['topic'] == settings.KAFKA_TOPIC_CHECK_IN_CHANGED
        assert event.to_payload()['check_in_time'] == NOW.isoformat()

    @pytest.mark.asyncio
    async def test_broker_failure_is_logged_not_raised(self, booking_confirmed):
        with patch(PUBLISH, new_callable=AsyncMock) as publish:
            publish.side_effect = RuntimeError('broker down')

            await KafkaNotificationPublisherImpl().publish_booking_confirmed(event=booking_confirmed)

        publish.assert_awaited_once()

    def test_payload_is_json_ready(self, booking_confirmed):
        payload = booking_confirmed.to_payload()

        assert payload['event_type'] == 'booking_confirmed'
        assert payload['seat_ids'] == ['1A', '1B']
        assert payload['occurred_at'] == '2025-01-10T06:00:00+00:00'
