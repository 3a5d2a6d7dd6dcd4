"""
Notification publisher (Kafka)

One process-wide confluent-kafka AIOProducer, created on first use and closed
on shutdown. Payloads are orjson-encoded. Messages are keyed by booking id so
one passenger's notifications arrive in order.
"""

from typing import Literal

from confluent_kafka.aio import AIOProducer
from opentelemetry import trace
import orjson

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import inject_trace_context
from src.service.shared_kernel.domain.domain_event.mq_domain_event import MqDomainEvent


_producer: AIOProducer | None = None


async def _get_producer() -> AIOProducer:
    global _producer
    if _producer is None:
        _producer = AIOProducer(settings.KAFKA_PRODUCER_CONFIG)
        Logger.base.info(f'📤 [KAFKA] Producer created for {settings.KAFKA_BOOTSTRAP_SERVERS}')
    return _producer


async def publish_domain_event(
    *,
    event: MqDomainEvent,
    topic: str,
    key: str,
) -> Literal[True]:
    """
    Example:
        await publish_domain_event(
            event=BookingConfirmedEvent(...),
            topic=settings.KAFKA_TOPIC_BOOKING_CONFIRMED,
            key=booking.id,
        )
    """
    payload = event.to_payload()
    event_type = str(payload.get('event_type', type(event).__name__))

    with trace.get_tracer(__name__).start_as_current_span(
        f'kafka.publish {topic}',
        attributes={
            'messaging.system': 'kafka',
            'messaging.destination.name': topic,
            'messaging.kafka.message.key': key,
            'event.type': event_type,
            'trip.id': payload.get('trip_id', -1),
        },
    ):
        headers = inject_trace_context(headers={'event_type': event_type})

        producer = await _get_producer()
        await producer.produce(
            topic=topic,
            key=key.encode(),
            value=orjson.dumps(payload),
            headers=list(headers.items()),
        )

        Logger.base.info(f'📤 [KAFKA] {event_type} -> {topic} (key={key})')
        return True


async def close_producer() -> None:
    global _producer
    if _producer is not None:
        await _producer.flush()
        await _producer.close()
        _producer = None
        Logger.base.info('📤 [KAFKA] Producer closed')
