"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings, settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.platform.types.clock import utc_now
from src.service.reservation.driven_adapter.state.in_memory_seat_hold_store_impl import (
    InMemorySeatHoldStoreImpl,
)
from src.service.shared_kernel.driven_adapter.broadcaster.live_update_broadcaster_impl import (
    LiveUpdateBroadcasterImpl,
)
from src.service.shared_kernel.driven_adapter.notification.kafka_notification_publisher_impl import (
    KafkaNotificationPublisherImpl,
)
from src.service.shared_kernel.driven_adapter.notification.log_notification_publisher_impl import (
    LogNotificationPublisherImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Wall clock (tests override with a controllable one)
    clock = providers.Object(utc_now)

    # Database
    database = providers.Singleton(Database)

    # Unit of Work: one session + repositories per `async with`
    # Use cases receive `unit_of_work.provider` and call it per operation
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Per-trip / per-booking critical sections
    lock_registry = providers.Singleton(
        KeyedLockRegistry, timeout_seconds=settings.TRIP_LOCK_TIMEOUT_SECONDS
    )

    # Seat holds (ephemeral, in memory)
    seat_hold_store = providers.Singleton(InMemorySeatHoldStoreImpl)

    # Live updates for SSE viewers
    event_broadcaster = providers.Singleton(
        InMemoryEventBroadcasterImpl, max_buffer_size=settings.LIVE_UPDATE_BUFFER_SIZE
    )
    live_update_broadcaster = providers.Singleton(
        LiveUpdateBroadcasterImpl, broadcaster=event_broadcaster
    )

    # Passenger notifications: kafka | log
    notification_publisher = providers.Selector(
        providers.Callable(lambda: settings.NOTIFICATION_PUBLISHER),
        kafka=providers.Singleton(KafkaNotificationPublisherImpl),
        log=providers.Singleton(LogNotificationPublisherImpl),
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
