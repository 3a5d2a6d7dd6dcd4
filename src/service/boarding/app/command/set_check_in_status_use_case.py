from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.boarding_metrics import metrics
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.platform.types.clock import Clock
from src.service.boarding.domain.check_in_entity import CheckInRecord, ensure_settable
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.app.interface.i_notification_publisher import (
    INotificationPublisher,
)
from src.service.shared_kernel.app.lock_keys import trip_lock_key
from src.service.shared_kernel.domain.boarding_errors import (
    BookingCancelledError,
    BookingNotFoundError,
    TripBusyError,
    TripMismatchError,
    TripNotFoundError,
)
from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent
from src.service.shared_kernel.domain.domain_event.notification_event import CheckInChangedEvent
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType


class SetCheckInStatusUseCase:
    """
    Driver marks a passenger as boarded or as a no-show

    Transitions:
        pending    -> checked_in | no_show
        checked_in -> no_show
        no_show    -> checked_in
        same status again -> idempotent (one record, original check-in time kept)

    The check-in record and the status mirrored on the booking are written in
    one Unit of Work, under the trip lock shared with cancellation. Viewers
    and the notification service only hear about actual status changes.
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        lock_registry: KeyedLockRegistry,
        live_update_broadcaster: ILiveUpdateBroadcaster,
        notification_publisher: INotificationPublisher,
        clock: Clock,
    ) -> None:
        self.uow_factory = uow_factory
        self.lock_registry = lock_registry
        self.live_update_broadcaster = live_update_broadcaster
        self.notification_publisher = notification_publisher
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
        lock_registry: KeyedLockRegistry = Depends(Provide[Container.lock_registry]),
        live_update_broadcaster: ILiveUpdateBroadcaster = Depends(
            Provide[Container.live_update_broadcaster]
        ),
        notification_publisher: INotificationPublisher = Depends(
            Provide[Container.notification_publisher]
        ),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            lock_registry=lock_registry,
            live_update_broadcaster=live_update_broadcaster,
            notification_publisher=notification_publisher,
            clock=clock,
        )

    @Logger.io
    async def execute(
        self,
        *,
        trip_id: int,
        booking_id: UUID,
        status: CheckInStatus,
        notes: Optional[str] = None,
    ) -> CheckInRecord:
        with self.tracer.start_as_current_span(
            'use_case.set_check_in_status',
            attributes={
                'trip.id': trip_id,
                'booking.id': str(booking_id),
                'check_in.status': status.value,
            },
        ):
            ensure_settable(status)

            async with self.lock_registry.hold(
                trip_lock_key(trip_id), on_timeout=lambda: TripBusyError(trip_id)
            ):
                record, booking, changed = await self._upsert_locked(
                    trip_id=trip_id, booking_id=booking_id, status=status, notes=notes
                )

            if changed:
                metrics.check_ins.labels(status=status.value).inc()
                await self._announce(record=record, booking=booking)
            return record

    async def _upsert_locked(
        self,
        *,
        trip_id: int,
        booking_id: UUID,
        status: CheckInStatus,
        notes: Optional[str],
    ) -> tuple[CheckInRecord, Booking, bool]:
        now = self.clock()
        async with self.uow_factory() as uow:
            booking = await uow.booking_query_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            if booking.trip_id != trip_id:
                raise TripMismatchError(booking_id=booking_id, trip_id=trip_id)
            if not booking.is_active:
                raise BookingCancelledError(booking_id)

            trip = await uow.trip_repo.get_by_id(trip_id=trip_id)
            if trip is None:
                raise TripNotFoundError(trip_id)
            trip.ensure_boarding_open()

            existing = await uow.check_in_repo.get(trip_id=trip_id, booking_id=booking.id)
            if existing is None:
                record = CheckInRecord.first(
                    trip_id=trip_id, booking_id=booking.id, status=status, notes=notes, now=now
                )
            else:
                record = existing.apply(status=status, notes=notes, now=now)

            record = await uow.check_in_repo.upsert(record=record)
            mirrored = booking.mirror_check_in(check_in_status=status, now=now)
            if mirrored is not booking:
                booking = await uow.booking_command_repo.update(booking=mirrored)
            await uow.commit()

        changed = existing is None or existing.status != status
        Logger.base.info(
            f'🎫 [CHECK-IN] Trip {trip_id}: {booking.booking_reference} -> {status}'
            f'{"" if changed else " (unchanged)"}'
        )
        return record, booking, changed

    async def _announce(self, *, record: CheckInRecord, booking: Booking) -> None:
        await self.live_update_broadcaster.publish(
            event=LiveUpdateEvent(
                event_type=LiveEventType.CHECK_IN_CHANGED,
                trip_id=record.trip_id,
                occurred_at=record.updated_at or self.clock(),
                seat_ids=booking.seat_ids,
                booking_id=str(booking.id),
                check_in_status=record.status.value,
            )
        )
        await self.notification_publisher.publish_check_in_changed(
            event=CheckInChangedEvent(
                booking_id=str(booking.id),
                booking_reference=booking.booking_reference,
                trip_id=record.trip_id,
                passenger_id=booking.passenger_id,
                status=record.status.value,
                check_in_time=record.check_in_time,
                occurred_at=record.updated_at or self.clock(),
            )
        )
