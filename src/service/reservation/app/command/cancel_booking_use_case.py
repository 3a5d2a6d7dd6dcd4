from typing import Self

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
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.app.lock_keys import trip_lock_key
from src.service.shared_kernel.domain.boarding_errors import BookingNotFoundError, TripBusyError
from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.enum.booking_status import BookingStatus
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType


class CancelBookingUseCase:
    """
    Cancel a booking and give its seats back to the trip

    Flow:
    1. Load booking (404 when missing); already cancelled -> return as is
    2. Inside the trip's critical section: mark cancelled, deactivate its seats
    3. Publish seat_released
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        lock_registry: KeyedLockRegistry,
        live_update_broadcaster: ILiveUpdateBroadcaster,
        clock: Clock,
    ) -> None:
        self.uow_factory = uow_factory
        self.lock_registry = lock_registry
        self.live_update_broadcaster = live_update_broadcaster
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
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            lock_registry=lock_registry,
            live_update_broadcaster=live_update_broadcaster,
            clock=clock,
        )

    async def _load(self, *, booking_id: UUID) -> Booking:
        async with self.uow_factory() as uow:
            booking = await uow.booking_query_repo.get_by_id(booking_id=booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    @Logger.io
    async def execute(self, *, booking_id: UUID) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking', attributes={'booking.id': str(booking_id)}
        ):
            booking = await self._load(booking_id=booking_id)
            if booking.status == BookingStatus.CANCELLED:
                return booking

            async with self.lock_registry.hold(
                trip_lock_key(booking.trip_id), on_timeout=lambda: TripBusyError(booking.trip_id)
            ):
                now = self.clock()
                async with self.uow_factory() as uow:
                    current = await uow.booking_query_repo.get_by_id(booking_id=booking_id)
                    if current is None:
                        raise BookingNotFoundError(booking_id)
                    if current.status == BookingStatus.CANCELLED:
                        return current

                    cancelled = await uow.booking_command_repo.update(
                        booking=current.cancel(now=now)
                    )
                    await uow.commit()

                metrics.bookings_cancelled.inc()
                Logger.base.info(
                    f'🗑️ [CANCEL] Trip {cancelled.trip_id}: booking {cancelled.booking_reference} '
                    f'cancelled, freed {cancelled.seat_ids}'
                )
                await self.live_update_broadcaster.publish(
                    event=LiveUpdateEvent(
                        event_type=LiveEventType.SEAT_RELEASED,
                        trip_id=cancelled.trip_id,
                        occurred_at=now,
                        seat_ids=cancelled.seat_ids,
                        booking_id=str(cancelled.id),
                    )
                )
                return cancelled
