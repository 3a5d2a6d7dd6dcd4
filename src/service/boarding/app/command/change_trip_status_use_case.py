from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.platform.types.clock import Clock
from src.service.boarding.domain.trip_entity import Trip
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.app.lock_keys import trip_lock_key
from src.service.shared_kernel.domain.boarding_errors import TripBusyError, TripNotFoundError
from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType
from src.service.shared_kernel.domain.enum.trip_status import TripStatus


class ChangeTripStatusUseCase:
    """
    Trip lifecycle: scheduled -> boarding -> departed -> arrived, or cancelled

    Drivers depart and arrive; the scheduler opens boarding and cancels.
    Asking for the status the trip already has is a no-op.
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

    @Logger.io
    async def execute(self, *, trip_id: int, target: TripStatus) -> Trip:
        with self.tracer.start_as_current_span(
            'use_case.change_trip_status',
            attributes={'trip.id': trip_id, 'trip.target_status': target.value},
        ):
            async with self.lock_registry.hold(
                trip_lock_key(trip_id), on_timeout=lambda: TripBusyError(trip_id)
            ):
                now = self.clock()
                async with self.uow_factory() as uow:
                    trip = await uow.trip_repo.get_by_id(trip_id=trip_id)
                    if trip is None:
                        raise TripNotFoundError(trip_id)

                    previous = trip.status
                    moved = trip.transition_to(target=target, now=now)
                    if moved is trip:
                        Logger.base.info(f'🚌 [TRIP] Trip {trip_id} already {target}')
                        return trip

                    trip = await uow.trip_repo.update(trip=moved)
                    await uow.commit()

                Logger.base.info(f'🚌 [TRIP] Trip {trip_id}: {previous} -> {trip.status}')
                await self.live_update_broadcaster.publish(
                    event=LiveUpdateEvent(
                        event_type=LiveEventType.TRIP_STATUS_CHANGED,
                        trip_id=trip_id,
                        occurred_at=now,
                        trip_status=trip.status.value,
                    )
                )
                return trip

    async def start_boarding(self, *, trip_id: int) -> Trip:
        return await self.execute(trip_id=trip_id, target=TripStatus.BOARDING)

    async def depart(self, *, trip_id: int) -> Trip:
        return await self.execute(trip_id=trip_id, target=TripStatus.DEPARTED)

    async def arrive(self, *, trip_id: int) -> Trip:
        return await self.execute(trip_id=trip_id, target=TripStatus.ARRIVED)

    async def cancel(self, *, trip_id: int) -> Trip:
        return await self.execute(trip_id=trip_id, target=TripStatus.CANCELLED)
