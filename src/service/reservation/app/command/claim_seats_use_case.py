from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.boarding_metrics import metrics
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.platform.types.clock import Clock
from src.service.reservation.app.interface.i_seat_hold_store import ISeatHoldStore
from src.service.reservation.domain.seat_hold_entity import SeatHold
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.app.lock_keys import trip_lock_key
from src.service.shared_kernel.domain.boarding_errors import (
    InvalidSeatError,
    SeatsUnavailableError,
    TripBusyError,
    TripNotFoundError,
)
from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType
from src.service.shared_kernel.domain.value_object.seat_id import SeatId, sort_seat_ids


class ClaimSeatsUseCase:
    """
    Put a temporary hold on seats while the passenger pays

    All-or-nothing: either every requested seat is held, or none is and the
    caller learns which seats were taken.

    Flow (inside the trip's critical section):
    1. Trip exists and still accepts bookings
    2. Seat ids are well-formed, distinct and exist on the bus
    3. None of them is booked or actively held
    4. Store the hold, publish seat_claimed
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        seat_hold_store: ISeatHoldStore,
        lock_registry: KeyedLockRegistry,
        live_update_broadcaster: ILiveUpdateBroadcaster,
        clock: Clock,
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_hold_store = seat_hold_store
        self.lock_registry = lock_registry
        self.live_update_broadcaster = live_update_broadcaster
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
        seat_hold_store: ISeatHoldStore = Depends(Provide[Container.seat_hold_store]),
        lock_registry: KeyedLockRegistry = Depends(Provide[Container.lock_registry]),
        live_update_broadcaster: ILiveUpdateBroadcaster = Depends(
            Provide[Container.live_update_broadcaster]
        ),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            seat_hold_store=seat_hold_store,
            lock_registry=lock_registry,
            live_update_broadcaster=live_update_broadcaster,
            clock=clock,
        )

    @staticmethod
    def _resolve_hold_seconds(hold_duration_seconds: Optional[int]) -> int:
        if hold_duration_seconds is None:
            return settings.SEAT_HOLD_DEFAULT_SECONDS
        if hold_duration_seconds < 0:
            raise DomainError('hold_duration_seconds must not be negative')
        return min(hold_duration_seconds, settings.SEAT_HOLD_MAX_SECONDS)

    @staticmethod
    def _validate_request(*, seat_ids: List[str], passenger_name: str) -> None:
        if not seat_ids:
            raise InvalidSeatError('At least one seat is required')
        if len(seat_ids) > settings.MAX_SEATS_PER_CLAIM:
            raise InvalidSeatError(
                f'At most {settings.MAX_SEATS_PER_CLAIM} seats can be claimed at once'
            )
        if not passenger_name.strip():
            raise DomainError('passenger_name must not be empty')

    @Logger.io
    async def execute(
        self,
        *,
        trip_id: int,
        seat_ids: List[str],
        passenger_id: int,
        passenger_name: str,
        hold_duration_seconds: Optional[int] = None,
    ) -> SeatHold:
        with self.tracer.start_as_current_span(
            'use_case.claim_seats',
            attributes={'trip.id': trip_id, 'seat.count': len(seat_ids)},
        ):
            try:
                self._validate_request(seat_ids=seat_ids, passenger_name=passenger_name)
                hold_seconds = self._resolve_hold_seconds(hold_duration_seconds)

                async with self.lock_registry.hold(
                    trip_lock_key(trip_id), on_timeout=lambda: TripBusyError(trip_id)
                ):
                    hold = await self._claim_locked(
                        trip_id=trip_id,
                        seat_ids=seat_ids,
                        passenger_id=passenger_id,
                        passenger_name=passenger_name,
                        hold_seconds=hold_seconds,
                    )
            except SeatsUnavailableError:
                metrics.seat_claims.labels(result='conflict').inc()
                raise
            except Exception:
                metrics.seat_claims.labels(result='rejected').inc()
                raise

            metrics.seat_claims.labels(result='claimed').inc()
            return hold

    async def _claim_locked(
        self,
        *,
        trip_id: int,
        seat_ids: List[str],
        passenger_id: int,
        passenger_name: str,
        hold_seconds: int,
    ) -> SeatHold:
        now = self.clock()

        async with self.uow_factory() as uow:
            trip = await uow.trip_repo.get_by_id(trip_id=trip_id)
            if trip is None:
                raise TripNotFoundError(trip_id)
            trip.ensure_accepts_bookings()

            requested = [
                str(SeatId.parse_for_capacity(seat_id, capacity=trip.capacity))
                for seat_id in seat_ids
            ]
            if len(set(requested)) != len(requested):
                raise InvalidSeatError(f'Duplicate seats in request: {requested}')

            booked = await uow.booking_query_repo.get_booked_seat_ids(trip_id=trip_id)

        held = await self.seat_hold_store.held_seat_ids(trip_id=trip_id, now=now)
        conflicts = sort_seat_ids(set(requested) & (booked | held))
        if conflicts:
            Logger.base.info(f'🚫 [CLAIM] Trip {trip_id}: seats {conflicts} not available')
            raise SeatsUnavailableError(conflicts)

        hold = SeatHold.create(
            token=uuid_utils.uuid7(),
            trip_id=trip_id,
            seat_ids=requested,
            passenger_id=passenger_id,
            passenger_name=passenger_name.strip(),
            hold_seconds=hold_seconds,
            now=now,
        )
        await self.seat_hold_store.add(hold=hold)

        Logger.base.info(
            f'🪑 [CLAIM] Trip {trip_id}: held {requested} for passenger {passenger_id} '
            f'until {hold.expires_at.isoformat()} (token={hold.token})'
        )

        await self.live_update_broadcaster.publish(
            event=LiveUpdateEvent(
                event_type=LiveEventType.SEAT_CLAIMED,
                trip_id=trip_id,
                occurred_at=now,
                seat_ids=requested,
            )
        )
        return hold
