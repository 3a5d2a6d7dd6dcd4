from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.boarding_metrics import metrics
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.platform.types.clock import Clock
from src.service.reservation.app.interface.i_seat_hold_store import ISeatHoldStore
from src.service.reservation.domain.seat_hold_entity import HoldStatus, SeatHold
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.app.interface.i_notification_publisher import (
    INotificationPublisher,
)
from src.service.shared_kernel.app.lock_keys import trip_lock_key
from src.service.shared_kernel.domain.boarding_errors import (
    BookingNotFoundError,
    ClaimExpiredError,
    ClaimNotFoundError,
    TripBusyError,
)
from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent
from src.service.shared_kernel.domain.domain_event.notification_event import (
    BookingConfirmedEvent,
)
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType


class ConfirmClaimUseCase:
    """
    Turn a paid seat hold into a durable booking

    Called by the payment webhook, which may retry: confirming the same
    token again (with the same booking id, or none) returns the booking
    created the first time and has no further effect.

    Raises:
        ClaimExpiredError: the hold lapsed before payment arrived
        ClaimNotFoundError: unknown token, released hold, or a different booking id
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        seat_hold_store: ISeatHoldStore,
        lock_registry: KeyedLockRegistry,
        live_update_broadcaster: ILiveUpdateBroadcaster,
        notification_publisher: INotificationPublisher,
        clock: Clock,
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_hold_store = seat_hold_store
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
        seat_hold_store: ISeatHoldStore = Depends(Provide[Container.seat_hold_store]),
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
            seat_hold_store=seat_hold_store,
            lock_registry=lock_registry,
            live_update_broadcaster=live_update_broadcaster,
            notification_publisher=notification_publisher,
            clock=clock,
        )

    @Logger.io
    async def execute(self, *, token: UUID, booking_id: Optional[UUID] = None) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.confirm_claim', attributes={'claim.token': str(token)}
        ):
            hold = await self.seat_hold_store.get(token=token)
            if hold is None:
                # Purged after the retention window; the booking may still exist
                return await self._replay_from_storage(token=token, booking_id=booking_id)

            async with self.lock_registry.hold(
                trip_lock_key(hold.trip_id), on_timeout=lambda: TripBusyError(hold.trip_id)
            ):
                booking, created = await self._confirm_locked(token=token, booking_id=booking_id)

            metrics.claims_confirmed.labels(replayed=str(not created).lower()).inc()
            if created:
                await self.notification_publisher.publish_booking_confirmed(
                    event=BookingConfirmedEvent(
                        booking_id=str(booking.id),
                        booking_reference=booking.booking_reference,
                        trip_id=booking.trip_id,
                        passenger_id=booking.passenger_id,
                        passenger_name=booking.passenger_name,
                        seat_ids=booking.seat_ids,
                        occurred_at=self.clock(),
                    )
                )
            return booking

    async def _replay_from_storage(self, *, token: UUID, booking_id: Optional[UUID]) -> Booking:
        async with self.uow_factory() as uow:
            booking = await uow.booking_query_repo.get_by_claim_token(claim_token=token)
        if booking is None or (booking_id is not None and str(booking.id) != str(booking_id)):
            raise ClaimNotFoundError(token)
        metrics.claims_confirmed.labels(replayed='true').inc()
        return booking

    async def _confirm_locked(
        self, *, token: UUID, booking_id: Optional[UUID]
    ) -> tuple[Booking, bool]:
        now = self.clock()
        hold = await self.seat_hold_store.get(token=token)
        if hold is None:
            raise ClaimNotFoundError(token)

        if hold.status == HoldStatus.CONFIRMED:
            if booking_id is not None and str(hold.booking_id) != str(booking_id):
                raise ClaimNotFoundError(token)
            async with self.uow_factory() as uow:
                existing = await uow.booking_query_repo.get_by_id(booking_id=hold.booking_id)  # type: ignore[arg-type]
            if existing is None:
                raise BookingNotFoundError(hold.booking_id)
            Logger.base.info(f'🔁 [CONFIRM] Claim {token} already confirmed as {existing.id}')
            return existing, False

        if hold.status == HoldStatus.RELEASED:
            raise ClaimNotFoundError(token)

        if hold.status == HoldStatus.EXPIRED:
            raise ClaimExpiredError(token)

        if hold.is_lapsed(now):
            await self._expire(hold=hold, now=now)
            raise ClaimExpiredError(token)

        booking = await self._create_booking(hold=hold, booking_id=booking_id, now=now)
        await self.seat_hold_store.save(hold=hold.confirm(booking_id=booking.id, now=now))

        Logger.base.info(
            f'✅ [CONFIRM] Trip {hold.trip_id}: booking {booking.booking_reference} '
            f'({booking.id}) owns {booking.seat_ids}'
        )
        await self.live_update_broadcaster.publish(
            event=LiveUpdateEvent(
                event_type=LiveEventType.SEAT_BOOKED,
                trip_id=hold.trip_id,
                occurred_at=now,
                seat_ids=booking.seat_ids,
                booking_id=str(booking.id),
            )
        )
        return booking, True

    async def _create_booking(
        self, *, hold: SeatHold, booking_id: Optional[UUID], now: datetime
    ) -> Booking:
        async with self.uow_factory() as uow:
            if booking_id is not None:
                clash = await uow.booking_query_repo.get_by_id(booking_id=booking_id)
                if clash is not None:
                    raise ConflictError(f'Booking id {booking_id} is already in use')

            booking = Booking.create(
                id=booking_id if booking_id is not None else uuid_utils.uuid7(),
                trip_id=hold.trip_id,
                passenger_id=hold.passenger_id,
                passenger_name=hold.passenger_name,
                seat_ids=hold.seat_ids,
                claim_token=hold.token,
                now=now,
            ).mark_as_confirmed(now=now)

            booking = await uow.booking_command_repo.create(booking=booking)
            await uow.commit()
        return booking

    async def _expire(self, *, hold: SeatHold, now: datetime) -> None:
        await self.seat_hold_store.save(hold=hold.expire(now=now))
        metrics.holds_expired.inc()
        await self.live_update_broadcaster.publish(
            event=LiveUpdateEvent(
                event_type=LiveEventType.SEAT_RELEASED,
                trip_id=hold.trip_id,
                occurred_at=now,
                seat_ids=hold.seat_ids,
            )
        )
