from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.boarding_metrics import metrics
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.platform.types.clock import Clock
from src.service.reservation.app.interface.i_seat_hold_store import ISeatHoldStore
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.app.lock_keys import trip_lock_key
from src.service.shared_kernel.domain.boarding_errors import TripBusyError
from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType


class ReleaseClaimUseCase:
    """Passenger abandoned checkout: free the held seats now instead of at expiry"""

    def __init__(
        self,
        *,
        seat_hold_store: ISeatHoldStore,
        lock_registry: KeyedLockRegistry,
        live_update_broadcaster: ILiveUpdateBroadcaster,
        clock: Clock,
    ) -> None:
        self.seat_hold_store = seat_hold_store
        self.lock_registry = lock_registry
        self.live_update_broadcaster = live_update_broadcaster
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        seat_hold_store: ISeatHoldStore = Depends(Provide[Container.seat_hold_store]),
        lock_registry: KeyedLockRegistry = Depends(Provide[Container.lock_registry]),
        live_update_broadcaster: ILiveUpdateBroadcaster = Depends(
            Provide[Container.live_update_broadcaster]
        ),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            seat_hold_store=seat_hold_store,
            lock_registry=lock_registry,
            live_update_broadcaster=live_update_broadcaster,
            clock=clock,
        )

    @Logger.io
    async def execute(self, *, token: UUID) -> None:
        """Unknown, confirmed or already finished claims are left alone"""
        hold = await self.seat_hold_store.get(token=token)
        if hold is None:
            Logger.base.debug(f'[RELEASE] Claim {token} unknown, nothing to release')
            return

        async with self.lock_registry.hold(
            trip_lock_key(hold.trip_id), on_timeout=lambda: TripBusyError(hold.trip_id)
        ):
            now = self.clock()
            hold = await self.seat_hold_store.get(token=token)
            if hold is None:
                return

            if hold.is_active(now):
                await self.seat_hold_store.save(hold=hold.release(now=now))
                Logger.base.info(f'↩️ [RELEASE] Trip {hold.trip_id}: released {hold.seat_ids}')
            elif hold.is_lapsed(now):
                await self.seat_hold_store.save(hold=hold.expire(now=now))
                metrics.holds_expired.inc()
                Logger.base.info(f'⌛ [RELEASE] Claim {token} had already lapsed')
            else:
                Logger.base.debug(f'[RELEASE] Claim {token} is {hold.status}, nothing to release')
                return

            await self.live_update_broadcaster.publish(
                event=LiveUpdateEvent(
                    event_type=LiveEventType.SEAT_RELEASED,
                    trip_id=hold.trip_id,
                    occurred_at=now,
                    seat_ids=hold.seat_ids,
                )
            )
