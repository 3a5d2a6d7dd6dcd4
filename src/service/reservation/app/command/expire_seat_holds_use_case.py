from datetime import timedelta

from src.platform.config.core_setting import settings
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


class ExpireSeatHoldsUseCase:
    """
    One sweep over the hold store

    1. Lapsed ACTIVE holds -> EXPIRED, seat_released published per hold
    2. Finished holds older than the retention window are dropped
    """

    def __init__(
        self,
        *,
        seat_hold_store: ISeatHoldStore,
        lock_registry: KeyedLockRegistry,
        live_update_broadcaster: ILiveUpdateBroadcaster,
        clock: Clock,
        retention_seconds: int = settings.SEAT_HOLD_RETENTION_SECONDS,
    ) -> None:
        self.seat_hold_store = seat_hold_store
        self.lock_registry = lock_registry
        self.live_update_broadcaster = live_update_broadcaster
        self.clock = clock
        self.retention = timedelta(seconds=retention_seconds)

    async def execute(self) -> int:
        expired = 0
        for candidate in await self.seat_hold_store.lapsed_holds(now=self.clock()):
            try:
                async with self.lock_registry.hold(
                    trip_lock_key(candidate.trip_id),
                    on_timeout=lambda: TripBusyError(candidate.trip_id),
                ):
                    now = self.clock()
                    hold = await self.seat_hold_store.get(token=candidate.token)
                    if hold is None or not hold.is_lapsed(now):
                        continue  # confirmed or released meanwhile

                    await self.seat_hold_store.save(hold=hold.expire(now=now))
                    await self.live_update_broadcaster.publish(
                        event=LiveUpdateEvent(
                            event_type=LiveEventType.SEAT_RELEASED,
                            trip_id=hold.trip_id,
                            occurred_at=now,
                            seat_ids=hold.seat_ids,
                        )
                    )
                    expired += 1
            except TripBusyError:
                # Next sweep picks it up; lapsed holds never block claims meanwhile
                Logger.base.warning(f'⏳ [SWEEPER] Trip {candidate.trip_id} busy, skipping hold')

        if expired:
            metrics.holds_expired.inc(expired)
            Logger.base.info(f'⌛ [SWEEPER] Expired {expired} seat holds')

        await self.seat_hold_store.purge_finished(finished_before=self.clock() - self.retention)
        return expired
