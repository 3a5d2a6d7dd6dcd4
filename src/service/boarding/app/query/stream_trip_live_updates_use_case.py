"""
Stream Trip Live Updates Use Case

SSE feed of one trip: a seat map snapshot, then every change as it happens.
"""

from collections.abc import AsyncGenerator
from typing import Any, Self

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.reservation.domain.seat_map_builder import SeatMap
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType


class StreamTripLiveUpdatesUseCase:
    def __init__(
        self,
        *,
        get_seat_map_use_case: GetSeatMapUseCase,
        live_update_broadcaster: ILiveUpdateBroadcaster,
    ) -> None:
        self.get_seat_map_use_case = get_seat_map_use_case
        self.live_update_broadcaster = live_update_broadcaster

    @classmethod
    @inject
    def depends(
        cls,
        get_seat_map_use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
        live_update_broadcaster: ILiveUpdateBroadcaster = Depends(
            Provide[Container.live_update_broadcaster]
        ),
    ) -> Self:
        return cls(
            get_seat_map_use_case=get_seat_map_use_case,
            live_update_broadcaster=live_update_broadcaster,
        )

    async def open(self, *, trip_id: int) -> tuple[SeatMap, MemoryObjectReceiveStream[dict]]:
        """
        Subscribe, then take the snapshot

        Changes racing with the snapshot show up twice at worst, never zero times.

        Raises:
            TripNotFoundError: no subscription is left behind
        """
        stream = await self.live_update_broadcaster.subscribe(trip_id=trip_id)
        try:
            seat_map = await self.get_seat_map_use_case.execute(trip_id=trip_id)
        except Exception:
            await self.live_update_broadcaster.unsubscribe(trip_id=trip_id, stream=stream)
            raise
        return seat_map, stream

    async def stream(
        self,
        *,
        trip_id: int,
        seat_map: SeatMap,
        subscription: MemoryObjectReceiveStream[dict],
    ) -> AsyncGenerator[dict[str, Any], None]:
        """
        Yields:
            ``initial_seat_map`` with the snapshot, then one dict per LiveUpdateEvent
        """
        try:
            yield {'event_type': LiveEventType.INITIAL_SEAT_MAP, 'seat_map': seat_map}

            async for event_data in subscription:
                yield event_data

        except anyio.get_cancelled_exc_class():
            Logger.base.info(f'[SSE] Viewer disconnected from trip {trip_id}')
            raise
        except Exception as e:
            Logger.base.error(f'[SSE] Error in stream for trip {trip_id}: {type(e).__name__}: {e}')
            raise
        finally:
            with anyio.CancelScope(shield=True):
                await self.live_update_broadcaster.unsubscribe(
                    trip_id=trip_id, stream=subscription
                )
