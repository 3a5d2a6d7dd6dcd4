from anyio.streams.memory import MemoryObjectReceiveStream

from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface.i_live_update_broadcaster import (
    ILiveUpdateBroadcaster,
)
from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent


class LiveUpdateBroadcasterImpl(ILiveUpdateBroadcaster):
    """Trip-keyed adapter over the in-memory pub/sub"""

    def __init__(self, *, broadcaster: IInMemoryEventBroadcaster) -> None:
        self.broadcaster = broadcaster

    async def subscribe(self, *, trip_id: int) -> MemoryObjectReceiveStream[dict]:
        return await self.broadcaster.subscribe(key=trip_id)

    async def unsubscribe(self, *, trip_id: int, stream: MemoryObjectReceiveStream[dict]) -> None:
        await self.broadcaster.unsubscribe(key=trip_id, stream=stream)

    async def publish(self, *, event: LiveUpdateEvent) -> int:
        try:
            return await self.broadcaster.broadcast(key=event.trip_id, event_data=event.to_dict())
        except Exception as e:
            # Best effort
            Logger.base.error(
                f'❌ [LIVE] Failed to publish {event.event_type} for trip {event.trip_id}: {e}'
            )
            return 0

    def viewer_count(self, *, trip_id: int) -> int:
        return self.broadcaster.subscriber_count(key=trip_id)
