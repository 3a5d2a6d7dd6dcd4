"""
In-memory Event Broadcaster Implementation

Fans trip events out to SSE endpoints living in the same process.
"""

from typing import Dict, Hashable, List

from anyio import BrokenResourceError, ClosedResourceError, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.boarding_metrics import metrics


class InMemoryEventBroadcasterImpl:
    """
    In-memory pub/sub keyed by an arbitrary hashable (trip id for live updates)

    - Each key has a list of (send_stream, receive_stream) tuples
    - Delivery order per key follows broadcast() call order
    - Full buffer: event dropped for that subscriber only (send_nowait raises WouldBlock)
    - Closed receiver: subscriber pruned
    - Empty subscriber lists are removed
    """

    def __init__(self, *, max_buffer_size: int = 10):
        self.max_buffer_size = max_buffer_size
        self._subscribers: Dict[
            Hashable, List[tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]]]
        ] = {}

    async def subscribe(self, *, key: Hashable) -> MemoryObjectReceiveStream[dict]:
        send_stream, receive_stream = create_memory_object_stream[dict](
            max_buffer_size=self.max_buffer_size
        )
        self._subscribers.setdefault(key, []).append((send_stream, receive_stream))
        metrics.live_viewers.inc()

        Logger.base.debug(
            f'📡 [BROADCASTER] Subscribed to {key} (total subscribers: {len(self._subscribers[key])})'
        )
        return receive_stream

    async def broadcast(self, *, key: Hashable, event_data: dict) -> int:
        subscribers = self._subscribers.get(key)
        if not subscribers:
            Logger.base.debug(f'📡 [BROADCASTER] No subscribers for {key}')
            return 0

        delivered = 0
        dropped = 0
        disconnected: list[MemoryObjectReceiveStream[dict]] = []

        for send_stream, receive_stream in list(subscribers):
            try:
                send_stream.send_nowait(event_data)
                delivered += 1
            except WouldBlock:
                dropped += 1
                Logger.base.warning(
                    f'⚠️ [BROADCASTER] Stream full for {key}, '
                    f'dropping event (type={event_data.get("event_type")})'
                )
            except (BrokenResourceError, ClosedResourceError):
                dropped += 1
                disconnected.append(receive_stream)

        for stream in disconnected:
            await self.unsubscribe(key=key, stream=stream)

        if dropped:
            metrics.live_events_dropped.inc(dropped)
        Logger.base.info(
            f'📡 [BROADCASTER] Broadcast to {key}: delivered={delivered}, dropped={dropped}'
        )
        return delivered

    async def unsubscribe(self, *, key: Hashable, stream: MemoryObjectReceiveStream[dict]) -> None:
        subscribers = self._subscribers.get(key)
        if subscribers is None:
            return

        for i, (send_stream, receive_stream) in enumerate(subscribers):
            if receive_stream is stream:
                await send_stream.aclose()
                await receive_stream.aclose()
                subscribers.pop(i)
                metrics.live_viewers.dec()
                Logger.base.debug(
                    f'📡 [BROADCASTER] Unsubscribed from {key} (remaining: {len(subscribers)})'
                )
                break

        if not subscribers:
            del self._subscribers[key]
            Logger.base.debug(f'📡 [BROADCASTER] Cleaned up empty list for {key}')

    def subscriber_count(self, *, key: Hashable) -> int:
        return len(self._subscribers.get(key, []))
