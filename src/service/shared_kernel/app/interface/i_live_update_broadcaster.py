"""
Live Update Broadcaster Interface

Per-trip fan-out of LiveUpdateEvent to every connected viewer.
Delivery is best effort: a slow or gone viewer loses events, publishers
never block and never fail because of a viewer.
"""

from typing import Protocol

from anyio.streams.memory import MemoryObjectReceiveStream

from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent


class ILiveUpdateBroadcaster(Protocol):
    async def subscribe(self, *, trip_id: int) -> MemoryObjectReceiveStream[dict]:
        """Returns a stream of serialized events of ``trip_id``, in publish order"""
        ...

    async def unsubscribe(self, *, trip_id: int, stream: MemoryObjectReceiveStream[dict]) -> None:
        ...

    async def publish(self, *, event: LiveUpdateEvent) -> int:
        """Returns the number of viewers the event reached"""
        ...
