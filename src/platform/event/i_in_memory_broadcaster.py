"""
In-memory Event Broadcaster Interface

Per-key pub/sub used to fan trip live updates out to every
SSE viewer connected to this process.
"""

from typing import Hashable, Protocol

from anyio.streams.memory import MemoryObjectReceiveStream


class IInMemoryEventBroadcaster(Protocol):
    async def subscribe(self, *, key: Hashable) -> MemoryObjectReceiveStream[dict]:
        """
        Register a new subscriber stream for ``key``

        Returns:
            MemoryObjectReceiveStream that will receive event dictionaries
        """
        ...

    async def broadcast(self, *, key: Hashable, event_data: dict) -> int:
        """
        Send ``event_data`` to every subscriber of ``key`` in call order

        Returns:
            Number of subscribers the event was delivered to

        Note:
            - Silently ignores keys without subscribers
            - Drops the event for a subscriber whose buffer is full or closed
        """
        ...

    async def unsubscribe(self, *, key: Hashable, stream: MemoryObjectReceiveStream[dict]) -> None:
        """
        Close and forget ``stream``; safe to call for unknown keys or streams
        """
        ...

    def subscriber_count(self, *, key: Hashable) -> int: ...
