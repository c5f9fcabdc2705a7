"""
In-memory Snapshot Broadcaster Interface

Pub/sub inside one process: stores publish full-replacement snapshots under a
topic, SSE endpoints and checkout sessions consume them.
"""

from typing import Any, Protocol

from anyio.streams.memory import MemoryObjectReceiveStream


class IInMemoryEventBroadcaster(Protocol):
    async def subscribe(self, *, topic: str) -> MemoryObjectReceiveStream[Any]:
        """
        Subscribe to snapshots published under `topic`

        Returns:
            MemoryObjectReceiveStream that will receive snapshots
        """
        ...

    async def broadcast(self, *, topic: str, payload: Any) -> None:
        """
        Send `payload` to every subscriber of `topic`

        Note:
            - Silently ignores topics without subscribers
            - A full subscriber buffer loses its oldest snapshot, never the newest
        """
        ...

    async def unsubscribe(self, *, topic: str, stream: MemoryObjectReceiveStream[Any]) -> None:
        """
        Remove and close a subscriber stream

        Note:
            - Safe to call with an unknown topic or stream
        """
        ...
