"""
In-memory Snapshot Broadcaster Implementation

Singleton broadcaster carrying store snapshots to SSE endpoints and
checkout sessions within the same process.
"""

from typing import Any

from anyio import WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class InMemoryEventBroadcasterImpl:
    """
    In-memory pub/sub for full-replacement snapshots

    - Each topic has a list of (send_stream, receive_stream) tuples
    - Stream buffer: settings.SUBSCRIBER_BUFFER_SIZE snapshots
    - Slow subscriber: the oldest buffered snapshot is discarded to make room,
      since only the newest snapshot matters
    - Empty topics are removed on unsubscribe
    """

    def __init__(self, *, buffer_size: int = settings.SUBSCRIBER_BUFFER_SIZE) -> None:
        self.buffer_size = buffer_size
        self._subscribers: dict[
            str, list[tuple[MemoryObjectSendStream[Any], MemoryObjectReceiveStream[Any]]]
        ] = {}

    def subscriber_count(self, *, topic: str) -> int:
        return len(self._subscribers.get(topic, []))

    async def subscribe(self, *, topic: str) -> MemoryObjectReceiveStream[Any]:
        send_stream, receive_stream = create_memory_object_stream[Any](
            max_buffer_size=self.buffer_size
        )
        self._subscribers.setdefault(topic, []).append((send_stream, receive_stream))

        Logger.base.debug(
            f'📡 [BROADCASTER] Subscribed to {topic} '
            f'(total subscribers: {len(self._subscribers[topic])})'
        )
        return receive_stream

    async def broadcast(self, *, topic: str, payload: Any) -> None:
        if topic not in self._subscribers:
            Logger.base.debug(f'📡 [BROADCASTER] No subscribers for {topic}')
            return

        replaced = 0
        for send_stream, receive_stream in self._subscribers[topic]:
            try:
                send_stream.send_nowait(payload)
            except WouldBlock:
                # Buffer full: discard the stalest snapshot to make room
                receive_stream.receive_nowait()
                send_stream.send_nowait(payload)
                replaced += 1

        if replaced:
            Logger.base.warning(
                f'⚠️ [BROADCASTER] {topic}: {replaced} slow subscriber(s) lost a stale snapshot'
            )
        Logger.base.debug(
            f'📡 [BROADCASTER] Broadcast to {topic}: subscribers={len(self._subscribers[topic])}'
        )

    async def unsubscribe(self, *, topic: str, stream: MemoryObjectReceiveStream[Any]) -> None:
        if topic not in self._subscribers:
            return

        subscribers = self._subscribers[topic]
        for i, (send_stream, receive_stream) in enumerate(subscribers):
            if receive_stream is stream:
                await send_stream.aclose()
                await receive_stream.aclose()
                subscribers.pop(i)
                Logger.base.debug(
                    f'📡 [BROADCASTER] Unsubscribed from {topic} (remaining: {len(subscribers)})'
                )
                break

        if not subscribers:
            del self._subscribers[topic]
