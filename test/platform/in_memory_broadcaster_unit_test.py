import anyio
import pytest

from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl


@pytest.mark.unit
class TestInMemoryEventBroadcaster:
    @pytest.mark.asyncio
    async def test_topics_are_isolated(self) -> None:
        broadcaster = InMemoryEventBroadcasterImpl()
        first = await broadcaster.subscribe(topic='bookings:e1')
        second = await broadcaster.subscribe(topic='bookings:e2')

        await broadcaster.broadcast(topic='bookings:e1', payload=['snapshot-1'])

        assert first.receive_nowait() == ['snapshot-1']
        with pytest.raises(anyio.WouldBlock):
            second.receive_nowait()

    @pytest.mark.asyncio
    async def test_broadcast_without_subscribers_is_a_no_op(self) -> None:
        broadcaster = InMemoryEventBroadcasterImpl()

        await broadcaster.broadcast(topic='bookings:e1', payload=[])

        assert broadcaster.subscriber_count(topic='bookings:e1') == 0

    @pytest.mark.asyncio
    async def test_slow_subscriber_keeps_newest_snapshots(self) -> None:
        broadcaster = InMemoryEventBroadcasterImpl(buffer_size=2)
        stream = await broadcaster.subscribe(topic='bookings:e1')

        for n in range(4):
            await broadcaster.broadcast(topic='bookings:e1', payload=n)

        assert [stream.receive_nowait(), stream.receive_nowait()] == [2, 3]

    @pytest.mark.asyncio
    async def test_unsubscribe_ends_the_stream(self) -> None:
        broadcaster = InMemoryEventBroadcasterImpl()
        stream = await broadcaster.subscribe(topic='bookings:e1')
        other = await broadcaster.subscribe(topic='bookings:e1')

        await broadcaster.unsubscribe(topic='bookings:e1', stream=stream)

        assert broadcaster.subscriber_count(topic='bookings:e1') == 1
        with pytest.raises(anyio.ClosedResourceError):
            stream.receive_nowait()

        await broadcaster.unsubscribe(topic='bookings:e1', stream=other)
        assert broadcaster.subscriber_count(topic='bookings:e1') == 0
