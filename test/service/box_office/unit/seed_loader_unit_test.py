from datetime import datetime, timezone

import pytest

from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.service.box_office.domain.seat_availability_domain import SeatAvailabilityBoard
from src.service.box_office.driven_adapter.seed.seed_loader import (
    load_sample_data,
    seed_sample_data,
)
from src.service.box_office.driven_adapter.store.event_store_impl import EventStoreImpl
from src.service.box_office.driven_adapter.store.member_store_impl import MemberStoreImpl


@pytest.mark.unit
class TestSeedSampleData:
    @pytest.mark.asyncio
    async def test_loads_events_and_members_once(self) -> None:
        event_store = EventStoreImpl(broadcaster=InMemoryEventBroadcasterImpl())
        member_store = MemberStoreImpl()
        data = load_sample_data()

        created = await seed_sample_data(event_store=event_store, member_store=member_store)
        again = await seed_sample_data(event_store=event_store, member_store=member_store)

        events = await event_store.list_events()
        assert created == len(data['events'])
        assert again == 0
        assert len(events) == len(data['events'])
        assert all(event.date > datetime.now(timezone.utc) for event in events)
        assert len(await member_store.list_members()) == len(data['members'])

    @pytest.mark.asyncio
    async def test_sample_chart_builds_a_board(self) -> None:
        event_store = EventStoreImpl(broadcaster=InMemoryEventBroadcasterImpl())
        await seed_sample_data(event_store=event_store, member_store=MemberStoreImpl())

        event = (await event_store.list_events())[0]
        board = SeatAvailabilityBoard.for_event(event)

        assert board.seat_ids
        assert 'Gold-A-left-1' in board.seat_ids
