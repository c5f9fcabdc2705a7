from datetime import datetime, timedelta, timezone

import anyio
import attrs
import pytest

from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.platform.exception.exceptions import NotFoundError
from src.service.box_office.app.query.get_event_use_case import GetEventUseCase
from src.service.box_office.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.box_office.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.box_office.app.query.list_events_use_case import ListEventsUseCase
from src.service.box_office.app.query.stream_seat_map_use_case import StreamSeatMapUseCase
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.domain.entity.seating_chart_entity import SeatingChart
from src.service.box_office.domain.enum.event_category import EventCategory
from src.service.box_office.domain.enum.seat_status import SeatStatus
from src.service.box_office.driven_adapter.store.booking_store_impl import BookingStoreImpl
from src.service.box_office.driven_adapter.store.event_store_impl import EventStoreImpl
from test.factories import build_event, make_booking


@pytest.fixture
def broadcaster() -> InMemoryEventBroadcasterImpl:
    return InMemoryEventBroadcasterImpl()


@pytest.fixture
def event_store(broadcaster: InMemoryEventBroadcasterImpl) -> EventStoreImpl:
    return EventStoreImpl(broadcaster=broadcaster)


@pytest.fixture
def booking_store(broadcaster: InMemoryEventBroadcasterImpl) -> BookingStoreImpl:
    return BookingStoreImpl(broadcaster=broadcaster)


@pytest.fixture
async def stalls_event(event_store: EventStoreImpl, stalls_chart: SeatingChart) -> Event:
    event = build_event(stalls_chart, reserved_seats=['B-1', 'A-3'])
    await event_store.create_event(event=event)
    return event


@pytest.mark.unit
class TestListEvents:
    @pytest.mark.asyncio
    async def test_filters_and_orders(
        self, event_store: EventStoreImpl, gold_chart: SeatingChart
    ) -> None:
        now = datetime.now(timezone.utc)
        past = build_event(gold_chart, name='Last Season', date=now - timedelta(days=3))
        later = build_event(gold_chart, name='Later', date=now + timedelta(days=30))
        sooner = build_event(
            gold_chart, name='Sooner', date=now + timedelta(days=2), category=EventCategory.THEATER
        )
        for event in (later, past, sooner):
            await event_store.create_event(event=event)
        use_case = ListEventsUseCase(event_store=event_store)

        everything = await use_case.list_events()
        upcoming = await use_case.list_events(upcoming_only=True)
        theater = await use_case.list_events(category=EventCategory.THEATER)

        assert [e.name for e in everything] == ['Last Season', 'Sooner', 'Later']
        assert [e.name for e in upcoming] == ['Sooner', 'Later']
        assert [e.name for e in theater] == ['Sooner']

    @pytest.mark.asyncio
    async def test_get_unknown_event(self, event_store: EventStoreImpl) -> None:
        with pytest.raises(NotFoundError):
            await GetEventUseCase(event_store=event_store).get_by_id(event_id='missing')


@pytest.mark.unit
class TestGetSeatMap:
    @pytest.mark.asyncio
    async def test_seat_map_counts(
        self, event_store: EventStoreImpl, booking_store: BookingStoreImpl, stalls_event: Event
    ) -> None:
        # Arrange: B-1 is both reserved and booked, booked wins; A-3 stays reserved
        await booking_store.create_booking(
            booking=make_booking(event_id=stalls_event.id, seat_ids=['Gold-B-1', 'Gold-B-2'])
        )

        # Act
        seat_map = await GetSeatMapUseCase(
            event_store=event_store, booking_store=booking_store
        ).get_seat_map(event_id=stalls_event.id)

        # Assert
        assert len(seat_map.seats) == 14
        assert seat_map.counts == {
            SeatStatus.AVAILABLE: 11,
            SeatStatus.RESERVED: 1,
            SeatStatus.BOOKED: 2,
        }
        states = {state.key: state for state in seat_map.seats}
        assert states['Gold-B-1'].is_reserved and states['Gold-B-1'].is_booked
        assert states['Gold-A-left-3'].status == SeatStatus.RESERVED
        assert states['Gold-A-right-4'].status == SeatStatus.AVAILABLE
        assert seat_map.reservation_aliases == {}

    @pytest.mark.asyncio
    async def test_unknown_event(
        self, event_store: EventStoreImpl, booking_store: BookingStoreImpl
    ) -> None:
        with pytest.raises(NotFoundError):
            await GetSeatMapUseCase(
                event_store=event_store, booking_store=booking_store
            ).get_seat_map(event_id='missing')


@pytest.mark.unit
class TestStreamSeatMap:
    @pytest.mark.asyncio
    async def test_initial_map_then_one_per_snapshot(
        self,
        event_store: EventStoreImpl,
        booking_store: BookingStoreImpl,
        broadcaster: InMemoryEventBroadcasterImpl,
        stalls_event: Event,
    ) -> None:
        use_case = StreamSeatMapUseCase(event_store=event_store, booking_store=booking_store)
        board = await use_case.open_board(event_id=stalls_event.id)
        updates = use_case.stream(event_id=stalls_event.id, board=board)
        topic = f'bookings:{stalls_event.id}'

        try:
            initial = await updates.__anext__()
            assert initial.counts[SeatStatus.BOOKED] == 0
            assert broadcaster.subscriber_count(topic=topic) == 1

            await booking_store.create_booking(
                booking=make_booking(event_id=stalls_event.id, seat_ids=['Silver-A-1'])
            )
            with anyio.fail_after(1):
                pushed = await updates.__anext__()
        finally:
            await updates.aclose()

        assert pushed.counts[SeatStatus.BOOKED] == 1
        assert {s.key for s in pushed.seats if s.is_booked} == {'Silver-A-1'}
        assert broadcaster.subscriber_count(topic=topic) == 0

    @pytest.mark.asyncio
    async def test_booking_between_board_and_stream_is_in_first_frame(
        self,
        event_store: EventStoreImpl,
        booking_store: BookingStoreImpl,
        stalls_event: Event,
    ) -> None:
        use_case = StreamSeatMapUseCase(event_store=event_store, booking_store=booking_store)
        board = await use_case.open_board(event_id=stalls_event.id)
        await booking_store.create_booking(
            booking=make_booking(event_id=stalls_event.id, seat_ids=['Silver-A-1'])
        )
        updates = use_case.stream(event_id=stalls_event.id, board=board)

        try:
            first = await updates.__anext__()
        finally:
            await updates.aclose()

        states = {s.key: s for s in first.seats}
        assert states['Silver-A-1'].status == SeatStatus.BOOKED

    @pytest.mark.asyncio
    async def test_missing_event_fails_before_streaming(
        self, event_store: EventStoreImpl, booking_store: BookingStoreImpl
    ) -> None:
        with pytest.raises(NotFoundError):
            await StreamSeatMapUseCase(
                event_store=event_store, booking_store=booking_store
            ).open_board(event_id='missing')


@pytest.mark.unit
class TestListBookings:
    @pytest.mark.asyncio
    async def test_user_history_and_event_report(
        self, booking_store: BookingStoreImpl, stalls_event: Event, member_asha: Member
    ) -> None:
        booked_at = datetime(2029, 12, 1, 10, 0, tzinfo=timezone.utc)
        first = attrs.evolve(
            make_booking(event_id=stalls_event.id, seat_ids=['Gold-B-3'], price=1000),
            booking_date=booked_at,
        )
        second = attrs.evolve(
            make_booking(
                event_id=stalls_event.id,
                seat_ids=['Gold-B-4', 'Silver-A-2'],
                price=1000,
                member=member_asha,
            ),
            booking_date=booked_at + timedelta(hours=1),
        )
        other_user = make_booking(
            event_id=stalls_event.id, seat_ids=['Bronze-R1-1'], user_id='user-2'
        )
        for booking in (first, second, other_user):
            await booking_store.create_booking(booking=booking)
        use_case = ListBookingsUseCase(booking_store=booking_store)

        mine = await use_case.list_for_user(user_id='user-1')
        report = await use_case.report_for_event(event_id=stalls_event.id)

        assert [b.id for b in mine] == [second.id, first.id]
        assert report.seats_sold == 4
        assert report.member_seats == 1
        assert report.revenue == 1000 + 1000 + 500
