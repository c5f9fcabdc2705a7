from unittest.mock import AsyncMock

import anyio
import pytest

from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.platform.exception.exceptions import NotFoundError, StorageUnavailable, ValidationError
from src.service.box_office.app.checkout_session import CheckoutSession
from src.service.box_office.app.command.commit_booking_use_case import CommitBookingUseCase
from src.service.box_office.domain.booking_commit_domain import AttendeeDraft
from src.service.box_office.domain.box_office_errors import AvailabilityConflict
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.enum.seat_status import SeatStatus
from src.service.box_office.domain.enum.selection_state import SelectionState
from src.service.box_office.domain.member_verification_domain import MemberVerifier
from src.service.box_office.driven_adapter.store.booking_store_impl import BookingStoreImpl
from src.service.box_office.driven_adapter.store.event_store_impl import EventStoreImpl
from src.service.box_office.driven_adapter.store.member_store_impl import MemberStoreImpl
from test.factories import make_booking


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
def commit_use_case(
    event_store: EventStoreImpl, booking_store: BookingStoreImpl
) -> CommitBookingUseCase:
    return CommitBookingUseCase(
        event_store=event_store,
        booking_store=booking_store,
        member_store=MemberStoreImpl(),
        member_verifier=MemberVerifier(),
    )


@pytest.fixture
async def event(event_store: EventStoreImpl, gold_event: Event) -> Event:
    await event_store.create_event(event=gold_event)
    return gold_event


@pytest.fixture
async def session(
    event: Event,
    event_store: EventStoreImpl,
    booking_store: BookingStoreImpl,
    commit_use_case: CommitBookingUseCase,
) -> CheckoutSession:
    return await CheckoutSession.open(
        event_id=event.id,
        event_store=event_store,
        booking_store=booking_store,
        commit_use_case=commit_use_case,
    )


def _pick(session: CheckoutSession, *seat_ids: str) -> None:
    session.set_target_count(len(seat_ids))
    for seat_id in seat_ids:
        session.toggle(seat_id)


@pytest.mark.unit
class TestCheckoutSessionOpen:
    @pytest.mark.asyncio
    async def test_unknown_event(
        self,
        event_store: EventStoreImpl,
        booking_store: BookingStoreImpl,
        commit_use_case: CommitBookingUseCase,
    ) -> None:
        with pytest.raises(NotFoundError):
            await CheckoutSession.open(
                event_id='missing',
                event_store=event_store,
                booking_store=booking_store,
                commit_use_case=commit_use_case,
            )

    @pytest.mark.asyncio
    async def test_board_reflects_existing_bookings(
        self,
        event: Event,
        event_store: EventStoreImpl,
        booking_store: BookingStoreImpl,
        commit_use_case: CommitBookingUseCase,
    ) -> None:
        await booking_store.create_booking(
            booking=make_booking(event_id=event.id, seat_ids=['Gold-A-4'])
        )

        session = await CheckoutSession.open(
            event_id=event.id,
            event_store=event_store,
            booking_store=booking_store,
            commit_use_case=commit_use_case,
        )

        states = {state.key: state for state in session.seat_states()}
        assert states['Gold-A-4'].status == SeatStatus.BOOKED
        assert states['Gold-A-1'].status == SeatStatus.AVAILABLE
        assert session.selection.state == SelectionState.IDLE


@pytest.mark.unit
class TestCheckoutSessionSnapshots:
    @pytest.mark.asyncio
    async def test_snapshot_drops_taken_pick(self, session: CheckoutSession, event: Event) -> None:
        # Arrange
        _pick(session, 'Gold-A-1', 'Gold-A-2')
        assert session.selection.state == SelectionState.READY

        # Act
        dropped = session.apply_snapshot(
            [make_booking(event_id=event.id, seat_ids=['Gold-A-2'], user_id='user-2')]
        )

        # Assert
        assert dropped == ['Gold-A-2']
        assert session.selection.selected == ['Gold-A-1']
        assert session.selection.state == SelectionState.PICKING

    @pytest.mark.asyncio
    async def test_selected_seat_shows_selected(self, session: CheckoutSession) -> None:
        _pick(session, 'Gold-A-5')

        states = {state.key: state for state in session.seat_states()}

        assert states['Gold-A-5'].is_selected is True
        assert states['Gold-A-5'].status == SeatStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_follow_bookings_applies_pushed_snapshots(
        self, session: CheckoutSession, booking_store: BookingStoreImpl, event: Event
    ) -> None:
        _pick(session, 'Gold-A-1', 'Gold-A-3')

        async with anyio.create_task_group() as tg:
            await tg.start(session.follow_bookings)
            assert booking_store.broadcaster.subscriber_count(topic=f'bookings:{event.id}') == 1

            await booking_store.create_booking(
                booking=make_booking(event_id=event.id, seat_ids=['Gold-A-3'], user_id='user-2')
            )
            with anyio.fail_after(1):
                while 'Gold-A-3' in session.selection.selected:
                    await anyio.sleep(0.01)
            tg.cancel_scope.cancel()

        assert session.selection.selected == ['Gold-A-1']
        assert booking_store.broadcaster.subscriber_count(topic=f'bookings:{event.id}') == 0

    @pytest.mark.asyncio
    async def test_booking_written_before_subscribing_is_applied(
        self, session: CheckoutSession, booking_store: BookingStoreImpl, event: Event
    ) -> None:
        # Arrange: booked after the board was read, while nobody was subscribed
        _pick(session, 'Gold-A-1', 'Gold-A-2')
        await booking_store.create_booking(
            booking=make_booking(event_id=event.id, seat_ids=['Gold-A-2'], user_id='user-2')
        )

        # Act
        async with anyio.create_task_group() as tg:
            await tg.start(session.follow_bookings)
            tg.cancel_scope.cancel()

        # Assert
        assert session.selection.selected == ['Gold-A-1']
        assert session.board.status_of('Gold-A-2') == SeatStatus.BOOKED


@pytest.mark.unit
class TestCheckoutSessionCommit:
    @pytest.mark.asyncio
    async def test_successful_commit(self, session: CheckoutSession) -> None:
        _pick(session, 'Gold-A-1', 'Gold-A-2')

        result = await session.commit(
            user_id='user-1',
            attendees=[
                AttendeeDraft(seat_id='Gold-A-1', attendee_name='Asha Rao'),
                AttendeeDraft(seat_id='Gold-A-2', attendee_name='Rohan Mehta'),
            ],
        )

        assert result.total == 1000
        assert session.result is result
        assert session.selection.state == SelectionState.COMMITTED

    @pytest.mark.asyncio
    async def test_attendees_must_match_selection(self, session: CheckoutSession) -> None:
        _pick(session, 'Gold-A-1')

        with pytest.raises(ValidationError):
            await session.commit(
                user_id='user-1',
                attendees=[AttendeeDraft(seat_id='Gold-A-2', attendee_name='Asha Rao')],
            )

        assert session.selection.state == SelectionState.READY

    @pytest.mark.asyncio
    async def test_lost_seat_returns_to_picking(
        self, session: CheckoutSession, booking_store: BookingStoreImpl, event: Event
    ) -> None:
        # Arrange: another user books Gold-A-2 after this session picked it
        _pick(session, 'Gold-A-1', 'Gold-A-2')
        await booking_store.create_booking(
            booking=make_booking(event_id=event.id, seat_ids=['Gold-A-2'], user_id='user-2')
        )

        # Act
        with pytest.raises(AvailabilityConflict) as exc_info:
            await session.commit(
                user_id='user-1',
                attendees=[
                    AttendeeDraft(seat_id='Gold-A-1', attendee_name='Asha Rao'),
                    AttendeeDraft(seat_id='Gold-A-2', attendee_name='Rohan Mehta'),
                ],
            )

        # Assert
        assert exc_info.value.seat_ids == ['Gold-A-2']
        assert session.selection.state == SelectionState.PICKING
        assert session.selection.selected == ['Gold-A-1']
        assert not session.board.is_selectable('Gold-A-2')

    @pytest.mark.asyncio
    async def test_storage_failure_keeps_selection_for_retry(self, event: Event) -> None:
        commit_use_case = AsyncMock()
        commit_use_case.commit.side_effect = StorageUnavailable('Booking store is unreachable')
        booking_store = AsyncMock()
        booking_store.list_bookings_for_event.return_value = []
        event_store = AsyncMock()
        event_store.get_event.return_value = event
        session = await CheckoutSession.open(
            event_id=event.id,
            event_store=event_store,
            booking_store=booking_store,
            commit_use_case=commit_use_case,
        )
        _pick(session, 'Gold-A-1')
        attendees = [AttendeeDraft(seat_id='Gold-A-1', attendee_name='Asha Rao')]

        with pytest.raises(StorageUnavailable):
            await session.commit(user_id='user-1', attendees=attendees)

        assert session.selection.state == SelectionState.FAILED
        assert session.selection.last_error == 'Booking store is unreachable'
        assert session.selection.selected == ['Gold-A-1']

    @pytest.mark.asyncio
    async def test_cancel_clears_selection(self, session: CheckoutSession) -> None:
        _pick(session, 'Gold-A-1')

        session.cancel()

        assert session.selection.state == SelectionState.CANCELLED
        assert session.selection.selected == []


@pytest.mark.unit
class TestCheckoutSessionUnexpectedFailures:
    @pytest.mark.asyncio
    async def test_permission_denied_write_ends_failed(
        self,
        session: CheckoutSession,
        booking_store: BookingStoreImpl,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(
            booking_store, 'create_booking', AsyncMock(side_effect=PermissionError('denied'))
        )
        _pick(session, 'Gold-A-1')

        with pytest.raises(StorageUnavailable):
            await session.commit(
                user_id='user-1',
                attendees=[AttendeeDraft(seat_id='Gold-A-1', attendee_name='Asha Rao')],
            )

        assert session.selection.state == SelectionState.FAILED
        assert 'Nothing was booked' in session.selection.last_error

    @pytest.mark.asyncio
    async def test_unexpected_error_ends_failed(self, event: Event) -> None:
        commit_use_case = AsyncMock()
        commit_use_case.commit.side_effect = RuntimeError('codec exploded')
        booking_store = AsyncMock()
        booking_store.list_bookings_for_event.return_value = []
        event_store = AsyncMock()
        event_store.get_event.return_value = event
        session = await CheckoutSession.open(
            event_id=event.id,
            event_store=event_store,
            booking_store=booking_store,
            commit_use_case=commit_use_case,
        )
        _pick(session, 'Gold-A-1')

        with pytest.raises(RuntimeError):
            await session.commit(
                user_id='user-1',
                attendees=[AttendeeDraft(seat_id='Gold-A-1', attendee_name='Asha Rao')],
            )

        assert session.selection.state == SelectionState.FAILED
        assert session.selection.last_error == 'codec exploded'
        assert session.selection.selected == ['Gold-A-1']
