import pytest

from src.platform.exception.exceptions import ValidationError
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.entity.seating_chart_entity import SeatingChart
from src.service.box_office.domain.enum.seat_status import SeatStatus
from src.service.box_office.domain.seat_availability_domain import SeatAvailabilityBoard
from test.factories import build_event, make_booking


@pytest.mark.unit
class TestSeatAvailabilityBoard:
    def test_reserved_label_is_case_insensitive(self, gold_chart: SeatingChart) -> None:
        board = SeatAvailabilityBoard(chart=gold_chart, reserved_labels=['a-3'])

        assert board.status_of('Gold-A-3') == SeatStatus.RESERVED
        assert board.status_of('Gold-A-2') == SeatStatus.AVAILABLE

    def test_reserved_and_booked_are_independent(self, gold_chart: SeatingChart) -> None:
        board = SeatAvailabilityBoard(
            chart=gold_chart, reserved_labels=['A-3'], booked_seat_ids=['Gold-A-3']
        )

        state = board.state_of('Gold-A-3')

        assert state.is_reserved is True
        assert state.is_booked is True
        assert state.status == SeatStatus.BOOKED

    def test_aisle_parts_match_on_display_label(self, stalls_chart: SeatingChart) -> None:
        board = SeatAvailabilityBoard(chart=stalls_chart, reserved_labels=['A-5', 'aa-2'])

        assert board.is_reserved('Gold-A-right-5') is True
        assert board.is_reserved('Bronze-R1-2') is True
        assert board.is_reserved('Gold-A-left-2') is False

    def test_snapshot_replaces_booked_set(self, gold_event: Event) -> None:
        board = SeatAvailabilityBoard.for_event(
            gold_event, [make_booking(event_id=gold_event.id, seat_ids=['Gold-A-1'])]
        )
        assert board.booked_seat_ids == {'Gold-A-1'}

        board.replace_bookings([make_booking(event_id=gold_event.id, seat_ids=['Gold-A-4'])])

        assert board.booked_seat_ids == {'Gold-A-4'}
        assert board.status_of('Gold-A-1') == SeatStatus.AVAILABLE

    def test_unavailable_lists_reserved_booked_and_unknown(self, gold_chart: SeatingChart) -> None:
        board = SeatAvailabilityBoard(
            chart=gold_chart, reserved_labels=['A-2'], booked_seat_ids=['Gold-A-4']
        )

        result = board.unavailable(['Gold-A-1', 'Gold-A-2', 'Gold-A-4', 'Gold-Z-1'])

        assert result == ['Gold-A-2', 'Gold-A-4', 'Gold-Z-1']

    def test_counts(self, gold_chart: SeatingChart) -> None:
        board = SeatAvailabilityBoard(
            chart=gold_chart, reserved_labels=['A-1', 'A-2'], booked_seat_ids=['Gold-A-2']
        )

        assert board.counts() == {
            SeatStatus.AVAILABLE: 3,
            SeatStatus.RESERVED: 1,
            SeatStatus.BOOKED: 1,
        }

    def test_seat_states_mark_selection(self, gold_chart: SeatingChart) -> None:
        board = SeatAvailabilityBoard(chart=gold_chart)

        states = board.seat_states(selected=['Gold-A-2'])

        assert [s.key for s in states if s.is_selected] == ['Gold-A-2']
        assert all(s.price == 500 for s in states)

    def test_reservation_aliases_across_sections(self, stalls_chart: SeatingChart) -> None:
        board = SeatAvailabilityBoard(chart=stalls_chart, reserved_labels=['A-1', 'B-2'])

        aliases = board.reservation_aliases()

        # "A-1" blocks both Gold-A-left-1 and Silver-A-1
        assert aliases == {'A-1': ['Gold-A-left-1', 'Silver-A-1']}
        assert board.is_reserved('Silver-A-1') is True

    def test_unknown_seat_raises(self, gold_chart: SeatingChart) -> None:
        board = SeatAvailabilityBoard(chart=gold_chart)

        with pytest.raises(ValidationError):
            board.status_of('Gold-A-9')
        assert board.is_selectable('Gold-A-9') is False

    def test_event_without_chart_is_rejected(self, gold_chart: SeatingChart) -> None:
        event = build_event(gold_chart, seating_chart=None)

        with pytest.raises(ValidationError):
            SeatAvailabilityBoard.for_event(event)
