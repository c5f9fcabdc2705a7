"""Seat map DTO, shared by the one-shot read and the SSE stream."""

import attrs

from src.service.box_office.domain.enum.seat_status import SeatStatus
from src.service.box_office.domain.seat_availability_domain import (
    SeatAvailabilityBoard,
    SeatState,
)


@attrs.define(frozen=True)
class SeatMap:
    event_id: str
    seats: tuple[SeatState, ...]
    counts: dict[SeatStatus, int]
    reservation_aliases: dict[str, list[str]]

    @classmethod
    def from_board(cls, *, event_id: str, board: SeatAvailabilityBoard) -> 'SeatMap':
        return cls(
            event_id=event_id,
            seats=tuple(board.seat_states()),
            counts=board.counts(),
            reservation_aliases=board.reservation_aliases(),
        )
