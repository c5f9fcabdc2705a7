"""
Seat Selection Domain

Client-local selection before checkout. Nothing here takes a hold on the
store: two sessions may pick the same seat, the commit protocol re-validates.

    idle -> picking <-> ready -> committing -> committed
                                    |
                                    +-> failed -> (recover) picking/ready
    any non-terminal state -> cancelled
"""

from typing import Iterable, Optional

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.box_office_errors import (
    SeatUnavailableError,
    SelectionLimitError,
    SelectionStateError,
)
from src.service.box_office.domain.enum.selection_state import SelectionState
from src.service.box_office.domain.seat_availability_domain import SeatAvailabilityBoard


MAX_SEATS_PER_BOOKING = 6


class SeatSelection:
    def __init__(self, *, max_seats: int = MAX_SEATS_PER_BOOKING) -> None:
        self.max_seats = max_seats
        self.state = SelectionState.IDLE
        self.target_count = 0
        self._selected: list[str] = []
        self.last_error: Optional[str] = None

    @property
    def selected(self) -> list[str]:
        """Selected seat ids in pick order"""
        return list(self._selected)

    def _reevaluate(self) -> None:
        if self.target_count == 0:
            self.state = SelectionState.IDLE
        elif len(self._selected) == self.target_count:
            self.state = SelectionState.READY
        else:
            self.state = SelectionState.PICKING

    def _ensure_editable(self) -> None:
        if self.state in (
            SelectionState.COMMITTING,
            SelectionState.COMMITTED,
            SelectionState.CANCELLED,
        ):
            raise SelectionStateError(f'Selection cannot change while {self.state}')
        if self.state == SelectionState.FAILED:
            self.recover()

    @Logger.io
    def set_target_count(self, count: int) -> list[str]:
        """
        Choose how many tickets to book.

        Shrinking below the current selection drops the latest picks.

        Returns:
            Seat ids removed by the truncation
        """
        self._ensure_editable()
        if count < 1:
            raise ValidationError('Ticket count must be at least 1')
        if count > self.max_seats:
            raise SelectionLimitError(
                f'You can book at most {self.max_seats} seats at a time',
                target_count=self.max_seats,
            )
        self.target_count = count
        dropped = self._selected[count:]
        del self._selected[count:]
        self._reevaluate()
        return dropped

    @Logger.io
    def toggle(self, seat_id: str, *, board: SeatAvailabilityBoard) -> bool:
        """
        Add or remove one seat.

        Returns:
            True when the seat is now selected, False when it was removed
        """
        self._ensure_editable()
        if seat_id in self._selected:
            self._selected.remove(seat_id)
            self._reevaluate()
            return False

        if self.state == SelectionState.IDLE:
            raise SelectionStateError('Choose the number of tickets before picking seats')
        if not board.has_seat(seat_id):
            raise ValidationError(f'Unknown seat: {seat_id}')
        if not board.is_selectable(seat_id):
            raise SeatUnavailableError(f'Seat {seat_id} is not available', seat_id=seat_id)
        if len(self._selected) >= self.target_count:
            raise SelectionLimitError(
                f'You can only select {self.target_count} seats',
                target_count=self.target_count,
            )

        self._selected.append(seat_id)
        self._reevaluate()
        return True

    def remove_seats(self, seat_ids: Iterable[str]) -> list[str]:
        removing = set(seat_ids)
        removed = [seat_id for seat_id in self._selected if seat_id in removing]
        self._selected = [seat_id for seat_id in self._selected if seat_id not in removing]
        return removed

    @Logger.io
    def prune_unavailable(self, board: SeatAvailabilityBoard) -> list[str]:
        """Drop picks a newer booking snapshot has taken."""
        if self.state.is_terminal or self.state == SelectionState.COMMITTING:
            return []
        removed = self.remove_seats(board.unavailable(self._selected))
        if removed and self.state != SelectionState.FAILED:
            self._reevaluate()
        return removed

    @Logger.io
    def begin_commit(self) -> list[str]:
        if self.state != SelectionState.READY:
            raise SelectionStateError(f'Cannot check out while {self.state}')
        self.state = SelectionState.COMMITTING
        self.last_error = None
        return self.selected

    def mark_committed(self) -> None:
        if self.state != SelectionState.COMMITTING:
            raise SelectionStateError(f'Cannot complete checkout while {self.state}')
        self.state = SelectionState.COMMITTED

    def mark_failed(self, reason: str) -> None:
        if self.state != SelectionState.COMMITTING:
            raise SelectionStateError(f'Cannot fail checkout while {self.state}')
        self.state = SelectionState.FAILED
        self.last_error = reason

    def recover(self) -> None:
        if self.state != SelectionState.FAILED:
            raise SelectionStateError(f'Nothing to recover while {self.state}')
        self._reevaluate()

    def reopen(self, conflicting_seat_ids: Iterable[str]) -> list[str]:
        """Abort a commit that lost seats to another booking and go back to picking."""
        if self.state != SelectionState.COMMITTING:
            raise SelectionStateError(f'Cannot reopen selection while {self.state}')
        removed = self.remove_seats(conflicting_seat_ids)
        self._reevaluate()
        return removed

    def cancel(self) -> None:
        if self.state.is_terminal:
            raise SelectionStateError(f'Selection already {self.state}')
        self._selected.clear()
        self.target_count = 0
        self.state = SelectionState.CANCELLED
