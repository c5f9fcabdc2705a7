"""
Checkout Session

One user's interactive checkout for one event: the availability board, the
selection state machine and the commit, glued together. Selection is local;
nothing is held on the store until the commit writes the booking.
"""

from typing import Optional

import anyio
from anyio.abc import TaskStatus

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError, NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.commit_booking_use_case import (
    CommitBookingUseCase,
    storage_failures_as_unavailable,
)
from src.service.box_office.app.dto.checkout_result import CheckoutResult
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.booking_commit_domain import AttendeeDraft
from src.service.box_office.domain.box_office_errors import AvailabilityConflict
from src.service.box_office.domain.entity.booking_entity import Booking
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.seat_availability_domain import (
    SeatAvailabilityBoard,
    SeatState,
)
from src.service.box_office.domain.seat_selection_domain import SeatSelection


class CheckoutSession:
    def __init__(
        self,
        *,
        event: Event,
        board: SeatAvailabilityBoard,
        booking_store: IBookingStore,
        commit_use_case: CommitBookingUseCase,
        max_seats: int = settings.MAX_SEATS_PER_BOOKING,
    ) -> None:
        self.event = event
        self.board = board
        self.booking_store = booking_store
        self.commit_use_case = commit_use_case
        self.selection = SeatSelection(max_seats=max_seats)
        self.result: Optional[CheckoutResult] = None

    @classmethod
    @Logger.io
    async def open(
        cls,
        *,
        event_id: str,
        event_store: IEventStore,
        booking_store: IBookingStore,
        commit_use_case: CommitBookingUseCase,
        max_seats: int = settings.MAX_SEATS_PER_BOOKING,
    ) -> 'CheckoutSession':
        with storage_failures_as_unavailable():
            event = await event_store.get_event(event_id=event_id)
            if event is None:
                raise NotFoundError(f'Event not found: {event_id}')
            bookings = await booking_store.list_bookings_for_event(event_id=event_id)
        return cls(
            event=event,
            board=SeatAvailabilityBoard.for_event(event, bookings),
            booking_store=booking_store,
            commit_use_case=commit_use_case,
            max_seats=max_seats,
        )

    # ========== Availability ==========

    def apply_snapshot(self, bookings: list[Booking]) -> list[str]:
        """
        Replace the booked set with a pushed snapshot.

        Returns:
            Selected seats that were dropped because someone else booked them
        """
        self.board.replace_bookings(bookings)
        if dropped := self.selection.prune_unavailable(self.board):
            Logger.base.info(f'🔄 [CHECKOUT] Seats taken by another booking: {dropped}')
        return dropped

    async def refresh(self) -> list[str]:
        return self.apply_snapshot(
            await self.booking_store.list_bookings_for_event(event_id=self.event.id)
        )

    async def follow_bookings(
        self, *, task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED
    ) -> None:
        """Apply every booking snapshot pushed for this event until cancelled."""
        stream = await self.booking_store.subscribe(event_id=self.event.id)
        try:
            # Bookings written before the subscription existed are never pushed
            await self.refresh()
            task_status.started()
            async for snapshot in stream:
                self.apply_snapshot(snapshot)
        finally:
            with anyio.CancelScope(shield=True):
                await self.booking_store.unsubscribe(event_id=self.event.id, stream=stream)

    def seat_states(self) -> list[SeatState]:
        return self.board.seat_states(selected=self.selection.selected)

    # ========== Selection ==========

    def set_target_count(self, count: int) -> list[str]:
        return self.selection.set_target_count(count)

    def toggle(self, seat_id: str) -> bool:
        return self.selection.toggle(seat_id, board=self.board)

    def cancel(self) -> None:
        self.selection.cancel()

    # ========== Commit ==========

    @Logger.io
    async def commit(self, *, user_id: str, attendees: list[AttendeeDraft]) -> CheckoutResult:
        if sorted(a.seat_id for a in attendees) != sorted(self.selection.selected):
            raise ValidationError('Attendees must match the selected seats')

        self.selection.begin_commit()
        try:
            result = await self.commit_use_case.commit(
                user_id=user_id, event_id=self.event.id, attendees=attendees
            )
        except AvailabilityConflict as e:
            self.selection.reopen(e.seat_ids)
            await self.refresh()
            raise
        except CustomBaseError as e:
            self.selection.mark_failed(e.message)
            raise
        except (Exception, anyio.get_cancelled_exc_class()) as e:
            # Any other exit still ends the commit
            self.selection.mark_failed(str(e) or type(e).__name__)
            raise

        self.selection.mark_committed()
        self.result = result
        return result
