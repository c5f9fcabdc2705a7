"""
Checkout Use Case

One-shot HTTP checkout. The request carries the whole selection, which is
replayed through a CheckoutSession so the same selection rules apply as in an
interactive session: seat count, availability at pick time, then the commit
protocol.
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.app.checkout_session import CheckoutSession
from src.service.box_office.app.command.commit_booking_use_case import CommitBookingUseCase
from src.service.box_office.app.dto.checkout_result import CheckoutResult
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.booking_commit_domain import (
    AttendeeDraft,
    validate_attendee_drafts,
)
from src.service.box_office.domain.box_office_errors import AvailabilityConflict


class CheckoutUseCase:
    def __init__(
        self,
        *,
        event_store: IEventStore,
        booking_store: IBookingStore,
        commit_use_case: CommitBookingUseCase,
        max_seats: int = settings.MAX_SEATS_PER_BOOKING,
    ) -> None:
        self.event_store = event_store
        self.booking_store = booking_store
        self.commit_use_case = commit_use_case
        self.max_seats = max_seats
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        event_store: IEventStore = Depends(Provide[Container.event_store]),
        booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
        commit_use_case: CommitBookingUseCase = Depends(CommitBookingUseCase.depends),
    ) -> Self:
        return cls(
            event_store=event_store,
            booking_store=booking_store,
            commit_use_case=commit_use_case,
        )

    @Logger.io
    async def checkout(
        self, *, user_id: str, event_id: str, attendees: list[AttendeeDraft]
    ) -> CheckoutResult:
        with self.tracer.start_as_current_span(
            'use_case.checkout',
            attributes={'event.id': event_id, 'user.id': user_id},
        ):
            session = await CheckoutSession.open(
                event_id=event_id,
                event_store=self.event_store,
                booking_store=self.booking_store,
                commit_use_case=self.commit_use_case,
                max_seats=self.max_seats,
            )
            drafts = validate_attendee_drafts(
                attendees, board=session.board, max_seats=self.max_seats
            )
            # Report every taken seat at once instead of failing on the first pick
            if conflicts := session.board.unavailable(draft.seat_id for draft in drafts):
                metrics.record_conflict(event_id=event_id, seat_count=len(conflicts))
                raise AvailabilityConflict(conflicts)

            session.set_target_count(len(drafts))
            for draft in drafts:
                session.toggle(draft.seat_id)

            return await session.commit(user_id=user_id, attendees=drafts)
