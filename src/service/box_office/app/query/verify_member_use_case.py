"""
Verify Member Use Case

Pre-checkout check of one membership code against one event, so a user learns
before committing whether the ticket will be free. The commit re-verifies.
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.app.interface.i_member_store import IMemberStore
from src.service.box_office.domain.booking_commit_domain import VerificationOutcome
from src.service.box_office.domain.box_office_errors import VerificationFailure
from src.service.box_office.domain.member_verification_domain import MemberVerifier


class VerifyMemberUseCase:
    def __init__(
        self,
        *,
        event_store: IEventStore,
        booking_store: IBookingStore,
        member_store: IMemberStore,
        member_verifier: MemberVerifier,
    ) -> None:
        self.event_store = event_store
        self.booking_store = booking_store
        self.member_store = member_store
        self.member_verifier = member_verifier

    @classmethod
    @inject
    def depends(
        cls,
        event_store: IEventStore = Depends(Provide[Container.event_store]),
        booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
        member_store: IMemberStore = Depends(Provide[Container.member_store]),
        member_verifier: MemberVerifier = Depends(Provide[Container.member_verifier]),
    ) -> Self:
        return cls(
            event_store=event_store,
            booking_store=booking_store,
            member_store=member_store,
            member_verifier=member_verifier,
        )

    @Logger.io
    async def verify(self, *, event_id: str, code: str, seat_id: str = '') -> VerificationOutcome:
        code = code.strip()
        if not code:
            raise ValidationError('Membership code is required')
        if await self.event_store.get_event(event_id=event_id) is None:
            raise NotFoundError(f'Event not found: {event_id}')

        candidates = await self.member_store.find_member_by_coupon_or_id(code=code)
        bookings = await self.booking_store.list_bookings_for_event(event_id=event_id)
        try:
            member = self.member_verifier.verify(
                code=code, candidates=candidates, event_bookings=bookings
            )
        except VerificationFailure as e:
            metrics.record_verification(outcome=e.reason)
            return VerificationOutcome(
                seat_id=seat_id, member_code=code, verified=False, reason=e.reason
            )

        metrics.record_verification(outcome='verified')
        return VerificationOutcome(
            seat_id=seat_id, member_code=code, verified=True, member_name=member.name
        )
