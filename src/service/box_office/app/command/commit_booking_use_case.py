from collections.abc import Iterator
from contextlib import contextmanager
from time import perf_counter
from typing import Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, StorageUnavailable, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.app.dto.checkout_result import CheckoutResult
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.app.interface.i_member_store import IMemberStore
from src.service.box_office.domain.booking_commit_domain import (
    AttendeeDraft,
    VerificationOutcome,
    build_attendee,
    validate_attendee_drafts,
)
from src.service.box_office.domain.box_office_errors import (
    AvailabilityConflict,
    VerificationFailure,
)
from src.service.box_office.domain.entity.booking_entity import Booking
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.domain.enum.verification_reason import VerificationReason
from src.service.box_office.domain.member_verification_domain import MemberVerifier
from src.service.box_office.domain.seat_availability_domain import SeatAvailabilityBoard


@contextmanager
def storage_failures_as_unavailable() -> Iterator[None]:
    """Network, permission and other OS-level store failures surface as a retryable 503"""
    try:
        yield
    except OSError as e:
        Logger.base.warning(f'⚠️ [STORE] {type(e).__name__}: {e}')
        raise StorageUnavailable(
            'Booking store is unreachable. Nothing was booked, please try again.'
        ) from e


class CommitBookingUseCase:
    """
    Booking commit protocol

    Flow:
    1. Validate attendees locally (never reaches storage)
    2. Verify every membership claim; a failed claim downgrades the attendee to full price
    3. Re-read the event's bookings and reject seats taken in the meantime
    4. Total = prices of attendees whose membership did not verify
    5. One booking write, bounded by COMMIT_TIMEOUT_SECONDS

    The write is a single document with no condition on seat ids. Two commits
    that both pass step 3 before either writes will both land; step 3 only
    narrows that window.
    """

    def __init__(
        self,
        *,
        event_store: IEventStore,
        booking_store: IBookingStore,
        member_store: IMemberStore,
        member_verifier: MemberVerifier,
        commit_timeout_seconds: float = settings.COMMIT_TIMEOUT_SECONDS,
        max_seats: int = settings.MAX_SEATS_PER_BOOKING,
    ) -> None:
        self.event_store = event_store
        self.booking_store = booking_store
        self.member_store = member_store
        self.member_verifier = member_verifier
        self.commit_timeout_seconds = commit_timeout_seconds
        self.max_seats = max_seats
        self.tracer = trace.get_tracer(__name__)

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
    async def commit(
        self, *, user_id: str, event_id: str, attendees: list[AttendeeDraft]
    ) -> CheckoutResult:
        started = perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.commit_booking',
            attributes={'event.id': event_id, 'booking.attendees': len(attendees)},
        ):
            try:
                with storage_failures_as_unavailable():
                    result = await self._commit(
                        user_id=user_id, event_id=event_id, attendees=attendees
                    )
            except AvailabilityConflict as e:
                metrics.record_conflict(event_id=event_id, seat_count=len(e.seat_ids))
                metrics.record_commit(result='conflict', duration=perf_counter() - started)
                raise
            except ValidationError:
                metrics.record_commit(result='invalid', duration=perf_counter() - started)
                raise
            except StorageUnavailable:
                metrics.record_commit(
                    result='storage_unavailable', duration=perf_counter() - started
                )
                raise

            metrics.record_commit(result='committed', duration=perf_counter() - started)
            metrics.record_booked_seats(event_id=event_id, seat_count=len(attendees))
            return result

    async def _commit(
        self, *, user_id: str, event_id: str, attendees: list[AttendeeDraft]
    ) -> CheckoutResult:
        event = await self.event_store.get_event(event_id=event_id)
        if event is None:
            raise NotFoundError(f'Event not found: {event_id}')

        # Step 1: local validation
        bookings = await self.booking_store.list_bookings_for_event(event_id=event_id)
        board = SeatAvailabilityBoard.for_event(event, bookings)
        drafts = validate_attendee_drafts(attendees, board=board, max_seats=self.max_seats)
        seat_ids = [draft.seat_id for draft in drafts]
        if conflicts := board.unavailable(seat_ids):
            raise AvailabilityConflict(conflicts)

        # Step 2: membership claims
        members, outcomes = await self._verify_members(drafts=drafts, bookings=bookings)

        # Step 3: re-validate against a fresh read right before the write
        fresh_bookings = await self.booking_store.list_bookings_for_event(event_id=event_id)
        board.replace_bookings(fresh_bookings)
        if conflicts := board.unavailable(seat_ids):
            Logger.base.warning(
                f'⚠️ [COMMIT] Seats taken during checkout for event {event_id}: {conflicts}'
            )
            raise AvailabilityConflict(conflicts)
        self._drop_claims_used_meanwhile(members, outcomes, fresh_bookings)

        # Step 4 + 5: price and write
        booking = Booking.create(
            user_id=user_id,
            event_id=event.id,
            event_name=event.name,
            event_date=event.date,
            attendees=[
                build_attendee(
                    draft, price=board.price_of(draft.seat_id), member=members.get(draft.seat_id)
                )
                for draft in drafts
            ],
        )
        await self._write(booking)

        Logger.base.info(
            f'✅ [COMMIT] Booking {booking.id} for event {event.id}: '
            f'{len(booking.attendees)} seats, total {booking.total}'
        )
        return CheckoutResult(booking=booking, verifications=tuple(outcomes.values()))

    async def _verify_members(
        self, *, drafts: list[AttendeeDraft], bookings: list[Booking]
    ) -> tuple[dict[str, Member], dict[str, VerificationOutcome]]:
        members: dict[str, Member] = {}
        outcomes: dict[str, VerificationOutcome] = {}
        for draft in drafts:
            if (code := draft.claimed_code) is None:
                continue
            candidates = await self.member_store.find_member_by_coupon_or_id(code=code)
            try:
                member = self.member_verifier.verify(
                    code=code,
                    candidates=candidates,
                    event_bookings=bookings,
                    claimed_member_ids={m.member_id for m in members.values()},
                )
            except VerificationFailure as e:
                # Non-fatal: the attendee proceeds as a non-member at full price
                metrics.record_verification(outcome=e.reason)
                outcomes[draft.seat_id] = VerificationOutcome(
                    seat_id=draft.seat_id, member_code=code, verified=False, reason=e.reason
                )
                continue

            metrics.record_verification(outcome='verified')
            members[draft.seat_id] = member
            outcomes[draft.seat_id] = VerificationOutcome(
                seat_id=draft.seat_id, member_code=code, verified=True, member_name=member.name
            )
        return members, outcomes

    def _drop_claims_used_meanwhile(
        self,
        members: dict[str, Member],
        outcomes: dict[str, VerificationOutcome],
        fresh_bookings: list[Booking],
    ) -> None:
        for seat_id, member in list(members.items()):
            if self.member_verifier.is_used(member, fresh_bookings):
                del members[seat_id]
                metrics.record_verification(outcome=VerificationReason.ALREADY_USED)
                outcomes[seat_id] = VerificationOutcome(
                    seat_id=seat_id,
                    member_code=outcomes[seat_id].member_code,
                    verified=False,
                    reason=VerificationReason.ALREADY_USED,
                )

    async def _write(self, booking: Booking) -> None:
        try:
            with anyio.fail_after(self.commit_timeout_seconds):
                await self.booking_store.create_booking(booking=booking)
        except TimeoutError as e:
            raise StorageUnavailable(
                'Booking could not be saved in time. Nothing was booked, please try again.'
            ) from e
