"""
Booking Commit Domain

Local attendee validation and pricing for the commit protocol. Nothing here
reads or writes a store.
"""

from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.service.box_office.domain.entity.booking_entity import Attendee
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.domain.enum.verification_reason import VerificationReason
from src.service.box_office.domain.seat_availability_domain import SeatAvailabilityBoard


MIN_ATTENDEE_NAME_LENGTH = 2


@attrs.define(frozen=True)
class AttendeeDraft:
    seat_id: str
    attendee_name: str
    member_code: Optional[str] = None

    @property
    def claimed_code(self) -> Optional[str]:
        code = (self.member_code or '').strip()
        return code or None


@attrs.define(frozen=True)
class VerificationOutcome:
    seat_id: str
    member_code: str
    verified: bool
    reason: Optional[VerificationReason] = None
    member_name: Optional[str] = None


def validate_attendee_drafts(
    drafts: Iterable[AttendeeDraft], *, board: SeatAvailabilityBoard, max_seats: int
) -> list[AttendeeDraft]:
    drafts = list(drafts)
    if not drafts:
        raise ValidationError('At least one attendee is required')
    if len(drafts) > max_seats:
        raise ValidationError(f'You can book at most {max_seats} seats at a time')

    seen_seats: set[str] = set()
    for draft in drafts:
        if len(draft.attendee_name.strip()) < MIN_ATTENDEE_NAME_LENGTH:
            raise ValidationError(
                f'Attendee name for seat {draft.seat_id} must be at least '
                f'{MIN_ATTENDEE_NAME_LENGTH} characters'
            )
        if draft.seat_id in seen_seats:
            raise ValidationError(f'Seat {draft.seat_id} appears more than once')
        if not board.has_seat(draft.seat_id):
            raise ValidationError(f'Unknown seat: {draft.seat_id}')
        seen_seats.add(draft.seat_id)
    return drafts


def build_attendee(draft: AttendeeDraft, *, price: int, member: Optional[Member]) -> Attendee:
    if member is None:
        return Attendee(
            seat_id=draft.seat_id,
            price=price,
            attendee_name=draft.attendee_name.strip(),
            member_code=draft.claimed_code,
        )
    return Attendee(
        seat_id=draft.seat_id,
        price=price,
        attendee_name=member.name,
        member_code=draft.claimed_code,
        is_member=True,
        member_verified=True,
        member_id=member.member_id,
    )
