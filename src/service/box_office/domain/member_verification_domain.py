"""
Member Verification Domain

One membership code waives one ticket price per event. A code is valid when it
matches exactly one member record, and usable when no booking for the same
event already carries a verified attendee for that member.
"""

from typing import Collection, Iterable

from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.box_office_errors import VerificationFailure
from src.service.box_office.domain.entity.booking_entity import Booking
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.domain.enum.verification_reason import VerificationReason


class MemberVerifier:
    @Logger.io
    def verify(
        self,
        *,
        code: str,
        candidates: Iterable[Member],
        event_bookings: Iterable[Booking],
        claimed_member_ids: Collection[int] = (),
    ) -> Member:
        """
        Args:
            code: coupon code or numeric member id as typed by the user
            candidates: member store lookup result for the code
            event_bookings: committed bookings of the event being booked
            claimed_member_ids: members already verified earlier in the same checkout

        Raises:
            VerificationFailure: reason invalid_code or already_used
        """
        code = code.strip()
        matches = {member.member_id: member for member in candidates if member.matches_code(code)}
        if len(matches) != 1:
            raise VerificationFailure(member_code=code, reason=VerificationReason.INVALID_CODE)
        member = next(iter(matches.values()))

        if member.member_id in claimed_member_ids or self.is_used(member, event_bookings):
            raise VerificationFailure(member_code=code, reason=VerificationReason.ALREADY_USED)

        Logger.base.info(f'✅ [MEMBER] Verified member {member.member_id} for code {code}')
        return member

    @staticmethod
    def is_used(member: Member, event_bookings: Iterable[Booking]) -> bool:
        for booking in event_bookings:
            for attendee in booking.member_attendees():
                if attendee.member_id == member.member_id:
                    return True
                if attendee.member_code and member.matches_code(attendee.member_code):
                    return True
        return False
