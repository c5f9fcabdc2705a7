"""Checkout result DTO."""

import attrs

from src.service.box_office.domain.booking_commit_domain import VerificationOutcome
from src.service.box_office.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class CheckoutResult:
    """
    Committed booking plus what happened to each membership claim.

    A failed claim never aborts the checkout: that attendee pays full price
    and the outcome explains why.
    """

    booking: Booking
    verifications: tuple[VerificationOutcome, ...] = ()

    @property
    def total(self) -> int:
        return self.booking.total

    @property
    def failed_verifications(self) -> list[VerificationOutcome]:
        return [outcome for outcome in self.verifications if not outcome.verified]
