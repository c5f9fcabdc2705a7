"""
Box office domain errors.

All of them derive from the platform hierarchy so the HTTP layer maps them
to status codes, and `@Logger.io` logs them without a traceback. Errors that
carry structured detail expose it through `context`, which the exception
handler merges into the JSON body.
"""

from typing import Iterable

from src.platform.exception.exceptions import ConflictError, DomainError, ValidationError
from src.service.box_office.domain.enum.verification_reason import VerificationReason


class SeatingChartError(ValidationError):
    """Malformed tier, section or row in a seating chart definition"""


class SeatingChartIntegrityError(SeatingChartError):
    """Row-parts sharing a display label overlap inside one section"""

    def __init__(self, message: str, *, section_name: str, row_label: str) -> None:
        super().__init__(message)
        self.section_name = section_name
        self.row_label = row_label
        self.context = {'section': section_name, 'row_label': row_label}


class SelectionLimitError(DomainError):
    def __init__(self, message: str, *, target_count: int) -> None:
        super().__init__(message, 400)
        self.target_count = target_count
        self.context = {'target_count': target_count}


class SeatUnavailableError(DomainError):
    def __init__(self, message: str, *, seat_id: str) -> None:
        super().__init__(message, 400)
        self.seat_id = seat_id
        self.context = {'seat_id': seat_id}


class SelectionStateError(DomainError):
    """Operation not allowed in the current selection state"""


class VerificationFailure(DomainError):
    def __init__(self, *, member_code: str, reason: VerificationReason) -> None:
        message = (
            f'Membership code {member_code} has already been used for this event'
            if reason == VerificationReason.ALREADY_USED
            else f'Membership code {member_code} is not valid'
        )
        super().__init__(message, 400)
        self.member_code = member_code
        self.reason = reason
        self.context = {'reason': str(reason), 'member_code': member_code}


class AvailabilityConflict(ConflictError):
    def __init__(self, seat_ids: Iterable[str]) -> None:
        self.seat_ids = sorted(set(seat_ids))
        super().__init__(f'Seats no longer available: {", ".join(self.seat_ids)}')
        self.context = {'seat_ids': self.seat_ids}
