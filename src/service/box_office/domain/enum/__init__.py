"""Box Office Domain Enums"""

from src.service.box_office.domain.enum.event_category import EventCategory
from src.service.box_office.domain.enum.seat_status import SeatStatus
from src.service.box_office.domain.enum.selection_state import SelectionState
from src.service.box_office.domain.enum.verification_reason import VerificationReason

__all__ = ['EventCategory', 'SeatStatus', 'SelectionState', 'VerificationReason']
