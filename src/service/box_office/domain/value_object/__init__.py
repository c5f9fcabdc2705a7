"""Box Office Domain Value Objects"""

from src.service.box_office.domain.value_object.seat_identity import SeatIdentity

__all__ = ['SeatIdentity']
