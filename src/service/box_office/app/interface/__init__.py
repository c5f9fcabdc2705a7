"""Application layer interfaces (Ports)"""

from src.service.box_office.app.interface.i_auth_provider import IAuthProvider
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.app.interface.i_member_store import IMemberStore
from src.service.box_office.app.interface.i_password_hasher import IPasswordHasher
from src.service.box_office.app.interface.i_recommendation_text_service import (
    IRecommendationTextService,
)

__all__ = [
    'IAuthProvider',
    'IBookingStore',
    'IEventStore',
    'IMemberStore',
    'IPasswordHasher',
    'IRecommendationTextService',
]
