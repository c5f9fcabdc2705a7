"""Application layer DTOs"""

from src.service.box_office.app.dto.booking_report import BookingReport
from src.service.box_office.app.dto.checkout_result import CheckoutResult
from src.service.box_office.app.dto.seat_map import SeatMap

__all__ = ['BookingReport', 'CheckoutResult', 'SeatMap']
