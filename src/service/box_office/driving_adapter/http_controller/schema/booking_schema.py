from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.box_office.driving_adapter.http_controller.schema.member_schema import (
    VerificationResponse,
)


class AttendeeRequest(BaseModel):
    seat_id: str
    attendee_name: str
    member_code: Optional[str] = None


class BookingCreateRequest(BaseModel):
    event_id: str
    attendees: List[AttendeeRequest] = Field(min_length=1)

    class Config:
        json_schema_extra = {
            'example': {
                'event_id': '0192c0de-...',
                'attendees': [
                    {'seat_id': 'Gold-A-left-2', 'attendee_name': 'Asha Rao'},
                    {
                        'seat_id': 'Gold-A-left-3',
                        'attendee_name': 'Rohan Mehta',
                        'member_code': 'RIC-ROHAN-1002',
                    },
                ],
            }
        }


class AttendeeResponse(BaseModel):
    seat_id: str
    price: int
    attendee_name: str
    member_code: Optional[str]
    is_member: bool
    member_verified: bool
    amount_due: int


class BookingResponse(BaseModel):
    id: str
    user_id: str
    event_id: str
    event_name: str
    event_date: datetime
    attendees: List[AttendeeResponse]
    total: int
    booking_date: datetime


class CheckoutResponse(BaseModel):
    booking: BookingResponse
    verifications: List[VerificationResponse]
    total: int


class BookingReportResponse(BaseModel):
    event_id: str
    seats_sold: int
    revenue: int
    member_seats: int
    bookings: List[BookingResponse]
