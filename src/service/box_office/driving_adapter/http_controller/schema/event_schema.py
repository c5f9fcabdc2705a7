from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.platform.exception.exceptions import ValidationError
from src.service.box_office.domain.enum.event_category import EventCategory
from src.service.box_office.domain.enum.seat_status import SeatStatus


SEATING_CHART_EXAMPLE = {
    'tiers': [
        {
            'name': 'Stalls',
            'sections': [
                {
                    'name': 'Gold',
                    'price': 500,
                    'rows': [
                        {'row_id': 'A-left', 'seats': 3},
                        {'row_id': 'A-right', 'seats': 3, 'offset': 3},
                        {'row_id': 'spacer'},
                        {'row_id': 'B', 'seats': 6},
                    ],
                }
            ],
        }
    ]
}


class TicketTypeSchema(BaseModel):
    type: str
    price: int = Field(ge=0)


class EventCreateRequest(BaseModel):
    name: str
    description: str = ''
    category: EventCategory
    date: datetime
    location: str = ''
    venue: str
    image: str = ''
    showtimes: List[str] = []
    ticket_types: List[TicketTypeSchema] = []
    seating_chart: Optional[Dict[str, Any]] = None
    reserved_seats: List[str] = []

    class Config:
        json_schema_extra = {
            'example': {
                'name': 'Monsoon Ragas',
                'description': 'An evening of Hindustani classical music',
                'category': 'Music',
                'date': '2026-12-12T19:00:00Z',
                'location': 'Pune',
                'venue': 'Main Auditorium',
                'showtimes': ['19:00'],
                'ticket_types': [{'type': 'Gold', 'price': 500}],
                'seating_chart': SEATING_CHART_EXAMPLE,
                'reserved_seats': ['A-1'],
            }
        }


# Value an explicit null resets each clearable field to
CLEARED_VALUES: Dict[str, Any] = {'seating_chart': None, 'image': '', 'description': ''}


class EventUpdateRequest(BaseModel):
    """Every field optional; only the fields sent are changed."""

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[EventCategory] = None
    date: Optional[datetime] = None
    location: Optional[str] = None
    venue: Optional[str] = None
    image: Optional[str] = None
    showtimes: Optional[List[str]] = None
    ticket_types: Optional[List[TicketTypeSchema]] = None
    seating_chart: Optional[Dict[str, Any]] = None
    reserved_seats: Optional[List[str]] = None

    def to_changes(self) -> Dict[str, Any]:
        """
        Fields sent in the request. An explicit null clears the chart, the image or
        the description; other fields cannot be cleared.
        """
        changes = self.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is not None:
                continue
            if field not in CLEARED_VALUES:
                raise ValidationError(f'{field} cannot be cleared')
            changes[field] = CLEARED_VALUES[field]
        return changes


class ToggleReservedSeatRequest(BaseModel):
    label: str

    class Config:
        json_schema_extra = {'example': {'label': 'A-3'}}


class EventResponse(BaseModel):
    id: str
    name: str
    description: str
    category: EventCategory
    date: datetime
    location: str
    venue: str
    image: str
    showtimes: List[str]
    ticket_types: List[TicketTypeSchema]
    seating_chart: Optional[Dict[str, Any]]
    reserved_seats: List[str]
    is_paid: bool


class SeatResponse(BaseModel):
    seat_id: str
    section: str
    row_id: str
    row_label: str
    seat_number: int
    price: int
    status: SeatStatus
    is_reserved: bool
    is_booked: bool

    class Config:
        json_schema_extra = {
            'example': {
                'seat_id': 'Gold-A-left-1',
                'section': 'Gold',
                'row_id': 'A-left',
                'row_label': 'A',
                'seat_number': 1,
                'price': 500,
                'status': 'reserved',
                'is_reserved': True,
                'is_booked': False,
            }
        }


class SeatMapResponse(BaseModel):
    event_id: str
    seats: List[SeatResponse]
    counts: Dict[SeatStatus, int]
    reservation_aliases: Dict[str, List[str]]


class RecommendationRequest(BaseModel):
    preferences: str

    class Config:
        json_schema_extra = {'example': {'preferences': 'Classical music and theatre on weekends'}}


class RecommendationResponse(BaseModel):
    recommendations: List[str]
