"""Entity <-> document mapping for the document stores."""

from datetime import date, datetime
from typing import Any, Optional

from uuid_utils import UUID

from src.service.box_office.domain.entity.booking_entity import Attendee, Booking
from src.service.box_office.domain.entity.event_entity import Event, TicketType
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.domain.entity.seating_chart_entity import SeatingChart
from src.service.box_office.domain.enum.event_category import EventCategory


def _datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def event_to_document(event: Event) -> dict[str, Any]:
    return {
        'id': event.id,
        'name': event.name,
        'description': event.description,
        'category': str(event.category),
        'date': event.date,
        'location': event.location,
        'venue': event.venue,
        'image': event.image,
        'showtimes': event.showtimes,
        'ticket_types': [{'type': t.name, 'price': t.price} for t in event.ticket_types],
        'seating_chart': event.seating_chart.to_dict() if event.seating_chart else None,
        'reserved_seats': event.reserved_seats,
        'created_at': event.created_at,
        'updated_at': event.updated_at,
    }


def event_from_document(doc: dict[str, Any]) -> Event:
    return Event(
        id=doc['id'],
        name=doc['name'],
        description=doc.get('description', ''),
        category=EventCategory(doc['category']),
        date=datetime.fromisoformat(doc['date']),
        location=doc.get('location', ''),
        venue=doc['venue'],
        image=doc.get('image', ''),
        showtimes=list(doc.get('showtimes') or []),
        ticket_types=[
            TicketType(name=t['type'], price=t['price']) for t in doc.get('ticket_types') or []
        ],
        seating_chart=SeatingChart.from_dict(doc['seating_chart'])
        if doc.get('seating_chart')
        else None,
        reserved_seats=list(doc.get('reserved_seats') or []),
        created_at=_datetime(doc.get('created_at')),
        updated_at=_datetime(doc.get('updated_at')),
    )


def booking_to_document(booking: Booking) -> dict[str, Any]:
    return {
        'id': str(booking.id),
        'user_id': booking.user_id,
        'event_id': booking.event_id,
        'event_name': booking.event_name,
        'event_date': booking.event_date,
        'attendees': [
            {
                'seat_id': a.seat_id,
                'price': a.price,
                'attendee_name': a.attendee_name,
                'member_code': a.member_code,
                'is_member': a.is_member,
                'member_verified': a.member_verified,
                'member_id': a.member_id,
            }
            for a in booking.attendees
        ],
        'total': booking.total,
        'booking_date': booking.booking_date,
    }


def booking_from_document(doc: dict[str, Any]) -> Booking:
    return Booking(
        id=UUID(doc['id']),
        user_id=doc['user_id'],
        event_id=doc['event_id'],
        event_name=doc['event_name'],
        event_date=datetime.fromisoformat(doc['event_date']),
        attendees=tuple(Attendee(**attendee) for attendee in doc['attendees']),
        total=doc['total'],
        booking_date=datetime.fromisoformat(doc['booking_date']),
    )


def member_to_document(member: Member) -> dict[str, Any]:
    return {
        'member_id': member.member_id,
        'name': member.name,
        'email': member.email,
        'coupon_code': member.coupon_code,
        'phone': member.phone,
        'address': member.address,
        'date_of_birth': member.date_of_birth,
        'date_of_admission': member.date_of_admission,
        'emergency_contact': member.emergency_contact,
        'application_id': member.application_id,
        'category_type': member.category_type,
        'category_acronym': member.category_acronym,
    }


def member_from_document(doc: dict[str, Any]) -> Member:
    return Member(
        member_id=doc['member_id'],
        name=doc['name'],
        email=doc['email'],
        coupon_code=doc['coupon_code'],
        phone=doc.get('phone', ''),
        address=doc.get('address', ''),
        date_of_birth=_date(doc.get('date_of_birth')),
        date_of_admission=_date(doc.get('date_of_admission')),
        emergency_contact=doc.get('emergency_contact', ''),
        application_id=doc.get('application_id'),
        category_type=doc.get('category_type'),
        category_acronym=doc.get('category_acronym'),
    )
