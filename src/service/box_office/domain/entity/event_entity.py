from datetime import datetime, timezone
from typing import Any, Optional

import attrs
import uuid_utils

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.seating_chart_entity import SeatingChart
from src.service.box_office.domain.enum.event_category import EventCategory
from src.service.box_office.domain.value_object.seat_identity import normalize_reservation_label


@attrs.define(frozen=True)
class TicketType:
    name: str
    price: int


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes from admin forms are taken as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _normalize_reserved(labels: list[str]) -> list[str]:
    normalized: list[str] = []
    for label in labels:
        value = normalize_reservation_label(label)
        if value and value not in normalized:
            normalized.append(value)
    return normalized


@attrs.define
class Event:
    id: str
    name: str
    description: str
    category: EventCategory
    date: datetime
    location: str
    venue: str
    image: str = ''
    showtimes: list[str] = attrs.field(factory=list)
    ticket_types: list[TicketType] = attrs.field(factory=list)
    seating_chart: Optional[SeatingChart] = None
    reserved_seats: list[str] = attrs.field(factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return any(ticket_type.price > 0 for ticket_type in self.ticket_types)

    @staticmethod
    def _validate(*, name: str, venue: str, ticket_types: list[TicketType]) -> None:
        if not name or not name.strip():
            raise ValidationError('Event name is required')
        if not venue or not venue.strip():
            raise ValidationError('Event venue is required')
        for ticket_type in ticket_types:
            if ticket_type.price < 0:
                raise ValidationError(f'Ticket price must not be negative: {ticket_type.name}')

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        name: str,
        description: str,
        category: EventCategory,
        date: datetime,
        location: str,
        venue: str,
        image: str = '',
        showtimes: Optional[list[str]] = None,
        ticket_types: Optional[list[TicketType]] = None,
        seating_chart: Optional[SeatingChart] = None,
        reserved_seats: Optional[list[str]] = None,
    ) -> 'Event':
        ticket_types = ticket_types or []
        cls._validate(name=name, venue=venue, ticket_types=ticket_types)
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid_utils.uuid7()),
            name=name.strip(),
            description=description,
            category=category,
            date=_as_utc(date),
            location=location,
            venue=venue.strip(),
            image=image,
            showtimes=list(showtimes or []),
            ticket_types=ticket_types,
            seating_chart=seating_chart,
            reserved_seats=_normalize_reserved(reserved_seats or []),
            created_at=now,
            updated_at=now,
        )

    @Logger.io
    def update(self, **changes: Any) -> 'Event':
        """Apply an admin edit; `id` and `created_at` never change."""
        changes.pop('id', None)
        changes.pop('created_at', None)
        changes.pop('updated_at', None)
        if 'reserved_seats' in changes:
            changes['reserved_seats'] = _normalize_reserved(changes['reserved_seats'] or [])
        if changes.get('date') is not None:
            changes['date'] = _as_utc(changes['date'])
        updated = attrs.evolve(self, **changes, updated_at=datetime.now(timezone.utc))
        self._validate(name=updated.name, venue=updated.venue, ticket_types=updated.ticket_types)
        return updated

    @Logger.io
    def toggle_reserved_seat(self, *, label: str) -> 'Event':
        normalized = normalize_reservation_label(label)
        if not normalized:
            raise ValidationError('Seat label is required')
        if normalized in self.reserved_seats:
            reserved = [seat for seat in self.reserved_seats if seat != normalized]
        else:
            reserved = [*self.reserved_seats, normalized]
        return attrs.evolve(self, reserved_seats=reserved, updated_at=datetime.now(timezone.utc))
