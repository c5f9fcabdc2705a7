"""
Toggle Reserved Seat Use Case

Admin blocks or unblocks a seat by its reservation label ("A-3"). The label
must name at least one seat of the event's chart; it may name several when
sections share row labels, and all of them flip together.
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.seat_resolver_domain import resolve
from src.service.box_office.domain.value_object.seat_identity import normalize_reservation_label


class ToggleReservedSeatUseCase:
    def __init__(self, *, event_store: IEventStore) -> None:
        self.event_store = event_store

    @classmethod
    @inject
    def depends(
        cls, event_store: IEventStore = Depends(Provide[Container.event_store])
    ) -> Self:
        return cls(event_store=event_store)

    @Logger.io
    async def toggle(self, *, event_id: str, label: str) -> Event:
        event = await self.event_store.get_event(event_id=event_id)
        if event is None:
            raise NotFoundError(f'Event not found: {event_id}')
        if event.seating_chart is None:
            raise ValidationError(f'Event {event_id} has no seating chart')

        normalized = normalize_reservation_label(label)
        if not any(seat.reservation_label == normalized for seat in resolve(event.seating_chart)):
            raise ValidationError(f'No seat matches label {label}')

        updated = event.toggle_reserved_seat(label=normalized)
        await self.event_store.update_event(event=updated)

        action = 'Reserved' if normalized in updated.reserved_seats else 'Released'
        Logger.base.info(f'🔒 [RESERVED_SEATS] {action} {normalized} for event {event_id}')
        return updated
