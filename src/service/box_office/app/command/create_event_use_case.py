"""
Create Event Use Case

Admin event creation. The seating chart is loaded and resolved before the
event is stored, so a chart with overlapping row-parts never reaches the
store.
"""

from datetime import datetime
from typing import Any, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.entity.event_entity import Event, TicketType
from src.service.box_office.domain.entity.seating_chart_entity import SeatingChart
from src.service.box_office.domain.enum.event_category import EventCategory
from src.service.box_office.domain.seat_resolver_domain import resolve_rows


def load_seating_chart(raw_chart: Optional[dict[str, Any]]) -> Optional[SeatingChart]:
    if raw_chart is None:
        return None
    chart = SeatingChart.from_dict(raw_chart)
    resolve_rows(chart)
    return chart


class CreateEventUseCase:
    def __init__(self, *, event_store: IEventStore) -> None:
        self.event_store = event_store

    @classmethod
    @inject
    def depends(
        cls, event_store: IEventStore = Depends(Provide[Container.event_store])
    ) -> Self:
        return cls(event_store=event_store)

    @Logger.io
    async def create(
        self,
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
        seating_chart: Optional[dict[str, Any]] = None,
        reserved_seats: Optional[list[str]] = None,
    ) -> Event:
        event = Event.create(
            name=name,
            description=description,
            category=category,
            date=date,
            location=location,
            venue=venue,
            image=image,
            showtimes=showtimes,
            ticket_types=ticket_types,
            seating_chart=load_seating_chart(seating_chart),
            reserved_seats=reserved_seats,
        )
        await self.event_store.create_event(event=event)

        Logger.base.info(f'✅ [CREATE_EVENT] Created event {event.id}: {event.name}')
        return event
