from datetime import datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.enum.event_category import EventCategory


class ListEventsUseCase:
    def __init__(self, *, event_store: IEventStore) -> None:
        self.event_store = event_store

    @classmethod
    @inject
    def depends(
        cls, event_store: IEventStore = Depends(Provide[Container.event_store])
    ) -> Self:
        return cls(event_store=event_store)

    @Logger.io
    async def list_events(
        self, *, category: Optional[EventCategory] = None, upcoming_only: bool = False
    ) -> List[Event]:
        """Events ordered by date, optionally filtered by category or to future dates"""
        events = await self.event_store.list_events()
        if category is not None:
            events = [event for event in events if event.category == category]
        if upcoming_only:
            now = datetime.now(timezone.utc)
            events = [event for event in events if event.date >= now]
        events.sort(key=lambda event: event.date)

        Logger.base.info(f'✅ [LIST_EVENTS] Found {len(events)} events')
        return events
