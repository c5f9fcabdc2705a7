from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.create_event_use_case import load_seating_chart
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.entity.event_entity import Event


class UpdateEventUseCase:
    def __init__(self, *, event_store: IEventStore) -> None:
        self.event_store = event_store

    @classmethod
    @inject
    def depends(
        cls, event_store: IEventStore = Depends(Provide[Container.event_store])
    ) -> Self:
        return cls(event_store=event_store)

    @Logger.io
    async def update(self, *, event_id: str, changes: dict[str, Any]) -> Event:
        """Partial admin edit; only keys present in `changes` are touched."""
        event = await self.event_store.get_event(event_id=event_id)
        if event is None:
            raise NotFoundError(f'Event not found: {event_id}')

        if 'seating_chart' in changes:
            changes = {**changes, 'seating_chart': load_seating_chart(changes['seating_chart'])}
        updated = event.update(**changes)
        await self.event_store.update_event(event=updated)

        Logger.base.info(f'✏️ [UPDATE_EVENT] Updated event {event_id}: {sorted(changes)}')
        return updated
