from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.entity.event_entity import Event


class GetEventUseCase:
    def __init__(self, *, event_store: IEventStore) -> None:
        self.event_store = event_store

    @classmethod
    @inject
    def depends(
        cls, event_store: IEventStore = Depends(Provide[Container.event_store])
    ) -> Self:
        return cls(event_store=event_store)

    @Logger.io
    async def get_by_id(self, *, event_id: str) -> Event:
        event = await self.event_store.get_event(event_id=event_id)
        if event is None:
            raise NotFoundError(f'Event not found: {event_id}')
        return event
