from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_event_store import IEventStore


class DeleteEventUseCase:
    def __init__(self, *, event_store: IEventStore) -> None:
        self.event_store = event_store

    @classmethod
    @inject
    def depends(
        cls, event_store: IEventStore = Depends(Provide[Container.event_store])
    ) -> Self:
        return cls(event_store=event_store)

    @Logger.io
    async def delete(self, *, event_id: str) -> None:
        # Bookings are historical records and stay in place
        await self.event_store.delete_event(event_id=event_id)
        Logger.base.info(f'🗑️ [DELETE_EVENT] Deleted event {event_id}')
