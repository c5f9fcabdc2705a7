from abc import ABC, abstractmethod
from typing import Optional

from anyio.streams.memory import MemoryObjectReceiveStream

from src.service.box_office.domain.entity.event_entity import Event


class IEventStore(ABC):
    """Event documents, edited by administrators and read by every booking flow"""

    @abstractmethod
    async def get_event(self, *, event_id: str) -> Optional[Event]:
        pass

    @abstractmethod
    async def list_events(self) -> list[Event]:
        """All events ordered by date"""
        pass

    @abstractmethod
    async def create_event(self, *, event: Event) -> str:
        pass

    @abstractmethod
    async def update_event(self, *, event: Event) -> None:
        pass

    @abstractmethod
    async def delete_event(self, *, event_id: str) -> None:
        pass

    @abstractmethod
    async def subscribe(self) -> MemoryObjectReceiveStream[list[Event]]:
        """Receive the full event list after every change"""
        pass

    @abstractmethod
    async def unsubscribe(self, *, stream: MemoryObjectReceiveStream[list[Event]]) -> None:
        pass
