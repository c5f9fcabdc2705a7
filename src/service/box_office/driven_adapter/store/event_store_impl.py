from typing import Optional

from anyio.streams.memory import MemoryObjectReceiveStream

from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.driven_adapter.store.document_codec import (
    event_from_document,
    event_to_document,
)
from src.service.box_office.driven_adapter.store.in_memory_document_collection import (
    InMemoryDocumentCollection,
)


EVENTS_TOPIC = 'events'


class EventStoreImpl(IEventStore):
    def __init__(self, *, broadcaster: IInMemoryEventBroadcaster) -> None:
        self.broadcaster = broadcaster
        self._collection = InMemoryDocumentCollection(name='events')

    @Logger.io
    async def get_event(self, *, event_id: str) -> Optional[Event]:
        doc = self._collection.get(event_id)
        return event_from_document(doc) if doc else None

    @Logger.io(truncate_content=True)
    async def list_events(self) -> list[Event]:
        events = [event_from_document(doc) for doc in self._collection.query()]
        return sorted(events, key=lambda event: event.date)

    @Logger.io
    async def create_event(self, *, event: Event) -> str:
        if event.id in self._collection:
            raise ConflictError(f'Event already exists: {event.id}')
        self._collection.put(event.id, event_to_document(event))
        await self._publish()
        return event.id

    @Logger.io
    async def update_event(self, *, event: Event) -> None:
        if event.id not in self._collection:
            raise NotFoundError(f'Event not found: {event.id}')
        self._collection.put(event.id, event_to_document(event))
        await self._publish()

    @Logger.io
    async def delete_event(self, *, event_id: str) -> None:
        if not self._collection.delete(event_id):
            raise NotFoundError(f'Event not found: {event_id}')
        await self._publish()

    async def subscribe(self) -> MemoryObjectReceiveStream[list[Event]]:
        return await self.broadcaster.subscribe(topic=EVENTS_TOPIC)

    async def unsubscribe(self, *, stream: MemoryObjectReceiveStream[list[Event]]) -> None:
        await self.broadcaster.unsubscribe(topic=EVENTS_TOPIC, stream=stream)

    async def _publish(self) -> None:
        await self.broadcaster.broadcast(topic=EVENTS_TOPIC, payload=await self.list_events())
