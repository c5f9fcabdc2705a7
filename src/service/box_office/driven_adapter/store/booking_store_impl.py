from anyio.streams.memory import MemoryObjectReceiveStream

from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.domain.entity.booking_entity import Booking
from src.service.box_office.driven_adapter.store.document_codec import (
    booking_from_document,
    booking_to_document,
)
from src.service.box_office.driven_adapter.store.in_memory_document_collection import (
    InMemoryDocumentCollection,
)


def bookings_topic(event_id: str) -> str:
    return f'bookings:{event_id}'


class BookingStoreImpl(IBookingStore):
    def __init__(self, *, broadcaster: IInMemoryEventBroadcaster) -> None:
        self.broadcaster = broadcaster
        self._collection = InMemoryDocumentCollection(name='bookings')

    @Logger.io(truncate_content=True)
    async def list_bookings_for_event(self, *, event_id: str) -> list[Booking]:
        docs = self._collection.query(lambda doc: doc['event_id'] == event_id)
        return [booking_from_document(doc) for doc in docs]

    @Logger.io(truncate_content=True)
    async def list_bookings_for_user(self, *, user_id: str) -> list[Booking]:
        docs = self._collection.query(lambda doc: doc['user_id'] == user_id)
        bookings = [booking_from_document(doc) for doc in docs]
        return sorted(bookings, key=lambda booking: booking.booking_date, reverse=True)

    @Logger.io
    async def create_booking(self, *, booking: Booking) -> str:
        booking_id = str(booking.id)
        if booking_id in self._collection:
            raise ConflictError(f'Booking already exists: {booking_id}')
        self._collection.put(booking_id, booking_to_document(booking))

        Logger.base.info(
            f'🎫 [BOOKING_STORE] Stored booking {booking_id} '
            f'for event {booking.event_id} ({len(booking.attendees)} seats)'
        )
        await self.broadcaster.broadcast(
            topic=bookings_topic(booking.event_id),
            payload=await self.list_bookings_for_event(event_id=booking.event_id),
        )
        return booking_id

    async def subscribe(self, *, event_id: str) -> MemoryObjectReceiveStream[list[Booking]]:
        return await self.broadcaster.subscribe(topic=bookings_topic(event_id))

    async def unsubscribe(
        self, *, event_id: str, stream: MemoryObjectReceiveStream[list[Booking]]
    ) -> None:
        await self.broadcaster.unsubscribe(topic=bookings_topic(event_id), stream=stream)
