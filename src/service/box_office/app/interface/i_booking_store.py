from abc import ABC, abstractmethod

from anyio.streams.memory import MemoryObjectReceiveStream

from src.service.box_office.domain.entity.booking_entity import Booking


class IBookingStore(ABC):
    """
    Booking documents. One write per checkout, never updated afterwards.

    Writes are single-document and carry no condition on seat ids: two
    writers that both passed re-validation can still land the same seat.
    """

    @abstractmethod
    async def list_bookings_for_event(self, *, event_id: str) -> list[Booking]:
        pass

    @abstractmethod
    async def list_bookings_for_user(self, *, user_id: str) -> list[Booking]:
        """Newest first"""
        pass

    @abstractmethod
    async def create_booking(self, *, booking: Booking) -> str:
        pass

    @abstractmethod
    async def subscribe(self, *, event_id: str) -> MemoryObjectReceiveStream[list[Booking]]:
        """Receive the full booking list of one event after every new booking"""
        pass

    @abstractmethod
    async def unsubscribe(
        self, *, event_id: str, stream: MemoryObjectReceiveStream[list[Booking]]
    ) -> None:
        pass
