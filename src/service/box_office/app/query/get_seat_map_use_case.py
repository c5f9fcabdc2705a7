from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.dto.seat_map import SeatMap
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.seat_availability_domain import SeatAvailabilityBoard


class GetSeatMapUseCase:
    def __init__(self, *, event_store: IEventStore, booking_store: IBookingStore) -> None:
        self.event_store = event_store
        self.booking_store = booking_store

    @classmethod
    @inject
    def depends(
        cls,
        event_store: IEventStore = Depends(Provide[Container.event_store]),
        booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
    ) -> Self:
        return cls(event_store=event_store, booking_store=booking_store)

    @Logger.io(truncate_content=True)
    async def get_seat_map(self, *, event_id: str) -> SeatMap:
        event = await self.event_store.get_event(event_id=event_id)
        if event is None:
            raise NotFoundError(f'Event not found: {event_id}')
        bookings = await self.booking_store.list_bookings_for_event(event_id=event_id)
        board = SeatAvailabilityBoard.for_event(event, bookings)
        return SeatMap.from_board(event_id=event_id, board=board)
