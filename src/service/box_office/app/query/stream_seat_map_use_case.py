"""
Stream Seat Map Use Case

SSE streaming of live seat maps. Each booking snapshot pushed for the event
replaces the booked set of one long-lived board, and the whole seat map is
re-sent.
"""

from collections.abc import AsyncGenerator
from typing import Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.app.dto.seat_map import SeatMap
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.domain.seat_availability_domain import SeatAvailabilityBoard


class StreamSeatMapUseCase:
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

    async def open_board(self, *, event_id: str) -> SeatAvailabilityBoard:
        """Resolve the board up front so a missing event fails before the stream starts."""
        event = await self.event_store.get_event(event_id=event_id)
        if event is None:
            raise NotFoundError(f'Event not found: {event_id}')
        bookings = await self.booking_store.list_bookings_for_event(event_id=event_id)
        return SeatAvailabilityBoard.for_event(event, bookings)

    async def stream(
        self, *, event_id: str, board: SeatAvailabilityBoard
    ) -> AsyncGenerator[SeatMap, None]:
        stream = await self.booking_store.subscribe(event_id=event_id)
        gauge = metrics.seat_map_subscribers.labels(event_id=event_id)
        gauge.inc()
        try:
            # 1. Initial seat map, re-read so bookings written before subscribing count
            board.replace_bookings(
                await self.booking_store.list_bookings_for_event(event_id=event_id)
            )
            yield SeatMap.from_board(event_id=event_id, board=board)

            # 2. Full replacement on every pushed snapshot
            async for bookings in stream:
                board.replace_bookings(bookings)
                yield SeatMap.from_board(event_id=event_id, board=board)

        except anyio.get_cancelled_exc_class():
            Logger.base.info(f'[SSE] Client disconnected from seat map of event {event_id}')
            raise
        finally:
            gauge.dec()
            with anyio.CancelScope(shield=True):
                await self.booking_store.unsubscribe(event_id=event_id, stream=stream)
