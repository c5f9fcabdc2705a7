from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.dto.booking_report import BookingReport
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.domain.entity.booking_entity import Booking


class ListBookingsUseCase:
    def __init__(self, *, booking_store: IBookingStore) -> None:
        self.booking_store = booking_store

    @classmethod
    @inject
    def depends(
        cls, booking_store: IBookingStore = Depends(Provide[Container.booking_store])
    ) -> Self:
        return cls(booking_store=booking_store)

    @Logger.io
    async def list_for_user(self, *, user_id: str) -> List[Booking]:
        bookings = await self.booking_store.list_bookings_for_user(user_id=user_id)
        # Newest first
        return sorted(bookings, key=lambda booking: booking.booking_date, reverse=True)

    @Logger.io
    async def report_for_event(self, *, event_id: str) -> BookingReport:
        bookings = await self.booking_store.list_bookings_for_event(event_id=event_id)
        report = BookingReport(event_id=event_id, bookings=tuple(bookings))
        Logger.base.info(
            f'📊 [BOOKING_REPORT] Event {event_id}: {report.seats_sold} seats, '
            f'revenue {report.revenue}, member seats {report.member_seats}'
        )
        return report
