import attrs

from src.service.box_office.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class BookingReport:
    """Admin summary of the committed bookings of one event"""

    event_id: str
    bookings: tuple[Booking, ...]

    @property
    def seats_sold(self) -> int:
        return sum(len(booking.attendees) for booking in self.bookings)

    @property
    def revenue(self) -> int:
        return sum(booking.total for booking in self.bookings)

    @property
    def member_seats(self) -> int:
        return sum(len(booking.member_attendees()) for booking in self.bookings)
