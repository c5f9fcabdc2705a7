"""
Availability Aggregator

`SeatAvailabilityBoard` classifies every seat of an event from two sources:
the admin reserved list (simplified labels, case-insensitive) and the seat ids
held by committed bookings. Reserved and booked are independent flags; the
display status picks booked over reserved.

The board is long-lived. Every booking snapshot replaces the booked set.
"""

from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.booking_entity import Booking
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.entity.seating_chart_entity import SeatingChart
from src.service.box_office.domain.enum.seat_status import SeatStatus
from src.service.box_office.domain.seat_resolver_domain import ResolvedRow, resolve_rows
from src.service.box_office.domain.value_object.seat_identity import (
    SeatIdentity,
    normalize_reservation_label,
)


@attrs.define(frozen=True)
class SeatState:
    seat: SeatIdentity
    price: int
    is_reserved: bool
    is_booked: bool
    is_selected: bool = False

    @property
    def key(self) -> str:
        return self.seat.key

    @property
    def status(self) -> SeatStatus:
        if self.is_booked:
            return SeatStatus.BOOKED
        if self.is_reserved:
            return SeatStatus.RESERVED
        return SeatStatus.AVAILABLE


class SeatAvailabilityBoard:
    def __init__(
        self,
        *,
        chart: SeatingChart,
        reserved_labels: Iterable[str] = (),
        booked_seat_ids: Iterable[str] = (),
    ) -> None:
        self.rows: list[ResolvedRow] = resolve_rows(chart)
        self._seats: dict[str, SeatIdentity] = {}
        self._prices: dict[str, int] = {}
        self._keys_by_label: dict[str, list[str]] = {}
        for resolved_row in self.rows:
            for seat in resolved_row.seats:
                self._seats[seat.key] = seat
                self._prices[seat.key] = resolved_row.section.price
                self._keys_by_label.setdefault(seat.reservation_label, []).append(seat.key)

        self._reserved: frozenset[str] = frozenset()
        self._booked: frozenset[str] = frozenset(booked_seat_ids)
        self.replace_reserved(reserved_labels)

    @classmethod
    def for_event(cls, event: Event, bookings: Iterable[Booking] = ()) -> 'SeatAvailabilityBoard':
        if event.seating_chart is None:
            raise ValidationError(f'Event {event.id} has no seating chart')
        board = cls(chart=event.seating_chart, reserved_labels=event.reserved_seats)
        board.replace_bookings(bookings)
        return board

    @property
    def seat_ids(self) -> list[str]:
        return list(self._seats)

    @property
    def booked_seat_ids(self) -> frozenset[str]:
        return self._booked

    def has_seat(self, key: str) -> bool:
        return key in self._seats

    def get_seat(self, key: str) -> SeatIdentity:
        if (seat := self._seats.get(key)) is None:
            raise ValidationError(f'Unknown seat: {key}')
        return seat

    def price_of(self, key: str) -> int:
        self.get_seat(key)
        return self._prices[key]

    def replace_bookings(self, bookings: Iterable[Booking]) -> None:
        self.replace_booked_seat_ids(
            seat_id for booking in bookings for seat_id in booking.seat_ids
        )

    def replace_booked_seat_ids(self, seat_ids: Iterable[str]) -> None:
        self._booked = frozenset(seat_ids)

    def replace_reserved(self, labels: Iterable[str]) -> None:
        self._reserved = frozenset(normalize_reservation_label(label) for label in labels)
        if aliases := self.reservation_aliases():
            Logger.base.warning(
                f'⚠️ [AVAILABILITY] Reserved labels match seats in several sections: {aliases}'
            )

    def is_reserved(self, key: str) -> bool:
        return self.get_seat(key).reservation_label in self._reserved

    def is_booked(self, key: str) -> bool:
        self.get_seat(key)
        return key in self._booked

    def status_of(self, key: str) -> SeatStatus:
        return self.state_of(key).status

    def state_of(self, key: str, *, selected: bool = False) -> SeatState:
        seat = self.get_seat(key)
        return SeatState(
            seat=seat,
            price=self._prices[key],
            is_reserved=seat.reservation_label in self._reserved,
            is_booked=key in self._booked,
            is_selected=selected,
        )

    def is_selectable(self, key: str) -> bool:
        return self.has_seat(key) and self.status_of(key) == SeatStatus.AVAILABLE

    def unavailable(self, seat_ids: Iterable[str]) -> list[str]:
        return [seat_id for seat_id in seat_ids if not self.is_selectable(seat_id)]

    def seat_states(self, selected: Optional[Iterable[str]] = None) -> list[SeatState]:
        chosen = set(selected or ())
        return [self.state_of(key, selected=key in chosen) for key in self._seats]

    def counts(self) -> dict[SeatStatus, int]:
        summary = {status: 0 for status in SeatStatus}
        for key in self._seats:
            summary[self.status_of(key)] += 1
        return summary

    def reservation_aliases(self) -> dict[str, list[str]]:
        """
        Reserved labels that hit seats in more than one section.

        Reservation lists are entered by row and seat only, so "A-3" blocks
        `Gold-A-3` and `Silver-A-3` alike. Matching keeps that behaviour; this
        report lets an admin spot it.
        """
        aliases: dict[str, list[str]] = {}
        for label in sorted(self._reserved):
            keys = self._keys_by_label.get(label, [])
            if len({self._seats[key].section_name for key in keys}) > 1:
                aliases[label] = keys
        return aliases
