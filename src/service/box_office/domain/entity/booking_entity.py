from datetime import datetime, timezone
from typing import Optional

import attrs
import uuid_utils
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger


@attrs.define(frozen=True)
class Attendee:
    seat_id: str
    price: int
    attendee_name: str
    member_code: Optional[str] = None
    is_member: bool = False
    member_verified: bool = False
    # Resolved member record, so a coupon code and a numeric id of the same member collide
    member_id: Optional[int] = None

    @property
    def amount_due(self) -> int:
        return 0 if self.member_verified else self.price


@attrs.define(frozen=True)
class Booking:
    id: UUID
    user_id: str
    event_id: str
    event_name: str
    event_date: datetime
    attendees: tuple[Attendee, ...]
    total: int
    booking_date: datetime

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: str,
        event_id: str,
        event_name: str,
        event_date: datetime,
        attendees: list[Attendee],
    ) -> 'Booking':
        return cls(
            id=uuid_utils.uuid7(),
            user_id=user_id,
            event_id=event_id,
            event_name=event_name,
            event_date=event_date,
            attendees=tuple(attendees),
            total=sum(attendee.amount_due for attendee in attendees),
            booking_date=datetime.now(timezone.utc),
        )

    @property
    def seat_ids(self) -> list[str]:
        return [attendee.seat_id for attendee in self.attendees]

    def member_attendees(self) -> list[Attendee]:
        return [attendee for attendee in self.attendees if attendee.is_member]
