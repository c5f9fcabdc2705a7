"""
Seat identity value object.

A seat is addressed two ways:
- full key `{sectionName}-{rowId}-{seatNumber}`, stamped on booking attendees
- reservation label `{ROWLABEL}-{seatNumber}`, used by the admin reserved list

Both are projections of one SeatIdentity so no call site re-derives substrings.
"""

from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import ValidationError


SPACER_ROW_ID = 'spacer'
KEY_SEPARATOR = '-'


def derive_row_label(row_id: str) -> str:
    # "A-left" and "A-right" are two physical parts of visual row "A"
    return row_id.split(KEY_SEPARATOR, 1)[0]


def normalize_reservation_label(label: str) -> str:
    return label.strip().upper()


@attrs.define(frozen=True)
class SeatIdentity:
    section_name: str
    row_id: str
    row_label: str
    seat_number: int

    @property
    def key(self) -> str:
        return f'{self.section_name}{KEY_SEPARATOR}{self.row_id}{KEY_SEPARATOR}{self.seat_number}'

    @property
    def reservation_label(self) -> str:
        return normalize_reservation_label(f'{self.row_label}{KEY_SEPARATOR}{self.seat_number}')


def split_seat_key(key: str, *, section_names: Iterable[str]) -> Optional[tuple[str, str, int]]:
    """
    Split a full seat key back into (section_name, row_id, seat_number).

    Section names may themselves contain the separator or spaces, so the key is
    matched against the known section names, longest first.
    """
    for section_name in sorted(section_names, key=len, reverse=True):
        prefix = f'{section_name}{KEY_SEPARATOR}'
        if not key.startswith(prefix):
            continue
        row_id, sep, seat_number = key[len(prefix) :].rpartition(KEY_SEPARATOR)
        if sep and row_id and seat_number.isdigit():
            return section_name, row_id, int(seat_number)
    return None


def parse_seat_key(key: str, *, section_names: Iterable[str]) -> tuple[str, str, int]:
    if (parts := split_seat_key(key, section_names=section_names)) is None:
        raise ValidationError(f'Unknown seat: {key}')
    return parts
