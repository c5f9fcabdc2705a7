"""
Seat Status Enum - Domain Value Object

Display status of one seat on the seat map. Booked wins over reserved,
the underlying flags stay independent on SeatState.
"""

from enum import StrEnum


class SeatStatus(StrEnum):
    AVAILABLE = 'available'
    RESERVED = 'reserved'
    BOOKED = 'booked'
