"""
Wire Modules Configuration

Modules whose `depends` classmethods use `Provide[Container.x]` markers.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.box_office.app.command import (
    checkout_use_case,
    commit_booking_use_case,
    create_event_use_case,
    delete_event_use_case,
    member_command_use_case,
    toggle_reserved_seat_use_case,
    update_event_use_case,
    user_auth_use_case,
)
from src.service.box_office.app.query import (
    get_event_use_case,
    get_seat_map_use_case,
    list_bookings_use_case,
    list_events_use_case,
    member_query_use_case,
    recommend_events_use_case,
    stream_seat_map_use_case,
    verify_member_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    # Commands
    checkout_use_case,
    commit_booking_use_case,
    create_event_use_case,
    update_event_use_case,
    delete_event_use_case,
    toggle_reserved_seat_use_case,
    member_command_use_case,
    user_auth_use_case,
    # Queries
    get_event_use_case,
    list_events_use_case,
    get_seat_map_use_case,
    stream_seat_map_use_case,
    list_bookings_use_case,
    verify_member_use_case,
    recommend_events_use_case,
    member_query_use_case,
]
