from collections.abc import AsyncGenerator
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sse_starlette.sse import EventSourceResponse

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.create_event_use_case import CreateEventUseCase
from src.service.box_office.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.box_office.app.command.toggle_reserved_seat_use_case import (
    ToggleReservedSeatUseCase,
)
from src.service.box_office.app.command.update_event_use_case import UpdateEventUseCase
from src.service.box_office.app.dto.seat_map import SeatMap
from src.service.box_office.app.query.get_event_use_case import GetEventUseCase
from src.service.box_office.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.box_office.app.query.list_events_use_case import ListEventsUseCase
from src.service.box_office.app.query.recommend_events_use_case import RecommendEventsUseCase
from src.service.box_office.app.query.stream_seat_map_use_case import StreamSeatMapUseCase
from src.service.box_office.domain.entity.event_entity import Event, TicketType
from src.service.box_office.domain.entity.user_entity import UserAccount
from src.service.box_office.domain.enum.event_category import EventCategory
from src.service.box_office.driving_adapter.http_controller.auth.auth_dependency import (
    get_current_user,
    require_admin,
)
from src.service.box_office.driving_adapter.http_controller.schema.event_schema import (
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
    RecommendationRequest,
    RecommendationResponse,
    SeatMapResponse,
    SeatResponse,
    TicketTypeSchema,
    ToggleReservedSeatRequest,
)


router = APIRouter()


def _to_event_response(event: Event) -> EventResponse:
    return EventResponse(
        id=event.id,
        name=event.name,
        description=event.description,
        category=event.category,
        date=event.date,
        location=event.location,
        venue=event.venue,
        image=event.image,
        showtimes=event.showtimes,
        ticket_types=[TicketTypeSchema(type=t.name, price=t.price) for t in event.ticket_types],
        seating_chart=event.seating_chart.to_dict() if event.seating_chart else None,
        reserved_seats=event.reserved_seats,
        is_paid=event.is_paid,
    )


def _to_seat_map_response(seat_map: SeatMap) -> SeatMapResponse:
    return SeatMapResponse(
        event_id=seat_map.event_id,
        seats=[
            SeatResponse(
                seat_id=state.key,
                section=state.seat.section_name,
                row_id=state.seat.row_id,
                row_label=state.seat.row_label,
                seat_number=state.seat.seat_number,
                price=state.price,
                status=state.status,
                is_reserved=state.is_reserved,
                is_booked=state.is_booked,
            )
            for state in seat_map.seats
        ],
        counts=seat_map.counts,
        reservation_aliases=seat_map.reservation_aliases,
    )


def _to_ticket_types(ticket_types: List[TicketTypeSchema]) -> List[TicketType]:
    return [TicketType(name=t.type, price=t.price) for t in ticket_types]


# ============================ Admin Endpoints ============================


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: UserAccount = Depends(require_admin),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create(
        name=request.name,
        description=request.description,
        category=request.category,
        date=request.date,
        location=request.location,
        venue=request.venue,
        image=request.image,
        showtimes=request.showtimes,
        ticket_types=_to_ticket_types(request.ticket_types),
        seating_chart=request.seating_chart,
        reserved_seats=request.reserved_seats,
    )
    return _to_event_response(event)


# Declared ahead of '/{event_id}' routes
@router.post('/recommendations')
@Logger.io
async def recommend_events(
    request: RecommendationRequest,
    current_user: UserAccount = Depends(get_current_user),
    use_case: RecommendEventsUseCase = Depends(RecommendEventsUseCase.depends),
) -> RecommendationResponse:
    recommendations = await use_case.recommend(
        user_id=current_user.id, preferences=request.preferences
    )
    return RecommendationResponse(recommendations=recommendations)


@router.put('/{event_id}')
@Logger.io
async def update_event(
    event_id: str,
    request: EventUpdateRequest,
    current_user: UserAccount = Depends(require_admin),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    changes = request.to_changes()
    if request.ticket_types is not None:
        changes['ticket_types'] = _to_ticket_types(request.ticket_types)
    event = await use_case.update(event_id=event_id, changes=changes)
    return _to_event_response(event)


@router.delete('/{event_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_event(
    event_id: str,
    current_user: UserAccount = Depends(require_admin),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> None:
    await use_case.delete(event_id=event_id)


@router.post('/{event_id}/reserved_seats/toggle')
@Logger.io
async def toggle_reserved_seat(
    event_id: str,
    request: ToggleReservedSeatRequest,
    current_user: UserAccount = Depends(require_admin),
    use_case: ToggleReservedSeatUseCase = Depends(ToggleReservedSeatUseCase.depends),
) -> EventResponse:
    event = await use_case.toggle(event_id=event_id, label=request.label)
    return _to_event_response(event)


# ============================ Public Endpoints ============================


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    category: Optional[EventCategory] = None,
    upcoming: bool = False,
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_events(category=category, upcoming_only=upcoming)
    return [_to_event_response(event) for event in events]


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: str,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    return _to_event_response(await use_case.get_by_id(event_id=event_id))


# ============================ Seat Map Endpoints ============================


@router.get('/{event_id}/seats', status_code=status.HTTP_200_OK)
@Logger.io(truncate_content=True)
async def get_seat_map(
    event_id: str,
    use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
) -> SeatMapResponse:
    """Every seat of the event with its status; booked wins over reserved."""
    seat_map = await use_case.get_seat_map(event_id=event_id)
    return _to_seat_map_response(seat_map)


@router.get('/{event_id}/seats/sse', status_code=status.HTTP_200_OK)
@Logger.io
async def stream_seat_map(
    event_id: str,
    use_case: StreamSeatMapUseCase = Depends(StreamSeatMapUseCase.depends),
) -> EventSourceResponse:
    """SSE push of the full seat map after every committed booking."""
    board = await use_case.open_board(event_id=event_id)

    async def event_generator() -> AsyncGenerator[dict, None]:
        async for seat_map in use_case.stream(event_id=event_id, board=board):
            yield {
                'event': 'seat_map',
                'data': _to_seat_map_response(seat_map).model_dump_json(),
            }

    return EventSourceResponse(event_generator())
