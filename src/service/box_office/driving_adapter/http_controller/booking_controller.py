from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.checkout_use_case import CheckoutUseCase
from src.service.box_office.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.box_office.domain.booking_commit_domain import AttendeeDraft
from src.service.box_office.domain.entity.booking_entity import Booking
from src.service.box_office.domain.entity.user_entity import UserAccount
from src.service.box_office.driving_adapter.http_controller.auth.auth_dependency import (
    get_current_user,
    require_admin,
)
from src.service.box_office.driving_adapter.http_controller.member_controller import (
    to_verification_response,
)
from src.service.box_office.driving_adapter.http_controller.schema.booking_schema import (
    AttendeeResponse,
    BookingCreateRequest,
    BookingReportResponse,
    BookingResponse,
    CheckoutResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _to_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=str(booking.id),
        user_id=booking.user_id,
        event_id=booking.event_id,
        event_name=booking.event_name,
        event_date=booking.event_date,
        attendees=[
            AttendeeResponse(
                seat_id=a.seat_id,
                price=a.price,
                attendee_name=a.attendee_name,
                member_code=a.member_code,
                is_member=a.is_member,
                member_verified=a.member_verified,
                amount_due=a.amount_due,
            )
            for a in booking.attendees
        ],
        total=booking.total,
        booking_date=booking.booking_date,
    )


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserAccount = Depends(get_current_user),
    use_case: CheckoutUseCase = Depends(CheckoutUseCase.depends),
) -> CheckoutResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('seat_count', len(request.attendees))

        result = await use_case.checkout(
            user_id=current_user.id,
            event_id=request.event_id,
            attendees=[
                AttendeeDraft(
                    seat_id=a.seat_id, attendee_name=a.attendee_name, member_code=a.member_code
                )
                for a in request.attendees
            ],
        )

    return CheckoutResponse(
        booking=_to_booking_response(result.booking),
        verifications=[to_verification_response(o) for o in result.verifications],
        total=result.total,
    )


@router.get('/my_booking')
@Logger.io
async def list_my_bookings(
    current_user: UserAccount = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_for_user(user_id=current_user.id)
    return [_to_booking_response(booking) for booking in bookings]


@router.get('/event/{event_id}')
@Logger.io
async def report_event_bookings(
    event_id: str,
    current_user: UserAccount = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingReportResponse:
    report = await use_case.report_for_event(event_id=event_id)
    return BookingReportResponse(
        event_id=report.event_id,
        seats_sold=report.seats_sold,
        revenue=report.revenue,
        member_seats=report.member_seats,
        bookings=[_to_booking_response(booking) for booking in report.bookings],
    )
