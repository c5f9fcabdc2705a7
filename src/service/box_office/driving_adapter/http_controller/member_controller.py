from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.member_command_use_case import MemberCommandUseCase
from src.service.box_office.app.query.member_query_use_case import MemberQueryUseCase
from src.service.box_office.app.query.verify_member_use_case import VerifyMemberUseCase
from src.service.box_office.domain.booking_commit_domain import VerificationOutcome
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.domain.entity.user_entity import UserAccount
from src.service.box_office.driving_adapter.http_controller.auth.auth_dependency import (
    get_current_user,
    require_admin,
)
from src.service.box_office.driving_adapter.http_controller.schema.member_schema import (
    MemberCreateRequest,
    MemberResponse,
    MemberUpdateRequest,
    VerificationResponse,
    VerifyMemberRequest,
)


router = APIRouter()


def _to_member_response(member: Member) -> MemberResponse:
    return MemberResponse(
        member_id=member.member_id,
        name=member.name,
        email=member.email,
        coupon_code=member.coupon_code,
        phone=member.phone,
        address=member.address,
        date_of_birth=member.date_of_birth,
        date_of_admission=member.date_of_admission,
        emergency_contact=member.emergency_contact,
        application_id=member.application_id,
        category_type=member.category_type,
        category_acronym=member.category_acronym,
    )


def to_verification_response(outcome: VerificationOutcome) -> VerificationResponse:
    return VerificationResponse(
        seat_id=outcome.seat_id,
        member_code=outcome.member_code,
        verified=outcome.verified,
        reason=str(outcome.reason) if outcome.reason else None,
        member_name=outcome.member_name,
    )


@router.post('/verify')
@Logger.io
async def verify_member(
    request: VerifyMemberRequest,
    current_user: UserAccount = Depends(get_current_user),
    use_case: VerifyMemberUseCase = Depends(VerifyMemberUseCase.depends),
) -> VerificationResponse:
    outcome = await use_case.verify(
        event_id=request.event_id, code=request.code, seat_id=request.seat_id
    )
    return to_verification_response(outcome)


# ============================ Admin Endpoints ============================


@router.get('')
@Logger.io
async def list_members(
    current_user: UserAccount = Depends(require_admin),
    use_case: MemberQueryUseCase = Depends(MemberQueryUseCase.depends),
) -> List[MemberResponse]:
    return [_to_member_response(member) for member in await use_case.list_members()]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_member(
    request: MemberCreateRequest,
    current_user: UserAccount = Depends(require_admin),
    use_case: MemberCommandUseCase = Depends(MemberCommandUseCase.depends),
) -> MemberResponse:
    member = await use_case.create(**request.model_dump())
    return _to_member_response(member)


@router.get('/{member_id}')
@Logger.io
async def get_member(
    member_id: int,
    current_user: UserAccount = Depends(require_admin),
    use_case: MemberQueryUseCase = Depends(MemberQueryUseCase.depends),
) -> MemberResponse:
    return _to_member_response(await use_case.get_member(member_id=member_id))


@router.put('/{member_id}')
@Logger.io
async def update_member(
    member_id: int,
    request: MemberUpdateRequest,
    current_user: UserAccount = Depends(require_admin),
    use_case: MemberCommandUseCase = Depends(MemberCommandUseCase.depends),
) -> MemberResponse:
    member = await use_case.update(
        member_id=member_id, changes=request.model_dump(exclude_unset=True, exclude_none=True)
    )
    return _to_member_response(member)


@router.delete('/{member_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_member(
    member_id: int,
    current_user: UserAccount = Depends(require_admin),
    use_case: MemberCommandUseCase = Depends(MemberCommandUseCase.depends),
) -> None:
    await use_case.delete(member_id=member_id)
