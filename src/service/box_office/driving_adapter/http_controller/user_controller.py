from typing import Optional

from fastapi import APIRouter, Depends, status

from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.user_auth_use_case import UserAuthUseCase
from src.service.box_office.domain.entity.user_entity import UserAccount
from src.service.box_office.driving_adapter.http_controller.auth.auth_dependency import (
    get_current_user,
    get_session_token,
)
from src.service.box_office.driving_adapter.http_controller.schema.user_schema import (
    LoginRequest,
    LoginResponse,
    SignUpRequest,
    UserResponse,
)


router = APIRouter()


def _to_user_response(user: UserAccount) -> UserResponse:
    return UserResponse(
        id=user.id, email=user.email, display_name=user.display_name, is_admin=user.is_admin
    )


@router.post('/signup', status_code=status.HTTP_201_CREATED)
@Logger.io
async def sign_up(
    request: SignUpRequest,
    use_case: UserAuthUseCase = Depends(UserAuthUseCase.depends),
) -> UserResponse:
    user = await use_case.sign_up(
        email=request.email, password=request.password, display_name=request.display_name
    )
    return _to_user_response(user)


@router.post('/login')
@Logger.io
async def login(
    request: LoginRequest,
    use_case: UserAuthUseCase = Depends(UserAuthUseCase.depends),
) -> LoginResponse:
    token, user = await use_case.login(email=request.email, password=request.password)
    return LoginResponse(access_token=token, user=_to_user_response(user))


@router.post('/logout', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def logout(
    token: Optional[str] = Depends(get_session_token),
    use_case: UserAuthUseCase = Depends(UserAuthUseCase.depends),
) -> None:
    if not token:
        raise AuthenticationError('Not authenticated')
    await use_case.logout(token=token)


@router.get('/me')
@Logger.io
async def get_me(current_user: UserAccount = Depends(get_current_user)) -> UserResponse:
    return _to_user_response(current_user)
