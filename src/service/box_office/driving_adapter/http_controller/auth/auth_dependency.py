from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError
from src.service.box_office.app.command.user_auth_use_case import UserAuthUseCase
from src.service.box_office.domain.entity.user_entity import UserAccount


bearer_scheme = HTTPBearer(auto_error=False)


async def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    use_case: UserAuthUseCase = Depends(UserAuthUseCase.depends),
) -> UserAccount:
    return await use_case.authenticate(token=token)


async def require_admin(current_user: UserAccount = Depends(get_current_user)) -> UserAccount:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin', attributes={'user.id': current_user.id}
    ):
        if not current_user.is_admin:
            raise ForbiddenError('Only administrators can perform this action')
        return current_user
