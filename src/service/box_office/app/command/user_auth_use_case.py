"""
User Auth Use Cases (Use Case Layer)
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_auth_provider import IAuthProvider
from src.service.box_office.domain.entity.user_entity import UserAccount


class UserAuthUseCase:
    def __init__(self, *, auth_provider: IAuthProvider) -> None:
        self.auth_provider = auth_provider

    @classmethod
    @inject
    def depends(
        cls, auth_provider: IAuthProvider = Depends(Provide[Container.auth_provider])
    ) -> Self:
        return cls(auth_provider=auth_provider)

    @Logger.io
    async def sign_up(self, *, email: str, password: SecretStr, display_name: str) -> UserAccount:
        return await self.auth_provider.sign_up(
            email=email, password=password, display_name=display_name
        )

    @Logger.io
    async def login(self, *, email: str, password: SecretStr) -> tuple[str, UserAccount]:
        token = await self.auth_provider.login(email=email, password=password)
        user = await self.authenticate(token=token)
        Logger.base.info(f'🔑 [AUTH] {user.email} logged in')
        return token, user

    @Logger.io
    async def logout(self, *, token: str) -> None:
        await self.auth_provider.logout(token=token)

    async def authenticate(self, *, token: Optional[str]) -> UserAccount:
        user = await self.auth_provider.current_user(token=token)
        if user is None:
            raise AuthenticationError('Not authenticated')
        return user
