from abc import ABC, abstractmethod
from typing import Optional

from pydantic import SecretStr

from src.service.box_office.domain.entity.user_entity import UserAccount


class IAuthProvider(ABC):
    """External identity provider; only stamps booking owners and gates admin pages"""

    @abstractmethod
    async def sign_up(
        self, *, email: str, password: SecretStr, display_name: str
    ) -> UserAccount:
        pass

    @abstractmethod
    async def login(self, *, email: str, password: SecretStr) -> str:
        """Returns a session token"""
        pass

    @abstractmethod
    async def logout(self, *, token: str) -> None:
        pass

    @abstractmethod
    async def current_user(self, *, token: Optional[str]) -> Optional[UserAccount]:
        pass
