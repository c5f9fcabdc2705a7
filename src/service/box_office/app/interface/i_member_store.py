from abc import ABC, abstractmethod
from typing import Optional

from src.service.box_office.domain.entity.member_entity import Member


class IMemberStore(ABC):
    @abstractmethod
    async def find_member_by_coupon_or_id(self, *, code: str) -> list[Member]:
        """
        Every member whose coupon code or numeric member id equals `code`.

        More than one hit is possible with dirty data; the verifier decides.
        """
        pass

    @abstractmethod
    async def list_members(self) -> list[Member]:
        pass

    @abstractmethod
    async def get_member(self, *, member_id: int) -> Optional[Member]:
        pass

    @abstractmethod
    async def create_member(self, *, member: Member) -> None:
        pass

    @abstractmethod
    async def update_member(self, *, member: Member) -> None:
        pass

    @abstractmethod
    async def delete_member(self, *, member_id: int) -> None:
        pass
