from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_member_store import IMemberStore
from src.service.box_office.domain.entity.member_entity import Member


class MemberQueryUseCase:
    def __init__(self, *, member_store: IMemberStore) -> None:
        self.member_store = member_store

    @classmethod
    @inject
    def depends(
        cls, member_store: IMemberStore = Depends(Provide[Container.member_store])
    ) -> Self:
        return cls(member_store=member_store)

    @Logger.io
    async def list_members(self) -> List[Member]:
        return await self.member_store.list_members()

    @Logger.io
    async def get_member(self, *, member_id: int) -> Member:
        member = await self.member_store.get_member(member_id=member_id)
        if member is None:
            raise NotFoundError(f'Member not found: {member_id}')
        return member
