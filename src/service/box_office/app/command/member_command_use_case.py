"""
Member Command Use Cases

Admin maintenance of the membership roster. Coupon codes stay unique across
members; the store enforces it.
"""

from datetime import date
from typing import Any, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_member_store import IMemberStore
from src.service.box_office.domain.entity.member_entity import Member


class MemberCommandUseCase:
    def __init__(self, *, member_store: IMemberStore) -> None:
        self.member_store = member_store

    @classmethod
    @inject
    def depends(
        cls, member_store: IMemberStore = Depends(Provide[Container.member_store])
    ) -> Self:
        return cls(member_store=member_store)

    @Logger.io
    async def create(
        self,
        *,
        member_id: int,
        name: str,
        email: str,
        coupon_code: str,
        phone: str = '',
        address: str = '',
        date_of_birth: Optional[date] = None,
        date_of_admission: Optional[date] = None,
        emergency_contact: str = '',
        application_id: Optional[str] = None,
        category_type: Optional[str] = None,
        category_acronym: Optional[str] = None,
    ) -> Member:
        member = Member.create(
            member_id=member_id,
            name=name,
            email=email,
            coupon_code=coupon_code,
            phone=phone,
            address=address,
            date_of_birth=date_of_birth,
            date_of_admission=date_of_admission,
            emergency_contact=emergency_contact,
            application_id=application_id,
            category_type=category_type,
            category_acronym=category_acronym,
        )
        await self.member_store.create_member(member=member)
        Logger.base.info(f'✅ [MEMBER] Added member {member.member_id}: {member.name}')
        return member

    @Logger.io
    async def update(self, *, member_id: int, changes: dict[str, Any]) -> Member:
        member = await self.member_store.get_member(member_id=member_id)
        if member is None:
            raise NotFoundError(f'Member not found: {member_id}')

        changes = {key: value for key, value in changes.items() if key != 'member_id'}
        merged = attrs.asdict(attrs.evolve(member, **changes), recurse=False)
        updated = Member.create(**merged)
        await self.member_store.update_member(member=updated)

        Logger.base.info(f'✏️ [MEMBER] Updated member {member_id}: {sorted(changes)}')
        return updated

    @Logger.io
    async def delete(self, *, member_id: int) -> None:
        await self.member_store.delete_member(member_id=member_id)
        Logger.base.info(f'🗑️ [MEMBER] Removed member {member_id}')
