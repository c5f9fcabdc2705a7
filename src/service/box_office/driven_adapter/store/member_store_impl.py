from typing import Optional

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_member_store import IMemberStore
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.driven_adapter.store.document_codec import (
    member_from_document,
    member_to_document,
)
from src.service.box_office.driven_adapter.store.in_memory_document_collection import (
    InMemoryDocumentCollection,
)


class MemberStoreImpl(IMemberStore):
    def __init__(self) -> None:
        self._collection = InMemoryDocumentCollection(name='members')

    @Logger.io
    async def find_member_by_coupon_or_id(self, *, code: str) -> list[Member]:
        members = [member_from_document(doc) for doc in self._collection.query()]
        return [member for member in members if member.matches_code(code)]

    async def list_members(self) -> list[Member]:
        members = [member_from_document(doc) for doc in self._collection.query()]
        return sorted(members, key=lambda member: member.member_id)

    @Logger.io
    async def get_member(self, *, member_id: int) -> Optional[Member]:
        doc = self._collection.get(str(member_id))
        return member_from_document(doc) if doc else None

    @Logger.io
    async def create_member(self, *, member: Member) -> None:
        if str(member.member_id) in self._collection:
            raise ConflictError(f'Member ID {member.member_id} already exists')
        self._ensure_unique_coupon(member)
        self._collection.put(str(member.member_id), member_to_document(member))

    @Logger.io
    async def update_member(self, *, member: Member) -> None:
        if str(member.member_id) not in self._collection:
            raise NotFoundError(f'Member not found: {member.member_id}')
        self._ensure_unique_coupon(member)
        self._collection.put(str(member.member_id), member_to_document(member))

    @Logger.io
    async def delete_member(self, *, member_id: int) -> None:
        if not self._collection.delete(str(member_id)):
            raise NotFoundError(f'Member not found: {member_id}')

    def _ensure_unique_coupon(self, member: Member) -> None:
        clash = self._collection.query(
            lambda doc: doc['coupon_code'] == member.coupon_code
            and doc['member_id'] != member.member_id
        )
        if clash:
            raise ConflictError(f'Coupon code {member.coupon_code} belongs to another member')
