from datetime import date
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger


@attrs.define
class Member:
    member_id: int
    name: str
    email: str
    coupon_code: str
    phone: str = ''
    address: str = ''
    date_of_birth: Optional[date] = None
    date_of_admission: Optional[date] = None
    emergency_contact: str = ''
    application_id: Optional[str] = None
    category_type: Optional[str] = None
    category_acronym: Optional[str] = None

    def matches_code(self, code: str) -> bool:
        """A membership claim may quote either the coupon code or the numeric member id."""
        code = code.strip()
        if code == self.coupon_code:
            return True
        return code.isdigit() and int(code) == self.member_id

    @classmethod
    @Logger.io
    def create(
        cls,
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
    ) -> 'Member':
        if member_id <= 0:
            raise ValidationError('Member ID must be a positive number')
        if len(name.strip()) < 2:
            raise ValidationError('Member name must be at least 2 characters')
        if '@' not in email:
            raise ValidationError('Member email is not valid')
        if not coupon_code.strip():
            raise ValidationError('Coupon code is required')

        return cls(
            member_id=member_id,
            name=name.strip(),
            email=email.strip().lower(),
            coupon_code=coupon_code.strip(),
            phone=phone,
            address=address,
            date_of_birth=date_of_birth,
            date_of_admission=date_of_admission,
            emergency_contact=emergency_contact,
            application_id=application_id,
            category_type=category_type,
            category_acronym=category_acronym,
        )
