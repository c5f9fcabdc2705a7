from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class MemberCreateRequest(BaseModel):
    member_id: int = Field(gt=0)
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

    class Config:
        json_schema_extra = {
            'example': {
                'member_id': 1003,
                'name': 'Meera Kulkarni',
                'email': 'meera@example.com',
                'coupon_code': 'RIC-MEERA-1003',
                'phone': '+91-20-5550-1003',
                'date_of_admission': '2024-06-01',
                'category_type': 'Life Member',
                'category_acronym': 'LM',
            }
        }


class MemberUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    coupon_code: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_of_admission: Optional[date] = None
    emergency_contact: Optional[str] = None
    application_id: Optional[str] = None
    category_type: Optional[str] = None
    category_acronym: Optional[str] = None


class MemberResponse(BaseModel):
    member_id: int
    name: str
    email: str
    coupon_code: str
    phone: str
    address: str
    date_of_birth: Optional[date]
    date_of_admission: Optional[date]
    emergency_contact: str
    application_id: Optional[str]
    category_type: Optional[str]
    category_acronym: Optional[str]


class VerifyMemberRequest(BaseModel):
    event_id: str
    code: str
    seat_id: str = ''

    class Config:
        json_schema_extra = {
            'example': {'event_id': '0192c0de-...', 'code': 'RIC-ASHA-1001', 'seat_id': 'Gold-B-2'}
        }


class VerificationResponse(BaseModel):
    seat_id: str
    member_code: str
    verified: bool
    reason: Optional[str] = None
    member_name: Optional[str] = None
