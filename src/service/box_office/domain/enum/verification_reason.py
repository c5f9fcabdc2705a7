from enum import StrEnum


class VerificationReason(StrEnum):
    INVALID_CODE = 'invalid_code'
    ALREADY_USED = 'already_used'
