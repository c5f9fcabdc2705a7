"""
In-process identity provider.

Accounts live in memory; passwords are bcrypt hashes. Logins issue signed
JWTs carrying the account view, so resolving the current user needs no
account lookup. Logout revokes a token by its `jti` until it would have
expired anyway. Administrators are the accounts whose email is listed in
ADMIN_EMAILS.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

import jwt
from pydantic import SecretStr
import uuid_utils

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ConflictError, LoginError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_auth_provider import IAuthProvider
from src.service.box_office.app.interface.i_password_hasher import IPasswordHasher
from src.service.box_office.domain.entity.user_entity import UserAccount


MIN_PASSWORD_LENGTH = 6


class InMemoryAuthProvider(IAuthProvider):
    def __init__(
        self,
        *,
        password_hasher: IPasswordHasher,
        admin_emails: Optional[Iterable[str]] = None,
        secret: Optional[SecretStr] = None,
        algorithm: str = settings.ALGORITHM,
        token_expire_minutes: int = settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    ) -> None:
        self.password_hasher = password_hasher
        if admin_emails is None:
            admin_emails = settings.ADMIN_EMAILS
        self.admin_emails = {email.strip().lower() for email in admin_emails}
        self.secret = (secret or settings.SECRET_KEY).get_secret_value()
        self.algorithm = algorithm
        self.token_expire_minutes = token_expire_minutes
        self._accounts: dict[str, tuple[UserAccount, str]] = {}
        # jti -> expiry of tokens revoked by logout
        self._revoked: dict[str, datetime] = {}

    @Logger.io
    async def sign_up(self, *, email: str, password: SecretStr, display_name: str) -> UserAccount:
        email = email.strip().lower()
        if '@' not in email:
            raise ValidationError('Email is not valid')
        if len(password.get_secret_value()) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        if email in self._accounts:
            raise ConflictError(f'User with email {email} already exists')

        account = UserAccount(
            id=str(uuid_utils.uuid7()),
            email=email,
            display_name=display_name.strip() or email.split('@')[0],
            is_admin=email in self.admin_emails,
        )
        self._accounts[email] = (
            account,
            self.password_hasher.hash_password(plain_password=password),
        )
        Logger.base.info(f'👤 [AUTH] Signed up {email} (admin={account.is_admin})')
        return account

    @Logger.io
    async def login(self, *, email: str, password: SecretStr) -> str:
        entry = self._accounts.get(email.strip().lower())
        if entry is None or not self.password_hasher.verify_password(
            plain_password=password, hashed_password=entry[1]
        ):
            raise LoginError('LOGIN_BAD_CREDENTIALS')
        return self.create_jwt_token(entry[0])

    @Logger.io
    async def logout(self, *, token: str) -> None:
        payload = self.decode_jwt_token(token)
        if payload is None:
            return
        now = datetime.now(timezone.utc)
        self._revoked = {jti: exp for jti, exp in self._revoked.items() if exp > now}
        self._revoked[payload['jti']] = datetime.fromtimestamp(payload['exp'], timezone.utc)

    async def current_user(self, *, token: Optional[str]) -> Optional[UserAccount]:
        if not token or (payload := self.decode_jwt_token(token)) is None:
            return None
        if payload['jti'] in self._revoked:
            return None
        return UserAccount(
            id=payload['sub'],
            email=payload['email'],
            display_name=payload.get('name', ''),
            is_admin=bool(payload.get('is_admin', False)),
        )

    def create_jwt_token(self, account: UserAccount) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': account.id,
            'jti': str(uuid_utils.uuid4()),
            'iat': now,
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'email': account.email,
            'name': account.display_name,
            'is_admin': account.is_admin,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Optional[dict[str, Any]]:
        """Claims of a valid token, None for expired, tampered or malformed ones"""
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'require': ['sub', 'jti', 'exp', 'email']},
            )
        except jwt.PyJWTError:
            return None
