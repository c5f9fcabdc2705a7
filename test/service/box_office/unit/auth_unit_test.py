import jwt
import pytest
from pydantic import SecretStr

from src.platform.exception.exceptions import (
    AuthenticationError,
    ConflictError,
    LoginError,
    ValidationError,
)
from src.service.box_office.app.command.user_auth_use_case import UserAuthUseCase
from src.service.box_office.driven_adapter.auth.bcrypt_password_hasher import BcryptPasswordHasher
from src.service.box_office.driven_adapter.auth.in_memory_auth_provider import InMemoryAuthProvider
from test.constants import ADMIN_EMAIL, DEFAULT_PASSWORD, USER_EMAIL


PASSWORD = SecretStr(DEFAULT_PASSWORD)


@pytest.fixture
def use_case() -> UserAuthUseCase:
    provider = InMemoryAuthProvider(
        password_hasher=BcryptPasswordHasher(), admin_emails=[ADMIN_EMAIL.upper()]
    )
    return UserAuthUseCase(auth_provider=provider)


@pytest.mark.unit
class TestBcryptPasswordHasher:
    def test_hash_and_verify(self) -> None:
        hasher = BcryptPasswordHasher()
        hashed = hasher.hash_password(plain_password=PASSWORD)

        assert hashed != DEFAULT_PASSWORD
        assert hasher.verify_password(plain_password=PASSWORD, hashed_password=hashed)
        assert not hasher.verify_password(plain_password=SecretStr('wrong'), hashed_password=hashed)


@pytest.mark.unit
class TestUserAuth:
    @pytest.mark.asyncio
    async def test_sign_up_marks_admins(self, use_case: UserAuthUseCase) -> None:
        admin = await use_case.sign_up(
            email=ADMIN_EMAIL, password=PASSWORD, display_name='Box Office'
        )
        user = await use_case.sign_up(
            email=f'  {USER_EMAIL.upper()} ', password=PASSWORD, display_name=''
        )

        assert admin.is_admin is True
        assert user.is_admin is False
        assert user.email == USER_EMAIL
        assert user.display_name == 'asha'

    @pytest.mark.asyncio
    async def test_sign_up_rejections(self, use_case: UserAuthUseCase) -> None:
        await use_case.sign_up(email=USER_EMAIL, password=PASSWORD, display_name='Asha')

        with pytest.raises(ConflictError):
            await use_case.sign_up(email=USER_EMAIL, password=PASSWORD, display_name='Asha')
        with pytest.raises(ValidationError):
            await use_case.sign_up(
                email='rohan@example.com', password=SecretStr('123'), display_name='Rohan'
            )
        with pytest.raises(ValidationError):
            await use_case.sign_up(email='rohan', password=PASSWORD, display_name='Rohan')

    @pytest.mark.asyncio
    async def test_login_authenticate_logout(self, use_case: UserAuthUseCase) -> None:
        await use_case.sign_up(email=USER_EMAIL, password=PASSWORD, display_name='Asha')

        token, user = await use_case.login(email=USER_EMAIL, password=PASSWORD)
        assert user.email == USER_EMAIL
        assert (await use_case.authenticate(token=token)).id == user.id

        await use_case.logout(token=token)
        with pytest.raises(AuthenticationError):
            await use_case.authenticate(token=token)

    @pytest.mark.asyncio
    async def test_bad_credentials(self, use_case: UserAuthUseCase) -> None:
        await use_case.sign_up(email=USER_EMAIL, password=PASSWORD, display_name='Asha')

        with pytest.raises(LoginError):
            await use_case.login(email=USER_EMAIL, password=SecretStr('not-the-password'))
        with pytest.raises(LoginError):
            await use_case.login(email='nobody@example.com', password=PASSWORD)

    @pytest.mark.asyncio
    async def test_missing_token(self, use_case: UserAuthUseCase) -> None:
        with pytest.raises(AuthenticationError):
            await use_case.authenticate(token=None)


@pytest.mark.unit
class TestJwtTokens:
    SECRET = SecretStr('unit_test_secret_key_with_enough_length')

    def _provider(self, **kwargs: int) -> InMemoryAuthProvider:
        return InMemoryAuthProvider(
            password_hasher=BcryptPasswordHasher(),
            admin_emails=[ADMIN_EMAIL],
            secret=self.SECRET,
            **kwargs,
        )

    @pytest.mark.asyncio
    async def test_token_is_signed_jwt_with_account_claims(self) -> None:
        provider = self._provider()
        admin = await provider.sign_up(email=ADMIN_EMAIL, password=PASSWORD, display_name='Ops')

        token = await provider.login(email=ADMIN_EMAIL, password=PASSWORD)
        claims = jwt.decode(token, self.SECRET.get_secret_value(), algorithms=['HS256'])

        assert claims['sub'] == admin.id
        assert claims['is_admin'] is True
        assert claims['exp'] > claims['iat']
        assert await provider.current_user(token=token) == admin

    @pytest.mark.asyncio
    async def test_tampered_and_foreign_tokens_are_rejected(self) -> None:
        provider = self._provider()
        await provider.sign_up(email=USER_EMAIL, password=PASSWORD, display_name='Asha')
        token = await provider.login(email=USER_EMAIL, password=PASSWORD)

        forged = jwt.encode(
            jwt.decode(token, options={'verify_signature': False}) | {'is_admin': True},
            'someone_elses_secret_key_of_decent_length',
            algorithm='HS256',
        )

        assert await provider.current_user(token=forged) is None
        assert await provider.current_user(token='not-a-jwt') is None

    @pytest.mark.asyncio
    async def test_expired_token_is_rejected(self) -> None:
        provider = self._provider(token_expire_minutes=-1)
        await provider.sign_up(email=USER_EMAIL, password=PASSWORD, display_name='Asha')

        token = await provider.login(email=USER_EMAIL, password=PASSWORD)

        assert await provider.current_user(token=token) is None

    @pytest.mark.asyncio
    async def test_logout_revokes_only_that_token(self) -> None:
        provider = self._provider()
        await provider.sign_up(email=USER_EMAIL, password=PASSWORD, display_name='Asha')
        first = await provider.login(email=USER_EMAIL, password=PASSWORD)
        second = await provider.login(email=USER_EMAIL, password=PASSWORD)

        await provider.logout(token=first)

        assert await provider.current_user(token=first) is None
        assert (await provider.current_user(token=second)).email == USER_EMAIL
