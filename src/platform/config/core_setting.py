from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Venue Box Office'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Auth
    ADMIN_EMAILS: List[str] = []  # accounts signing up with these emails get the admin flag
    SECRET_KEY: SecretStr = SecretStr('box_office_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    @field_validator('ADMIN_EMAILS', mode='before')
    @classmethod
    def assemble_admin_emails(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip().lower() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return [i.lower() for i in v]
        return []

    # Checkout
    MAX_SEATS_PER_BOOKING: int = 6
    COMMIT_TIMEOUT_SECONDS: float = 10.0  # hung booking writes fail after this
    SUBSCRIBER_BUFFER_SIZE: int = 10  # per-subscriber snapshot buffer, older snapshots dropped

    # Recommendation text service (optional feature)
    RECOMMENDATION_API_URL: str = ''
    RECOMMENDATION_API_KEY: SecretStr = SecretStr('')
    RECOMMENDATION_TIMEOUT_SECONDS: float = 15.0

    # Sample data
    SEED_SAMPLE_DATA: bool = True


settings = Settings()  # type: ignore
