from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings


class AuthStrategyName(str, Enum):
    COOKIE = "cookie"
    BASIC = "basic"
    BEARER = "bearer"


class StorageBackend(str, Enum):
    FILE = "file"
    SHEET = "sheet"


class Settings(BaseSettings):
    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    ENVIRONMENT: str = "Production"

    # Admin auth - exactly one strategy per deployment
    admin_auth_strategy: AuthStrategyName = AuthStrategyName.COOKIE
    admin_user: str = ""
    admin_password: str = ""
    auth_secret: str = ""
    admin_token: str = ""

    # Session cookie
    session_cookie_name: str = "admin_session"
    session_ttl_days: int = 7
    session_cookie_secure: bool = True

    # Storage
    storage_backend: StorageBackend = StorageBackend.FILE
    data_file: str = "data/rsvps.json"

    # Google Sheets
    gsheet_id: str = ""
    gsheet_tab: str = "RSVP"
    google_service_account_json_b64: str = ""

    # Comma separated list of accepted invite codes
    invite_codes: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        frozen = True

    def get_invite_codes(self) -> frozenset[str]:
        return frozenset(code.strip() for code in self.invite_codes.split(",") if code.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
