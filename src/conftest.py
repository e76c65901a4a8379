from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from src.config.settings import Settings
from src.main import create_app
from src.rsvps.repository.file_store import FileRecordStore

ADMIN_USER = "admin"
ADMIN_PASSWORD = "correct horse battery staple"
AUTH_SECRET = "test-signing-secret"
ADMIN_TOKEN = "static-admin-token"
INVITE_CODES = "VIP1,FAMILY42"


def make_settings(**overrides) -> Settings:
    """Settings isolated from any .env file or ambient environment."""
    values = {
        "admin_user": ADMIN_USER,
        "admin_password": ADMIN_PASSWORD,
        "auth_secret": AUTH_SECRET,
        "admin_token": ADMIN_TOKEN,
        "invite_codes": INVITE_CODES,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FixedClock:
    """Clock returning a controllable instant, advanced by hand."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 6, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def file_store(tmp_path) -> FileRecordStore:
    return FileRecordStore(tmp_path / "data" / "rsvps.json")


@pytest.fixture
def client_factory(settings, file_store):
    """Build a client for a fresh app; pass dependency overrides and/or other settings."""

    @asynccontextmanager
    async def _factory(overrides: dict | None = None, app_settings: Settings | None = None):
        app = create_app(app_settings or settings, record_store=file_store)
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="https://test") as client:
            yield client
        app.dependency_overrides.clear()

    return _factory
