"""Shared fixtures: fixed clock, temporary database, stubbed delivery channels."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from jobportal.config import Settings
from jobportal.database.engine import init_db
from jobportal.main import create_app
from jobportal.services.email_service import EmailService
from jobportal.services.sms_service import TwilioSmsSender

WINDOWS_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
ANDROID_UA = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)


class FakeClock:
    """Clock whose time only moves when a test says so."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)

    def set_hour(self, hour: int) -> None:
        self.current = self.current.replace(hour=hour, minute=0, second=0)


@pytest.fixture
def clock():
    """Fixed at 11:00 UTC, inside the mobile access window."""
    return FakeClock(datetime(2026, 1, 15, 11, 0, tzinfo=UTC))


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        access_timezone="UTC",
        admin_username="admin",
        admin_password="s3cret",
    )


@pytest_asyncio.fixture
async def engine(tmp_path):
    """A fresh file-backed SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def sms_sender():
    """Mocked SMS channel — never actually sends messages."""
    svc = TwilioSmsSender("AC123", "token", "+15550000000")
    svc.send_sms = AsyncMock()
    return svc


@pytest.fixture
def email_sender():
    """Mocked email channel — never actually sends emails."""
    svc = EmailService("smtp.example.com", 587, "noreply@example.com")
    svc.send_email = AsyncMock()
    return svc


@pytest_asyncio.fixture
async def app(settings, clock, engine, sms_sender, email_sender):
    app = create_app(
        settings,
        clock=clock,
        engine=engine,
        sms_sender=sms_sender,
        email_sender=email_sender,
    )
    app.state.audit_writer.start()
    yield app
    await app.state.audit_writer.stop()


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://test", headers={"user-agent": WINDOWS_UA}
    ) as client:
        yield client
