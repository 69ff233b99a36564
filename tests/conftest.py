"""Pytest configuration and fixtures."""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from waitlist.core.context import ServiceContext
from waitlist.core.errors import MessagingError
from waitlist.infrastructure.rate_limiter import InMemoryRateLimiter, RateLimitConfig
from waitlist.infrastructure.telephony.base import SmsProviderProtocol, SmsResult
from waitlist.persistence.database import Database
from waitlist.settings import Settings


class FakeSmsProvider(SmsProviderProtocol):
    """Records outbound messages instead of calling Twilio."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict] = []

    async def send_sms(self, to, body) -> SmsResult:
        if self.fail:
            raise MessagingError("Twilio SMS send failed: HTTP 400 error")
        self.sent.append({"to": to, "body": body})
        return SmsResult(
            message_id=f"SM{len(self.sent):032d}",
            status="queued",
            to=to,
            sender="+15005550006",
            provider="fake",
        )

    def validate_webhook_signature(self, url, params, signature) -> bool:
        return bool(signature)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "subscribers.db"


@pytest.fixture
def test_settings(db_path):
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{db_path}",
        environment="testing",
        twilio_account_sid=None,
        twilio_auth_token=None,
        twilio_from_number=None,
        twilio_messaging_service_sid=None,
        twilio_validate_signature=False,
        redis_enabled=False,
    )


@pytest.fixture
def sms_provider():
    return FakeSmsProvider()


@pytest.fixture
async def database(test_settings):
    """File-backed SQLite database with the schema created."""
    db = Database(test_settings.async_database_url)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
async def db_session(database):
    """Create a test database session."""
    async with database.session() as session:
        yield session


@pytest.fixture
def make_context(test_settings, sms_provider):
    """Build a service context; keyword overrides replace the defaults."""

    def _make(**overrides) -> ServiceContext:
        params = {
            "settings": test_settings,
            "database": Database(test_settings.async_database_url),
            "sms_provider": sms_provider,
            "rate_limiter": InMemoryRateLimiter(),
            "rate_limit_config": RateLimitConfig(requests=1000, window_seconds=60),
        }
        params.update(overrides)
        return ServiceContext(**params)

    return _make


@pytest.fixture
def client(make_context):
    """Create a test FastAPI client."""
    from waitlist.main import create_app

    app = create_app(context=make_context())

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fetch_rows(db_path):
    """Read subscriber rows straight from the SQLite file."""

    def _fetch(where: str = "1 = 1", params: tuple = ()) -> list[sqlite3.Row]:
        conn = sqlite3.connect(db_path)
        conn.row_factory = sqlite3.Row
        try:
            return conn.execute(f"SELECT * FROM subscribers WHERE {where} ORDER BY id", params).fetchall()
        finally:
            conn.close()

    return _fetch


@pytest.fixture
def failing_sms_provider():
    return FakeSmsProvider(fail=True)
