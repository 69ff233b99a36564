"""Service context shared by request handlers."""

import time
from dataclasses import dataclass, field

from waitlist.infrastructure.rate_limiter import (
    InMemoryRateLimiter,
    RateLimitConfig,
    RateLimiter,
    RedisRateLimiter,
)
from waitlist.infrastructure.redis import RedisClient
from waitlist.infrastructure.telephony import SmsProviderProtocol, create_sms_provider
from waitlist.persistence.database import Database
from waitlist.settings import Settings


@dataclass
class ServiceContext:
    """Everything a request handler needs, built once per application.

    Tests construct one directly with doubles for storage and messaging.
    """

    settings: Settings
    database: Database
    sms_provider: SmsProviderProtocol | None = None
    rate_limiter: RateLimiter = field(default_factory=InMemoryRateLimiter)
    rate_limit_config: RateLimitConfig = field(
        default_factory=lambda: RateLimitConfig(requests=100, window_seconds=15 * 60)
    )
    redis_client: RedisClient | None = None
    started_at: float = field(default_factory=time.monotonic)

    def uptime(self) -> float:
        """Seconds since the context was created (monotonic)."""
        return time.monotonic() - self.started_at

    async def startup(self) -> None:
        await self.database.create_schema()
        if self.redis_client is not None:
            await self.redis_client.connect()

    async def shutdown(self) -> None:
        if self.redis_client is not None:
            await self.redis_client.disconnect()
        await self.database.dispose()


def build_context(settings: Settings) -> ServiceContext:
    """Build the production context from settings."""
    redis_client = None
    rate_limiter: RateLimiter = InMemoryRateLimiter()
    if settings.redis_enabled:
        redis_client = RedisClient(settings.redis_url, enabled=True)
        rate_limiter = RedisRateLimiter(redis_client)

    return ServiceContext(
        settings=settings,
        database=Database(settings.async_database_url),
        sms_provider=create_sms_provider(settings),
        rate_limiter=rate_limiter,
        rate_limit_config=RateLimitConfig(
            requests=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        redis_client=redis_client,
    )
