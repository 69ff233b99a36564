"""Redis client wrapper for shared rate-limit state."""

import logging

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)


class RedisClient:
    """Redis client wrapper for async operations."""

    def __init__(self, url: str, enabled: bool = False) -> None:
        self.url = url
        self._client: aioredis.Redis | None = None
        self._enabled = enabled

    @property
    def client(self) -> aioredis.Redis | None:
        """Connected client, or None when Redis is disabled or unreachable."""
        if not self._enabled:
            return None
        return self._client

    async def connect(self) -> None:
        """Connect to Redis."""
        if not self._enabled:
            logger.info("Redis disabled - skipping connection")
            return
        if self._client is None:
            try:
                self._client = aioredis.from_url(
                    self.url,
                    encoding="utf-8",
                    decode_responses=True,
                )
                await self._client.ping()
                logger.info("Redis connected successfully")
            except Exception as e:
                logger.warning(f"Redis connection failed: {e}. Continuing without Redis.")
                self._client = None
                self._enabled = False

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self._client:
            await self._client.aclose()
            self._client = None
