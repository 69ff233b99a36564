"""Per-IP request limiting for the public API.

Both limiters implement a sliding log: every accepted request is recorded
with its timestamp and a request is refused once ``requests`` entries fall
inside the trailing ``window_seconds``. The in-memory limiter serves a
single process; the Redis limiter shares the log across instances.
"""

import asyncio
import logging
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, NamedTuple, Protocol

from fastapi import HTTPException, Request, status

from waitlist.infrastructure.redis import RedisClient

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass
class RateLimitConfig:
    requests: int
    window_seconds: int
    key_prefix: str = "rl:api"

    def key_for(self, client_key: str) -> str:
        return f"{self.key_prefix}:{client_key}"


class RateLimitDecision(NamedTuple):
    limited: bool
    remaining: int
    reset_seconds: int


def _decide(config: RateLimitConfig, hits: int, oldest: float | None, now: float) -> RateLimitDecision:
    """Decide from the number of hits already inside the window."""
    if hits >= config.requests:
        if oldest is None:
            return RateLimitDecision(True, 0, config.window_seconds)
        return RateLimitDecision(True, 0, max(1, int(oldest + config.window_seconds - now)))
    return RateLimitDecision(False, config.requests - hits - 1, config.window_seconds)


class RateLimiter(Protocol):
    async def is_rate_limited(self, key: str, config: RateLimitConfig) -> RateLimitDecision: ...


class InMemoryRateLimiter:
    """Sliding log kept in process memory.

    Clients with no hit inside the window are swept out once per window, so
    the map only holds recently seen addresses.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._lock = asyncio.Lock()
        self._clock = clock
        self._last_sweep = clock()

    async def is_rate_limited(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        """Record the request unless the client is over its limit.

        Returns:
            (limited, remaining requests, seconds until the window frees up)
        """
        async with self._lock:
            now = self._clock()
            window_start = now - config.window_seconds
            if self._last_sweep <= window_start:
                self._sweep(window_start)
                self._last_sweep = now

            hits = self._hits[config.key_for(key)]
            while hits and hits[0] <= window_start:
                hits.popleft()

            decision = _decide(config, len(hits), hits[0] if hits else None, now)
            if not decision.limited:
                hits.append(now)
            return decision

    def _sweep(self, window_start: float) -> None:
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in stale:
            del self._hits[key]

    @property
    def tracked_clients(self) -> int:
        return len(self._hits)

    def reset(self) -> None:
        self._hits.clear()


class RedisRateLimiter:
    """Sliding log stored in a Redis sorted set per client."""

    def __init__(self, redis_client: RedisClient) -> None:
        self.redis_client = redis_client

    async def is_rate_limited(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        client = self.redis_client.client
        if client is None:
            return RateLimitDecision(False, config.requests, config.window_seconds)

        full_key = config.key_for(key)
        now = time.time()
        try:
            async with client.pipeline() as pipe:
                pipe.zremrangebyscore(full_key, 0, now - config.window_seconds)
                pipe.zcard(full_key)
                pipe.zrange(full_key, 0, 0, withscores=True)
                _, hits, oldest = await pipe.execute()

            decision = _decide(config, hits, oldest[0][1] if oldest else None, now)
            if not decision.limited:
                await client.zadd(full_key, {str(now): now})
                await client.expire(full_key, config.window_seconds + 1)
            return decision
        except Exception as e:
            # Fail open: Redis trouble must not take the API down
            logger.warning(f"Redis rate limit check failed: {e}")
            return RateLimitDecision(False, config.requests, config.window_seconds)


def get_client_ip(request: Request) -> str:
    """Client address, preferring proxy headers."""
    for header in ("X-Forwarded-For", "X-Real-IP"):
        value = request.headers.get(header)
        if value:
            return value.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing the per-IP limit from the service context.

    Raises:
        HTTPException: 429 once the client exceeds the window
    """
    context = request.app.state.context
    config = context.rate_limit_config
    client_ip = get_client_ip(request)

    decision = await context.rate_limiter.is_rate_limited(client_ip, config)
    if decision.limited:
        logger.warning(
            f"Rate limit exceeded for {client_ip} on {request.url.path}",
            extra={"limit": config.requests, "window_seconds": config.window_seconds},
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=RATE_LIMIT_MESSAGE,
            headers={
                "Retry-After": str(decision.reset_seconds),
                "X-RateLimit-Limit": str(config.requests),
                "X-RateLimit-Remaining": "0",
            },
        )
