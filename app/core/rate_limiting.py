"""
Rate Limiting System

Fixed-window request counting per client IP, backed either by an in-process
store or by Redis when several API workers must share one budget.
"""

import time
import threading
from typing import Callable, Dict, Iterable, Optional, Tuple
from dataclasses import dataclass

import redis.asyncio as redis
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.config.settings import Settings
from app.core.error_handling import error_body
from app.core.exceptions import ErrorCode, RateLimitExceeded
from app.core.logging import get_event_logger, get_logger

logger = get_logger(__name__)
events = get_event_logger(__name__)


@dataclass
class RateLimitResult:
    """Rate limit check result"""
    allowed: bool
    limit: int
    remaining: int
    retry_after: int
    total_hits: int
    key: str


class MemoryRateLimitStore:
    """
    Per-process counters keyed by client, each tagged with its window start.

    Entries whose window has ended are swept whenever a hit opens a new
    window, so clients that never return do not accumulate.
    """

    def __init__(self):
        self._counters: Dict[str, Tuple[int, int, int]] = {}
        self._next_sweep = 0
        self._lock = threading.Lock()

    async def hit(self, key: str, period: int) -> Tuple[int, int]:
        """Count one hit; return (hits in window, seconds until reset)."""
        now = int(time.time())
        window_start = now - (now % period)
        window_end = window_start + period
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
                self._next_sweep = window_end
            self._next_sweep = min(self._next_sweep, window_end)

            start, count, _ = self._counters.get(key, (window_start, 0, window_end))
            if start != window_start:
                start, count = window_start, 0
            count += 1
            self._counters[key] = (start, count, window_end)
        return count, window_end - now

    def _sweep(self, now: int) -> None:
        expired = [key for key, (_, _, end) in self._counters.items() if end <= now]
        for key in expired:
            del self._counters[key]

    def __len__(self) -> int:
        return len(self._counters)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._next_sweep = 0


class RedisRateLimitStore:
    """Counters shared through Redis using INCR with a window expiry"""

    def __init__(self, redis_client: redis.Redis, prefix: str = "rate_limit"):
        self.redis = redis_client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str) -> "RedisRateLimitStore":
        return cls(redis.from_url(url, decode_responses=True))

    async def hit(self, key: str, period: int) -> Tuple[int, int]:
        now = int(time.time())
        window_start = now - (now % period)
        window_key = f"{self.prefix}:{key}:{window_start}"

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.incr(window_key)
            pipe.expire(window_key, period)
            count, _ = await pipe.execute()

        return int(count), window_start + period - now


class RateLimiter:
    """Applies one limit over one window to arbitrary keys"""

    def __init__(self, store, limit: int, period: int, scope: str = "global"):
        self.store = store
        self.limit = limit
        self.period = period
        self.scope = scope

    async def check(self, key: str) -> RateLimitResult:
        scoped_key = f"{self.scope}:{key}"
        try:
            count, retry_after = await self.store.hit(scoped_key, self.period)
        except redis.RedisError as e:
            # Fail open when the shared store is unreachable
            logger.error(f"Rate limit check failed: {e}", extra={"scope": self.scope})
            return RateLimitResult(True, self.limit, self.limit, 0, 0, scoped_key)

        allowed = count <= self.limit
        if not allowed:
            events.warning("rate_limit_exceeded", scope=self.scope, key=key, hits=count)

        return RateLimitResult(
            allowed=allowed,
            limit=self.limit,
            remaining=max(0, self.limit - count),
            retry_after=retry_after if not allowed else 0,
            total_hits=count,
            key=scoped_key,
        )


def build_rate_limit_store(settings: Settings):
    """Create the counter store selected by RATE_LIMIT_BACKEND"""
    if settings.RATE_LIMIT_BACKEND == "redis":
        logger.info("Using Redis rate limit store")
        return RedisRateLimitStore.from_url(settings.REDIS_URL)
    return MemoryRateLimitStore()


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Global API rate limiting middleware"""

    def __init__(
        self,
        app: ASGIApp,
        limiter: RateLimiter,
        key_func: Callable[[Request], str] = client_ip,
        exempt_paths: Iterable[str] = (),
    ):
        super().__init__(app)
        self.limiter = limiter
        self.key_func = key_func
        self.exempt_paths = set(exempt_paths)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths or request.method == "OPTIONS":
            return await call_next(request)

        result = await self.limiter.check(self.key_func(request))
        headers = {
            "X-RateLimit-Limit": str(result.limit),
            "X-RateLimit-Remaining": str(result.remaining),
        }

        if not result.allowed:
            headers["Retry-After"] = str(result.retry_after)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=error_body(
                    request,
                    ErrorCode.RATE_LIMIT_EXCEEDED.value,
                    "Too many requests from this IP, please try again later.",
                    {"limit": result.limit, "retry_after": result.retry_after},
                ),
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


async def enforce_auth_rate_limit(request: Request) -> None:
    """
    Route dependency applying the strict per-IP limit to credential routes.

    Raises:
        RateLimitExceeded: when the client has used up its attempts
    """
    limiter: Optional[RateLimiter] = getattr(request.app.state, "auth_limiter", None)
    if limiter is None:
        return

    result = await limiter.check(client_ip(request))
    if not result.allowed:
        raise RateLimitExceeded(
            "Too many authentication attempts, please try again later.",
            limit=result.limit,
            retry_after=result.retry_after,
        )


__all__ = [
    "RateLimitResult",
    "MemoryRateLimitStore",
    "RedisRateLimitStore",
    "RateLimiter",
    "RateLimitMiddleware",
    "build_rate_limit_store",
    "enforce_auth_rate_limit",
    "client_ip",
]
