"""
Rate Limiting Middleware

Token bucket rate limiting for the authentication endpoints.
Slows down password guessing and signup floods without touching
journal traffic.
"""

import asyncio
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from pulih.config.logging_config import get_logger
from pulih.infrastructure.metrics import RATE_LIMIT_EXCEEDED

logger = get_logger(__name__)


@dataclass
class RateLimitConfig:
    """Rate limit configuration."""

    # Requests per minute per client on limited paths
    requests_per_minute: int = 20

    # Burst allowance (tokens above limit)
    burst_size: int = 10

    # Path prefixes subject to limiting
    limited_prefixes: tuple[str, ...] = ("/api/v1/auth",)

    # Use the first X-Forwarded-For hop as the client address
    trust_forwarded_for: bool = False


class TokenBucket:
    """Token bucket for rate limiting."""

    def __init__(
        self,
        rate: float,  # Tokens per second
        capacity: int,  # Maximum tokens
    ) -> None:
        self.rate = rate
        self.capacity = capacity
        self.tokens = float(capacity)
        self.last_update = time.monotonic()
        self._lock = asyncio.Lock()

    async def acquire(self, tokens: int = 1) -> bool:
        """
        Attempt to acquire tokens.

        Returns True if tokens acquired, False if rate limited.
        """
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self.last_update

            self.tokens = min(self.capacity, self.tokens + elapsed * self.rate)
            self.last_update = now

            if self.tokens >= tokens:
                self.tokens -= tokens
                return True

            return False

    @property
    def available_tokens(self) -> int:
        """Get current available tokens."""
        return int(self.tokens)


class RateLimiter:
    """
    Rate limiter using token bucket algorithm.

    Maintains separate buckets per client identifier.
    """

    # Buckets idle for longer than this are dropped
    INACTIVE_SECONDS = 600

    def __init__(self, config: Optional[RateLimitConfig] = None) -> None:
        self.config = config or RateLimitConfig()
        self._buckets: dict[str, TokenBucket] = defaultdict(self._create_bucket)

    def _create_bucket(self) -> TokenBucket:
        rate = self.config.requests_per_minute / 60.0
        capacity = self.config.requests_per_minute + self.config.burst_size
        return TokenBucket(rate=rate, capacity=capacity)

    def applies_to(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.config.limited_prefixes)

    async def check_rate_limit(self, client_id: str) -> tuple[bool, int]:
        """
        Check if request is within rate limit.

        Returns:
            Tuple of (allowed, remaining_tokens)
        """
        bucket = self._buckets[client_id]
        allowed = await bucket.acquire()
        remaining = bucket.available_tokens

        if not allowed:
            RATE_LIMIT_EXCEEDED.labels(client_type="auth").inc()
            logger.warning(
                "Rate limit exceeded",
                client_id=client_id[:8] + "...",  # Truncate for privacy
            )

        self._cleanup_inactive_buckets()
        return allowed, remaining

    def _cleanup_inactive_buckets(self) -> None:
        now = time.monotonic()
        inactive_keys = [
            key for key, bucket in self._buckets.items()
            if now - bucket.last_update > self.INACTIVE_SECONDS
        ]
        for key in inactive_keys:
            del self._buckets[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for rate limiting.

    Only paths under ``RateLimitConfig.limited_prefixes`` are limited.
    """

    def __init__(self, app, config: Optional[RateLimitConfig] = None) -> None:
        super().__init__(app)
        self.limiter = RateLimiter(config)
        self.trust_forwarded_for = self.limiter.config.trust_forwarded_for

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        if not self.limiter.applies_to(request.url.path):
            return await call_next(request)

        allowed, remaining = await self.limiter.check_rate_limit(self._get_client_id(request))

        if not allowed:
            return Response(
                content='{"detail": "Rate limit exceeded. Please try again later."}',
                status_code=429,
                media_type="application/json",
                headers={
                    "X-RateLimit-Remaining": "0",
                    "Retry-After": "60",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response

    def _get_client_id(self, request: Request) -> str:
        """
        Client IP for bucketing.

        X-Forwarded-For is client-controlled, so it is only read when the
        deployment sits behind a proxy that overwrites it.
        """
        forwarded = request.headers.get("X-Forwarded-For") if self.trust_forwarded_for else None
        if forwarded:
            client_ip = forwarded.split(",")[0].strip()
        else:
            client_ip = request.client.host if request.client else "unknown"

        return f"ip:{client_ip}"
