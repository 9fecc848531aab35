"""Per-client limits on the routes that can call a third-party API.

Each of /location, /weather, /movies and /yelp spends a different provider's
quota on a cache miss, so every route is counted in its own moving window per
client IP. The health endpoints are not limited.
"""

from __future__ import annotations

import math
import time

import structlog
from fastapi import HTTPException, Request
from limits import parse as parse_limit
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

logger = structlog.get_logger(__name__)


class ClientRateLimiter:
    """In-process moving window keyed by ``(client, route)``."""

    def __init__(self, limit: str) -> None:
        self.limit = limit
        self._item = parse_limit(limit)
        self._strategy = MovingWindowRateLimiter(MemoryStorage())

    def hit(self, client: str, route: str) -> bool:
        return self._strategy.hit(self._item, client, route)

    def retry_after(self, client: str, route: str) -> int:
        stats = self._strategy.get_window_stats(self._item, client, route)
        return max(1, math.ceil(stats.reset_time - time.time()))


def client_ip(request: Request) -> str:
    # First hop of X-Forwarded-For when behind a proxy
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "local"


def enforce_rate_limit(request: Request) -> None:
    """Router dependency: 429 once the client used up its window for this route."""
    limiter: ClientRateLimiter | None = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return

    client, route = client_ip(request), request.url.path
    if limiter.hit(client, route):
        return

    logger.warning("rate_limited", client=client, route=route, limit=limiter.limit)
    raise HTTPException(
        status_code=429,
        detail="Too Many Requests",
        headers={
            "Retry-After": str(limiter.retry_after(client, route)),
            "X-RateLimit-Limit": limiter.limit,
        },
    )
