from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from app.connections.redis import get_redis
from app.utils.config import settings


logger = logging.getLogger(__name__)


def limit_route(seconds: int, max_calls: int = 1):
    """Return a FastAPI dependency that rate-limits a client on a route.

    Counts calls per client host and path in Redis. The first call opens a
    window of N seconds; once more than `max_calls` land in that window the
    caller gets a 429 until the key expires.
    """

    def _dependency(request: Request) -> None:
        if not settings.rate_limit_enabled:
            return
        client = get_redis()
        host = request.client.host if request.client else "unknown"
        key = f"rl:{host}:{request.url.path}"

        calls = client.incr(key)
        if calls == 1:
            client.expire(key, seconds)
        if calls > max_calls:
            ttl = client.ttl(key)
            if ttl is None or ttl < 0:
                # Key lost its expiry (e.g. crash between INCR and EXPIRE)
                client.expire(key, seconds)
                ttl = seconds
            logger.warning("Rate limit hit on %s by %s", request.url.path, host)
            raise HTTPException(status_code=429, detail=f"Rate limited. Try again in {ttl}s")

    return _dependency
