"""Redis cache decorator for memoizing projection results at the call site.

The engine itself is stateless; batch callers wrap it with `cached` so identical
deal inputs are only projected once per TTL.
"""

import functools
import hashlib
import json
import logging
from typing import Any, Callable

import redis.asyncio as redis
from redis.exceptions import RedisError

from dealbook.config import settings

logger = logging.getLogger(__name__)

_redis_client: redis.Redis | None = None


async def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(settings.redis_url, decode_responses=True)
    return _redis_client


def cache_key(prefix: str, *args: Any, **kwargs: Any) -> str:
    """Deterministic key from a hash of the call arguments."""
    raw = json.dumps(
        {"args": [str(a) for a in args], "kwargs": {k: str(v) for k, v in kwargs.items()}},
        sort_keys=True,
    )
    h = hashlib.sha256(raw.encode()).hexdigest()[:16]
    return f"dealbook:{prefix}:{h}"


def cached(prefix: str, ttl_seconds: int | None = None):
    """Cache decorator for async functions returning JSON-serializable values.

    Args:
        prefix: Cache key prefix (e.g., "projection")
        ttl_seconds: Time-to-live; defaults to settings.projection_cache_ttl_seconds
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not settings.cache_enabled:
                return await func(*args, **kwargs)

            key = cache_key(prefix, *args, **kwargs)
            try:
                r = await get_redis()
                cached_value = await r.get(key)
                if cached_value is not None:
                    logger.debug("Cache hit: %s", key)
                    return json.loads(cached_value)
            except RedisError as e:
                logger.warning("Redis unavailable, skipping cache for %s: %s", key, e)

            result = await func(*args, **kwargs)

            ttl = ttl_seconds or settings.projection_cache_ttl_seconds
            try:
                r = await get_redis()
                await r.setex(key, ttl, json.dumps(result, default=str))
            except RedisError as e:
                logger.warning("Failed to write cache for %s: %s", key, e)

            return result
        return wrapper
    return decorator
