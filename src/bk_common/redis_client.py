"""Shared Redis connection for the event channels.

Publishing and the customer-event subscription reuse one pool. Balances
never live in Redis.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import settings

logger = logging.getLogger(__name__)

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
        )
    return _redis_pool


async def redis_available() -> bool:
    """Ping Redis. Events are best-effort, so an outage is reported, not raised."""
    try:
        return bool(await (await get_redis()).ping())
    except RedisError as exc:
        logger.warning("Redis unavailable at %s: %s", settings.REDIS_URL, exc)
        return False


async def close_redis() -> None:
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None
