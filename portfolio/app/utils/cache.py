"""
Optional Redis cache for the public portfolio payload.

The payload is written on the first GET /api/portfolio after a miss and dropped by
every admin mutation. Without REDIS_URL (or when Redis is down) every call is a no-op
and readers go straight to the database.
"""
import json
import logging
from typing import Any

from portfolio.app.core.config import settings

logger = logging.getLogger(__name__)
_client = None

PORTFOLIO_CONTENT_KEY = "portfolio:content"


async def connect() -> None:
    global _client
    if not settings.redis_url:
        logger.warning("REDIS_URL not set, portfolio cache disabled")
        return
    try:
        from redis import asyncio as aioredis
        client = aioredis.Redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
        await client.ping()
        _client = client
        logger.info("Redis connected, portfolio cache ttl=%ds", settings.portfolio_cache_ttl)
    except Exception as e:
        _client = None
        logger.warning("Redis connect failed, portfolio cache disabled error=%s", e)


async def close() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def get(key: str) -> Any:
    if _client is None:
        return None
    try:
        raw = await _client.get(key)
    except Exception as e:
        logger.debug("Redis get failed key=%s error=%s", key, e)
        return None
    return json.loads(raw) if raw else None


async def set(key: str, value: Any, ttl: int | None = None) -> None:
    if _client is None:
        return
    try:
        await _client.set(key, json.dumps(value), ex=ttl or settings.portfolio_cache_ttl)
    except Exception as e:
        logger.debug("Redis set failed key=%s error=%s", key, e)


async def delete(key: str) -> None:
    if _client is None:
        return
    try:
        await _client.delete(key)
    except Exception as e:
        logger.debug("Redis delete failed key=%s error=%s", key, e)


async def cached_portfolio() -> dict | None:
    return await get(PORTFOLIO_CONTENT_KEY)


async def store_portfolio(content: dict) -> None:
    await set(PORTFOLIO_CONTENT_KEY, content)


async def invalidate_portfolio() -> None:
    """Called after every admin write so the next public read rebuilds from the store."""
    await delete(PORTFOLIO_CONTENT_KEY)
