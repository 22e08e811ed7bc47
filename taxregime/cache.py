"""
cache.py — Redis store for the last-used salary form.

Key conventions:
  {settings.saved_input_key}   → SalaryForm JSON     TTL settings.saved_input_ttl (0 = none)

Design:
  - Uses redis.asyncio (async client, part of redis-py 5.x)
  - Pool created once in lifespan, stored on app.state.redis
  - Helper functions take the client as a param — no module-level global state
  - Logs only the key, never salary values
  - The tax engine never touches this module; routes load/save explicitly
"""
import logging
from typing import Optional

import redis.asyncio as aioredis
from fastapi import HTTPException, Request
from pydantic import ValidationError
from redis.exceptions import RedisError

from taxregime.config import settings
from taxregime.intake.schemas import SalaryForm

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pool factory — called once in lifespan
# ---------------------------------------------------------------------------

async def create_redis_pool() -> aioredis.Redis:
    """
    Create and return an async Redis connection pool.
    Verifies connectivity with PING before returning.
    """
    client = aioredis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    try:
        await client.ping()
    except (RedisError, OSError):
        await client.aclose()
        raise
    logger.info("Redis connection pool established at %s", settings.redis_url)
    return client


def get_redis(request: Request) -> aioredis.Redis:
    """FastAPI dependency — the pool created in lifespan, or 503 if Redis was unreachable."""
    client = getattr(request.app.state, "redis", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Saved input store is unavailable")
    return client


# ---------------------------------------------------------------------------
# Saved form helpers
# ---------------------------------------------------------------------------

async def load_form(client: aioredis.Redis) -> Optional[SalaryForm]:
    """
    Retrieve the saved form.
    Returns None if nothing was saved, it expired, or the stored value no longer
    validates (it is left in place; the next save overwrites it).
    """
    key = settings.saved_input_key
    raw = await client.get(key)
    if raw is None:
        return None
    try:
        return SalaryForm.model_validate_json(raw)
    except ValidationError:
        logger.warning("Discarding unreadable saved input key=%s", key)
        return None


async def save_form(client: aioredis.Redis, form: SalaryForm) -> None:
    """Store the form, overwriting any previous value."""
    key = settings.saved_input_key
    payload = form.model_dump_json()
    if settings.saved_input_ttl > 0:
        await client.setex(key, settings.saved_input_ttl, payload)
    else:
        await client.set(key, payload)
    logger.info("Saved input stored key=%s ttl=%ds", key, settings.saved_input_ttl)


async def clear_form(client: aioredis.Redis) -> None:
    key = settings.saved_input_key
    await client.delete(key)
    logger.info("Saved input cleared key=%s", key)
