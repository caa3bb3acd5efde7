"""
Bot Initialization - Storage Module.

Module: storage.py
Sets up the Redis client backing the per-user check-in lock.
Falls back to process-local locks when Redis is disabled or unreachable.
"""

from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.config.settings import settings


async def setup_redis_client() -> Redis | None:
    """
    Connect to Redis if enabled.

    Returns:
        Redis client, or None to use process-local locks
    """
    if not settings.redis_enabled:
        logger.info("Redis disabled, check-in locks are process-local")
        return None

    redis_client = Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password,
        db=settings.redis_db,
        decode_responses=True,
    )
    try:
        await redis_client.ping()
    except RedisError as e:
        logger.error(f"Failed to connect to Redis: {e}")
        logger.warning("Falling back to process-local check-in locks")
        await redis_client.aclose()
        return None

    logger.info("Redis connection established for check-in locks")
    return redis_client
