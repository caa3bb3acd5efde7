"""
Bot Initialization - Shutdown Module.

Module: shutdown.py
Handles graceful shutdown of the bot.
Closes Redis and database connections.
"""

from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError


async def shutdown_handler(redis_client: Redis | None = None) -> None:
    """Handle graceful shutdown."""
    logger.info("Graceful shutdown initiated...")

    if redis_client is not None:
        try:
            await redis_client.aclose()
            logger.info("Redis connection closed")
        except RedisError as e:
            logger.warning(f"Error closing Redis: {e}")

    # Close database connections
    try:
        from app.config.database import engine
        await engine.dispose()
        logger.info("Database connections closed")
    except SQLAlchemyError as e:
        logger.warning(f"Error closing database: {e}")

    logger.info("Graceful shutdown complete")
