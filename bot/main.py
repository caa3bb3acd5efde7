"""
Bot main entry point.

Initializes and runs the check-in bot with aiogram 3.x.
"""

import asyncio
import sys

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import ErrorEvent
from loguru import logger

from app.config.database import init_models
from app.config.settings import settings
from app.utils.exceptions import is_safe_to_ignore, is_storage_fault
from app.utils.user_lock import configure_user_lock
from bot.initialization.handlers import register_all_handlers
from bot.initialization.logging import setup_logging
from bot.initialization.middlewares import register_middlewares
from bot.initialization.shutdown import shutdown_handler
from bot.initialization.storage import setup_redis_client


async def main() -> None:
    """Initialize and run the bot."""
    setup_logging()

    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not set")

    await init_models()

    redis_client = await setup_redis_client()
    configure_user_lock(redis_client)

    bot = Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(),
    )
    dp = Dispatcher()

    register_middlewares(dp)

    @dp.error()
    async def error_handler(event: ErrorEvent) -> bool:
        """Global error handler for unhandled exceptions."""
        if is_storage_fault(event.exception):
            logger.error(f"Database error in bot: {event.exception}")
        else:
            logger.exception(
                f"Unhandled error in bot: {event.exception.__class__.__name__}: {event.exception}"
            )

        try:
            if event.update and event.update.message:
                await event.update.message.answer(
                    "⚠️ Something went wrong. Please try again later."
                )
        except Exception as send_error:
            if not is_safe_to_ignore(send_error):
                raise
            logger.error(f"Failed to send error message: {send_error}")

        return True

    register_all_handlers(dp)

    bot_info = await bot.get_me()
    logger.info(f"Bot connected: @{bot_info.username} (ID: {bot_info.id})")

    try:
        logger.info("Starting polling...")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await shutdown_handler(redis_client)
        await bot.session.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (KeyboardInterrupt)")
    except Exception as e:
        logger.exception(f"Bot crashed: {e}")
        sys.exit(1)
