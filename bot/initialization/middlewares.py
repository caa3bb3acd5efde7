"""
Bot Initialization - Middlewares Module.

Module: middlewares.py
Registers bot middlewares.
"""

from aiogram import Dispatcher
from loguru import logger
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.config.database import async_session_maker
from bot.middlewares.database import DatabaseMiddleware


def register_middlewares(
    dp: Dispatcher, session_pool: async_sessionmaker = async_session_maker
) -> None:
    """
    Register all middlewares.

    Args:
        dp: Dispatcher instance
        session_pool: Session maker used for every update
    """
    dp.update.middleware(DatabaseMiddleware(session_pool=session_pool))
    logger.info("Middlewares registered")
