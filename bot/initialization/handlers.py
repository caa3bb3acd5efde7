"""
Bot Initialization - Handlers Module.

Module: handlers.py
Registers bot handlers.
"""

from aiogram import Dispatcher
from loguru import logger


def register_all_handlers(dp: Dispatcher) -> None:
    """Register all user handlers."""
    from bot.handlers import checkin

    dp.include_router(checkin.router)
    logger.info("Handlers registered")
