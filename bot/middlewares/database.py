"""
Database middleware.

Opens one session per update and resolves the registered user for the
Telegram sender. Handlers receive ``session`` and ``user`` in their data.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.repositories.user_repository import UserRepository


class DatabaseMiddleware(BaseMiddleware):
    """Database middleware - provides session and user to handlers."""

    def __init__(self, session_pool: async_sessionmaker) -> None:
        """
        Initialize database middleware.

        Args:
            session_pool: SQLAlchemy async session maker
        """
        super().__init__()
        self.session_pool = session_pool

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """Process update through middleware."""
        async with self.session_pool() as session:
            data["session"] = session
            data["user"] = None

            tg_user = data.get("event_from_user")
            if tg_user:
                try:
                    data["user"] = await UserRepository(session).get_by_telegram_id(
                        tg_user.id
                    )
                except SQLAlchemyError as e:
                    await session.rollback()
                    logger.error(f"Failed to resolve user {tg_user.id}: {e}")

            return await handler(event, data)
