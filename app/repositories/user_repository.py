"""
User repository.

Data access layer for User model.
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_by_telegram_id(
        self, telegram_id: int
    ) -> User | None:
        """
        Get user by Telegram ID.

        Args:
            telegram_id: Telegram user ID

        Returns:
            User or None
        """
        return await self.get_by(telegram_id=telegram_id)

    async def get_username(self, user_id: int) -> str | None:
        """
        Get username only, without loading the full row.

        Args:
            user_id: User ID

        Returns:
            Username or None if user/username missing
        """
        stmt = select(User.username).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increase_quota(self, user_id: int, amount: int) -> bool:
        """
        Atomically increase user quota.

        Uses a single UPDATE with ``quota = quota + amount`` so concurrent
        writers never lose an increment.

        Args:
            user_id: User ID
            amount: Quota to add

        Returns:
            True if the user row was updated
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(quota=User.quota + amount)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
