"""
Log repository.

Data access layer for the append-only audit log.
"""

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.log import Log
from app.repositories.base import BaseRepository


class LogRepository(BaseRepository[Log]):
    """Repository for audit log operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Log, session)

    async def count_by_user_and_type(
        self,
        user_id: int,
        log_type: str,
        start: int | None = None,
        end: int | None = None,
    ) -> int:
        """
        Count records of a kind for a user.

        Both bounds are inclusive: a record created exactly at ``start`` or
        ``end`` is counted.

        Args:
            user_id: User ID
            log_type: Kind from LogType
            start: Lower bound, epoch seconds (optional)
            end: Upper bound, epoch seconds (optional)

        Returns:
            Number of matching records
        """
        conditions = [Log.user_id == user_id, Log.type == log_type]
        if start is not None:
            conditions.append(Log.created_at >= start)
        if end is not None:
            conditions.append(Log.created_at <= end)

        query = select(func.count(Log.id)).where(and_(*conditions))
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def find_by_user_and_type(
        self, user_id: int, log_type: str
    ) -> list[Log]:
        """
        Get all records of a kind for a user, oldest first.

        Unbounded: no pagination.

        Args:
            user_id: User ID
            log_type: Kind from LogType

        Returns:
            List of records
        """
        query = (
            select(Log)
            .where(and_(Log.user_id == user_id, Log.type == log_type))
            .order_by(Log.created_at.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def append(
        self,
        user_id: int,
        log_type: str,
        created_at: int,
        content: str = "",
        quota: int = 0,
        username: str = "",
    ) -> Log:
        """
        Append a new record.

        Args:
            user_id: Owner
            log_type: Kind from LogType
            created_at: Creation time, epoch seconds
            content: Human-readable summary
            quota: Quota delta
            username: Display name (best effort)

        Returns:
            Created record
        """
        return await self.create(
            user_id=user_id,
            type=log_type,
            created_at=created_at,
            content=content,
            quota=quota,
            username=username,
        )
