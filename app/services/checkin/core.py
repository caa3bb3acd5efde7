"""
Check-in Service - Core Module.

Base class with configuration, collaborators and shared lookups.
"""

from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.checkin import CheckinConfig
from app.config.settings import settings
from app.models.user import User
from app.repositories.log_repository import LogRepository
from app.repositories.user_repository import UserRepository
from app.services.base_service import BaseService
from app.services.group_policy import GroupPolicy, SettingsGroupPolicy
from app.utils.datetime_utils import resolve_timezone, utc_now
from app.utils.exceptions import CheckinStorageError
from app.utils.user_lock import UserLock, get_user_lock


class CheckinServiceCore(BaseService):
    """Core service with configuration and basic lookups."""

    def __init__(
        self,
        session: AsyncSession,
        config: CheckinConfig | None = None,
        group_policy: GroupPolicy | None = None,
        user_lock: UserLock | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize service.

        Args:
            session: Async database session
            config: Check-in configuration (default: from settings)
            group_policy: Group permission lookup (default: from settings)
            user_lock: Per-user grant lock (default: process-wide local lock)
            clock: Returns the current aware datetime (default: utc_now)
        """
        super().__init__(session)
        self.config = config or settings.checkin_config()
        self.group_policy = group_policy or SettingsGroupPolicy.from_settings(settings)
        self.user_lock = user_lock or get_user_lock()
        self.clock = clock or utc_now
        self.tz = resolve_timezone(self.config.timezone)

        self.user_repo = UserRepository(session)
        self.log_repo = LogRepository(session)

    def now(self) -> datetime:
        """Current instant from the injected clock."""
        return self.clock()

    async def _get_user_or_raise(self, user_id: int) -> User:
        """
        Load user for read views.

        Raises:
            CheckinStorageError: If the lookup fails or the user is missing
        """
        try:
            user = await self.user_repo.get_by_id(user_id)
        except SQLAlchemyError as e:
            await self.rollback()
            raise CheckinStorageError(f"Failed to load user {user_id}: {e}") from e

        if user is None:
            raise CheckinStorageError(f"User {user_id} not found")
        return user
