"""
Check-in Service - Calendar Module.

Rebuilds the day-by-day signed/unsigned sequence from the audit log.
"""

from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from app.config.constants import CALENDAR_FALLBACK_DAYS
from app.models.log import LogType
from app.services.base_service import log_operation
from app.services.checkin.types import DayStatus
from app.utils.datetime_utils import (
    date_range,
    day_key,
    local_today,
    timestamp_to_local_date,
)
from app.utils.exceptions import CheckinStorageError


class CheckinCalendarMixin:
    """Mixin with calendar reconstruction."""

    async def build_sign_calendar(
        self, user_id: int, now: datetime | None = None
    ) -> list[DayStatus]:
        """
        Build the signed/unsigned status for every day of the window.

        Range: registration day (or 30 days ago when unknown) through
        today, cut at ``start + window_days`` when that comes first.
        Empty when the start lies after the end.

        Args:
            user_id: User ID
            now: Evaluation instant (default: service clock)

        Returns:
            Day statuses in ascending date order

        Raises:
            CheckinStorageError: If user or audit lookups fail
        """
        now = now or self.now()
        user = await self._get_user_or_raise(user_id)

        today = local_today(self.tz, now)
        if user.created_time > 0:
            start = timestamp_to_local_date(user.created_time, self.tz)
        else:
            start = today - timedelta(days=CALENDAR_FALLBACK_DAYS)

        end = min(today, start + timedelta(days=self.config.window_days))

        signed_dates = await self._load_signed_dates(user_id)

        return [
            DayStatus(date=key, signed=key in signed_dates)
            for key in map(day_key, date_range(start, end))
        ]

    @log_operation
    async def list_calendar(self, user_id: int) -> list[DayStatus]:
        """Calendar for the transport layer."""
        return await self.build_sign_calendar(user_id)

    async def _load_signed_dates(self, user_id: int) -> set[str]:
        """All local dates (YYYY-MM-DD) with at least one sign record."""
        try:
            records = await self.log_repo.find_by_user_and_type(user_id, LogType.SIGN)
        except SQLAlchemyError as e:
            await self.rollback()
            raise CheckinStorageError(
                f"Failed to load sign records for user {user_id}: {e}"
            ) from e

        return {
            day_key(timestamp_to_local_date(record.created_at, self.tz))
            for record in records
        }
