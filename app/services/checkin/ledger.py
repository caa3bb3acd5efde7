"""
Check-in Service - Ledger Module.

Grants the reward and answers "signed today" / "total signed days"
purely from the audit log.

Balance increase and audit append are two separate commits. If the
balance commit succeeds and the audit append fails, the reward is kept
and the missing audit entry is reported to the system log. The grant is
still reported as successful.
"""

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from app.models.log import LogType
from app.services.base_service import log_operation
from app.services.checkin.types import SignResult
from app.utils.datetime_utils import today_end, today_start
from app.utils.exceptions import CheckinStorageError
from app.utils.formatters import format_quota


class CheckinLedgerMixin:
    """Mixin with reward granting and audit log queries."""

    async def has_signed_today(
        self, user_id: int, now: datetime | None = None
    ) -> bool:
        """
        Check for a sign record inside today's local day (inclusive bounds).

        Raises:
            CheckinStorageError: If the count query fails
        """
        now = now or self.now()
        start = today_start(self.tz, now)
        end = today_end(self.tz, now)

        try:
            count = await self.log_repo.count_by_user_and_type(
                user_id, LogType.SIGN, start=start, end=end
            )
        except SQLAlchemyError as e:
            await self.rollback()
            raise CheckinStorageError(
                f"Failed to count sign records for user {user_id}: {e}"
            ) from e
        return count > 0

    async def count_sign_days(self, user_id: int) -> int:
        """
        Count all sign records of a user (lifetime, no date filter).

        Raises:
            CheckinStorageError: If the count query fails
        """
        try:
            return await self.log_repo.count_by_user_and_type(user_id, LogType.SIGN)
        except SQLAlchemyError as e:
            await self.rollback()
            raise CheckinStorageError(
                f"Failed to count sign days for user {user_id}: {e}"
            ) from e

    @log_operation
    async def grant(self, user_id: int) -> SignResult:
        """
        Check in: grant the daily reward if the user is eligible.

        The whole check-then-grant sequence runs under the per-user lock,
        so concurrent requests for one user produce at most one grant per day.

        Args:
            user_id: Authenticated user ID

        Returns:
            SignResult; ineligibility is a normal unsuccessful result

        Raises:
            CheckinStorageError: If the balance increase fails
            CheckinLockTimeout: If the per-user lock is busy too long
        """
        async with self.user_lock.lock(
            user_id, timeout=self.config.lock_timeout_seconds
        ):
            now = self.now()
            eligibility = await self.check_eligibility(user_id, now=now)
            if not eligibility.eligible:
                self.logger.info(
                    f"Check-in rejected for user {user_id}: {eligibility.reason.value}"
                )
                return SignResult.rejected(eligibility)

            username = await self._resolve_username(user_id)
            quota = self.config.reward_per_sign

            await self._increase_balance(user_id, quota)
            await self._append_sign_record(user_id, username, quota, now)

        self.logger.info(f"User {user_id} checked in, granted {quota}")
        return SignResult(
            success=True,
            message=f"checked in, received {format_quota(quota)}",
            quota=quota,
        )

    async def _resolve_username(self, user_id: int) -> str:
        """Best-effort display name for the audit trail."""
        try:
            return await self.user_repo.get_username(user_id) or ""
        except SQLAlchemyError as e:
            await self.rollback()
            self.logger.warning(f"Username lookup failed for user {user_id}: {e}")
            return ""

    async def _increase_balance(self, user_id: int, quota: int) -> None:
        """
        Increase and commit the user's quota.

        Raises:
            CheckinStorageError: On any failure (not retried)
        """
        try:
            updated = await self.user_repo.increase_quota(user_id, quota)
            if not updated:
                raise CheckinStorageError(
                    f"User {user_id} disappeared before quota increase"
                )
            await self.commit()
        except SQLAlchemyError as e:
            await self.rollback()
            raise CheckinStorageError(
                f"Failed to increase quota for user {user_id}: {e}"
            ) from e

    async def _append_sign_record(
        self, user_id: int, username: str, quota: int, now: datetime
    ) -> None:
        """Append the sign audit record; failure is logged, not raised."""
        try:
            await self.log_repo.append(
                user_id=user_id,
                log_type=LogType.SIGN,
                created_at=int(now.timestamp()),
                content=f"Daily check-in reward {format_quota(quota)}",
                quota=quota,
                username=username,
            )
            await self.commit()
        except SQLAlchemyError as e:
            await self.rollback()
            self.logger.error(
                f"Failed to record sign log for user {user_id} "
                f"(quota {quota} already granted): {e}"
            )
