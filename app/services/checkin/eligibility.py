"""
Check-in Service - Eligibility Module.

Sequential policy checks shared by the grant path and the info view.
"""

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from app.models.user import User
from app.services.checkin.types import Eligibility, EligibilityReason
from app.utils.datetime_utils import elapsed_days
from app.utils.exceptions import CheckinStorageError


class CheckinEligibilityMixin:
    """Mixin with the eligibility policy."""

    async def check_eligibility(
        self, user_id: int, now: datetime | None = None
    ) -> Eligibility:
        """
        Decide whether a user may check in right now.

        Checks run in a fixed order and stop at the first failure:
        feature enabled, user lookup, group policy, registration record,
        eligibility window, already signed today.

        Args:
            user_id: User ID
            now: Evaluation instant (default: service clock)

        Returns:
            Eligibility with the first failing reason, if any
        """
        now = now or self.now()

        if not self.config.enabled:
            return Eligibility.deny(EligibilityReason.FEATURE_DISABLED, self.config)

        try:
            user = await self.user_repo.get_by_id(user_id)
        except SQLAlchemyError as e:
            await self.rollback()
            self.logger.warning(f"User lookup failed for check-in {user_id}: {e}")
            user = None

        if user is None:
            return Eligibility.deny(EligibilityReason.USER_LOOKUP_FAILED, self.config)

        denial = self.evaluate_user_policy(user, now)
        if denial is not None:
            return denial

        try:
            signed_today = await self.has_signed_today(user_id, now=now)
        except CheckinStorageError as e:
            self.logger.warning(f"Sign status check failed for user {user_id}: {e}")
            return Eligibility.deny(EligibilityReason.STATUS_CHECK_FAILED, self.config)

        if signed_today:
            return Eligibility.deny(EligibilityReason.ALREADY_SIGNED_TODAY, self.config)

        return Eligibility.allow()

    def evaluate_user_policy(
        self, user: User, now: datetime
    ) -> Eligibility | None:
        """
        Pure checks on the user snapshot (group, registration, window).

        Returns:
            Denial, or None when all three pass
        """
        if not self.group_policy.is_sign_allowed(user.group):
            return Eligibility.deny(EligibilityReason.GROUP_NOT_ALLOWED, self.config)

        # No registration timestamp: permanently ineligible
        if user.created_time <= 0:
            return Eligibility.deny(
                EligibilityReason.NO_REGISTRATION_RECORD, self.config
            )

        if elapsed_days(user.created_time, now) >= self.config.window_days:
            return Eligibility.deny(EligibilityReason.WINDOW_EXPIRED, self.config)

        return None
