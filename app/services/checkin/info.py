"""
Check-in Service - Info Module.

Read view combining configuration, eligibility, counters and calendar.
"""

from app.services.base_service import log_operation
from app.services.checkin.types import (
    EligibilityReason,
    SignInfo,
    describe_reason,
)
from app.utils.datetime_utils import elapsed_days
from app.utils.exceptions import CheckinStorageError


# Reasons that end the view early, without counters or calendar
_SHORT_CIRCUIT_REASONS = frozenset({
    EligibilityReason.GROUP_NOT_ALLOWED,
    EligibilityReason.NO_REGISTRATION_RECORD,
})

# Reasons that mean a storage fault on the read path
_FAULT_REASONS = frozenset({
    EligibilityReason.USER_LOOKUP_FAILED,
    EligibilityReason.STATUS_CHECK_FAILED,
})


class CheckinInfoMixin:
    """Mixin with the aggregated info view."""

    async def build_info_view(self, user_id: int) -> SignInfo:
        """
        Build the check-in info view for a user.

        Args:
            user_id: User ID

        Returns:
            SignInfo (wire shape via ``to_dict()``)

        Raises:
            CheckinStorageError: If any user or audit lookup fails
        """
        info = SignInfo(
            enabled=self.config.enabled,
            quota_per_sign=self.config.reward_per_sign,
            sign_in_days=self.config.window_days,
        )

        # Cheap negative path: no user lookups at all
        if not info.enabled:
            info.message = describe_reason(
                EligibilityReason.FEATURE_DISABLED, self.config
            )
            return info

        now = self.now()
        eligibility = await self.check_eligibility(user_id, now=now)

        if eligibility.reason in _FAULT_REASONS:
            raise CheckinStorageError(
                f"Check-in info unavailable for user {user_id}: {eligibility.message}"
            )

        if eligibility.reason in _SHORT_CIRCUIT_REASONS:
            info.message = eligibility.message
            return info

        user = await self._get_user_or_raise(user_id)
        registered_days = elapsed_days(user.created_time, now)

        info.total_sign_days = await self.count_sign_days(user_id)
        info.signed_today = await self.has_signed_today(user_id, now=now)
        info.sign_list = await self.build_sign_calendar(user_id, now=now)

        # Today's slot is used up once signed
        remaining = max(self.config.window_days - registered_days, 0)
        if info.signed_today and remaining > 0:
            remaining -= 1
        info.remaining_days = remaining

        info.can_sign = eligibility.eligible
        info.message = eligibility.message
        return info

    @log_operation
    async def get_info_view(self, user_id: int) -> SignInfo:
        """Info view for the transport layer."""
        return await self.build_info_view(user_id)
