"""
Check-in Service - Result Types.

Eligibility reasons, grant results and the read views returned to the
transport layer.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from app.config.checkin import CheckinConfig


class EligibilityReason(str, Enum):
    """Why a user cannot check in. Normal outcomes, not errors."""

    FEATURE_DISABLED = "FeatureDisabled"
    USER_LOOKUP_FAILED = "UserLookupFailed"
    GROUP_NOT_ALLOWED = "GroupNotAllowed"
    NO_REGISTRATION_RECORD = "NoRegistrationRecord"
    WINDOW_EXPIRED = "WindowExpired"
    ALREADY_SIGNED_TODAY = "AlreadySignedToday"
    STATUS_CHECK_FAILED = "StatusCheckFailed"


# Single source of user-facing text for every reason
REASON_MESSAGES: dict[EligibilityReason, str] = {
    EligibilityReason.FEATURE_DISABLED: "feature not enabled",
    EligibilityReason.USER_LOOKUP_FAILED: "failed to load user information",
    EligibilityReason.GROUP_NOT_ALLOWED: (
        "your user group is not allowed to check in"
    ),
    EligibilityReason.NO_REGISTRATION_RECORD: (
        "check-in is only available to newly registered users"
    ),
    EligibilityReason.WINDOW_EXPIRED: (
        "check-in is only available within {window_days} days after registration"
    ),
    EligibilityReason.ALREADY_SIGNED_TODAY: "already checked in today",
    EligibilityReason.STATUS_CHECK_FAILED: "failed to check today's check-in status",
}


def describe_reason(reason: EligibilityReason, config: CheckinConfig) -> str:
    """Render the message for a reason."""
    return REASON_MESSAGES[reason].format(window_days=config.window_days)


@dataclass(frozen=True)
class Eligibility:
    """Outcome of the eligibility policy."""

    eligible: bool
    reason: EligibilityReason | None = None
    message: str = ""

    @classmethod
    def allow(cls) -> "Eligibility":
        return cls(eligible=True)

    @classmethod
    def deny(
        cls, reason: EligibilityReason, config: CheckinConfig
    ) -> "Eligibility":
        return cls(
            eligible=False,
            reason=reason,
            message=describe_reason(reason, config),
        )


@dataclass
class SignResult:
    """Result of a check-in attempt."""

    success: bool
    message: str
    quota: int = 0
    reason: EligibilityReason | None = None

    @classmethod
    def rejected(cls, eligibility: Eligibility) -> "SignResult":
        """Not granted because of a policy outcome."""
        return cls(
            success=False,
            message=eligibility.message,
            quota=0,
            reason=eligibility.reason,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "quota": self.quota,
            "reason": self.reason.value if self.reason else None,
        }


@dataclass(frozen=True)
class DayStatus:
    """Signed flag for one calendar day (YYYY-MM-DD)."""

    date: str
    signed: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SignInfo:
    """Aggregated check-in view for presentation."""

    enabled: bool
    quota_per_sign: int
    sign_in_days: int
    signed_today: bool = False
    can_sign: bool = False
    message: str = ""
    remaining_days: int = 0
    total_sign_days: int = 0
    sign_list: list[DayStatus] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "quota_per_sign": self.quota_per_sign,
            "sign_in_days": self.sign_in_days,
            "signed_today": self.signed_today,
            "can_sign": self.can_sign,
            "message": self.message,
            "remaining_days": self.remaining_days,
            "total_sign_days": self.total_sign_days,
            "sign_list": [day.to_dict() for day in self.sign_list],
        }
