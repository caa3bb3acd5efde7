"""
Check-in configuration value.

Immutable configuration passed into the check-in service instead of being
read from process-wide state.
"""

from dataclasses import dataclass

from app.config.constants import DEFAULT_CHECKIN_LOCK_TIMEOUT_SECONDS


@dataclass(frozen=True)
class CheckinConfig:
    """
    Check-in feature configuration.

    Attributes:
        reward_per_sign: Quota granted per check-in (<= 0 disables the feature)
        window_days: Days after registration during which check-in is allowed
        min_quota: Configured minimum reward (unused, grant is fixed)
        max_quota: Configured maximum reward (unused, grant is fixed)
        timezone: IANA timezone name for day boundaries, None = server local
        lock_timeout_seconds: Max wait for the per-user grant lock
    """

    reward_per_sign: int
    window_days: int
    min_quota: int = 0
    max_quota: int = 0
    timezone: str | None = None
    lock_timeout_seconds: float = DEFAULT_CHECKIN_LOCK_TIMEOUT_SECONDS

    @property
    def enabled(self) -> bool:
        """Feature is enabled only with a positive reward."""
        return self.reward_per_sign > 0
