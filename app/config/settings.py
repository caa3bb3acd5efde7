"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.config.checkin import CheckinConfig
from app.config.constants import (
    DEFAULT_CHECKIN_LOCK_TIMEOUT_SECONDS,
    DEFAULT_CHECKIN_MAX_QUOTA,
    DEFAULT_CHECKIN_MIN_QUOTA,
    DEFAULT_CHECKIN_QUOTA_PER_SIGN,
    DEFAULT_CHECKIN_WINDOW_DAYS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot (transport only, the check-in core does not need it)
    telegram_bot_token: str | None = None

    # Database
    database_url: str = "sqlite+aiosqlite:///./checkin.db"
    database_echo: bool = False

    # Redis (per-user grant lock across processes)
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str | None = None
    redis_db: int = 0

    # Application
    environment: str = "production"
    log_level: str = "INFO"

    # Check-in
    checkin_quota_per_sign: int = Field(
        default=DEFAULT_CHECKIN_QUOTA_PER_SIGN,
        description="Quota granted per check-in (<= 0 disables the feature)",
    )
    checkin_window_days: int = Field(
        default=DEFAULT_CHECKIN_WINDOW_DAYS,
        ge=0,
        description="Days after registration during which check-in is allowed",
    )
    checkin_min_quota: int = Field(
        default=DEFAULT_CHECKIN_MIN_QUOTA,
        ge=0,
        description="Configured minimum reward (not used by the grant path)",
    )
    checkin_max_quota: int = Field(
        default=DEFAULT_CHECKIN_MAX_QUOTA,
        ge=0,
        description="Configured maximum reward (not used by the grant path)",
    )
    checkin_timezone: str | None = Field(
        default=None,
        description="IANA timezone for day boundaries, empty = server local time",
    )
    checkin_allowed_groups: str = ""  # Comma-separated list, empty = all groups
    checkin_denied_groups: str = ""  # Comma-separated list
    checkin_lock_timeout_seconds: float = Field(
        default=DEFAULT_CHECKIN_LOCK_TIMEOUT_SECONDS,
        gt=0,
        description="Max seconds to wait for the per-user grant lock",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("checkin_timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Validate IANA timezone name."""
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @model_validator(mode="after")
    def validate_quota_range(self) -> "Settings":
        """Reward range must be ordered."""
        if self.checkin_min_quota > self.checkin_max_quota:
            raise ValueError(
                "CHECKIN_MIN_QUOTA must not exceed CHECKIN_MAX_QUOTA"
            )
        return self

    def get_allowed_groups(self) -> list[str]:
        """Get list of groups allowed to check in (empty = all)."""
        return _split_csv(self.checkin_allowed_groups)

    def get_denied_groups(self) -> list[str]:
        """Get list of groups denied check-in."""
        return _split_csv(self.checkin_denied_groups)

    def checkin_config(self) -> CheckinConfig:
        """Build the immutable check-in configuration value."""
        return CheckinConfig(
            reward_per_sign=self.checkin_quota_per_sign,
            window_days=self.checkin_window_days,
            min_quota=self.checkin_min_quota,
            max_quota=self.checkin_max_quota,
            timezone=self.checkin_timezone,
            lock_timeout_seconds=self.checkin_lock_timeout_seconds,
        )


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# Global settings instance
settings = Settings()
