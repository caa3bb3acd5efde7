"""
Group policy.

Decides which user groups may use the daily check-in.
"""

from collections.abc import Iterable
from typing import Protocol

from app.config.settings import Settings


class GroupPolicy(Protocol):
    """Group-level permission lookup."""

    def is_sign_allowed(self, group: str) -> bool:
        """Check if users of ``group`` may check in."""
        ...


class SettingsGroupPolicy:
    """
    Group policy backed by configuration lists.

    A group in the deny list is always rejected. When the allow list is
    non-empty only listed groups pass, otherwise every group passes.
    """

    def __init__(
        self,
        allowed: Iterable[str] = (),
        denied: Iterable[str] = (),
    ) -> None:
        """Initialize policy."""
        self.allowed = frozenset(allowed)
        self.denied = frozenset(denied)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SettingsGroupPolicy":
        """Build policy from application settings."""
        return cls(
            allowed=settings.get_allowed_groups(),
            denied=settings.get_denied_groups(),
        )

    def is_sign_allowed(self, group: str) -> bool:
        """Check if users of ``group`` may check in."""
        if group in self.denied:
            return False
        if self.allowed:
            return group in self.allowed
        return True
