"""
Services.

Business logic layer.
"""

from app.services.base_service import BaseService, log_operation
from app.services.checkin import CheckinService
from app.services.group_policy import GroupPolicy, SettingsGroupPolicy


__all__ = [
    "BaseService",
    "CheckinService",
    "GroupPolicy",
    "SettingsGroupPolicy",
    "log_operation",
]
