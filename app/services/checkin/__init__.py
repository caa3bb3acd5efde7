"""
Check-in Service.

Daily check-in reward: eligibility policy, reward ledger on top of the
audit log, calendar reconstruction and the aggregated info view.
"""

from app.services.checkin.calendar import CheckinCalendarMixin
from app.services.checkin.core import CheckinServiceCore
from app.services.checkin.eligibility import CheckinEligibilityMixin
from app.services.checkin.info import CheckinInfoMixin
from app.services.checkin.ledger import CheckinLedgerMixin
from app.services.checkin.types import (
    DayStatus,
    Eligibility,
    EligibilityReason,
    SignInfo,
    SignResult,
)


class CheckinService(
    CheckinServiceCore,
    CheckinEligibilityMixin,
    CheckinLedgerMixin,
    CheckinCalendarMixin,
    CheckinInfoMixin,
):
    """
    Complete daily check-in service.

    Combines functionality from:
    - Core: Configuration, collaborators and user lookup
    - Eligibility: Ordered policy checks
    - Ledger: Grant and audit log queries
    - Calendar: Day-by-day signed status
    - Info: Aggregated read view
    """


__all__ = [
    "CheckinService",
    "DayStatus",
    "Eligibility",
    "EligibilityReason",
    "SignInfo",
    "SignResult",
]
