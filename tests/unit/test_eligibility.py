"""Unit tests for the check-in eligibility policy."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.config.checkin import CheckinConfig
from app.services.checkin import CheckinService, EligibilityReason


# 2024-06-15 12:00 UTC, same as the clock fixture
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


def make_user(created_time=None, group="default"):
    user = MagicMock()
    user.id = 1
    user.group = group
    user.created_time = int(NOW.timestamp()) if created_time is None else created_time
    return user


@pytest.fixture
def service(mock_session, checkin_config, group_policy, user_lock, clock):
    """Service with mocked repositories."""
    svc = CheckinService(
        mock_session,
        config=checkin_config,
        group_policy=group_policy,
        user_lock=user_lock,
        clock=clock,
    )
    svc.user_repo = AsyncMock()
    svc.log_repo = AsyncMock()
    svc.user_repo.get_by_id = AsyncMock(return_value=make_user())
    svc.log_repo.count_by_user_and_type = AsyncMock(return_value=0)
    return svc


class TestEligibilityOrder:
    """Checks run in order and stop at the first failure."""

    @pytest.mark.asyncio
    async def test_eligible_user(self, service):
        result = await service.check_eligibility(1)

        assert result.eligible is True
        assert result.reason is None

    @pytest.mark.asyncio
    async def test_feature_disabled_skips_lookups(self, service):
        service.config = CheckinConfig(reward_per_sign=0, window_days=7)

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.FEATURE_DISABLED
        assert result.message == "feature not enabled"
        service.user_repo.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_user(self, service):
        service.user_repo.get_by_id.return_value = None

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.USER_LOOKUP_FAILED

    @pytest.mark.asyncio
    async def test_user_lookup_error(self, service, mock_session):
        service.user_repo.get_by_id.side_effect = OperationalError(
            "SELECT", {}, Exception("db down")
        )

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.USER_LOOKUP_FAILED
        mock_session.rollback.assert_awaited()

    @pytest.mark.asyncio
    async def test_group_denied_regardless_of_registration(self, service):
        # Even a user without registration record gets the group reason
        service.user_repo.get_by_id.return_value = make_user(
            created_time=0, group="banned"
        )

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.GROUP_NOT_ALLOWED
        service.log_repo.count_by_user_and_type.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("created_time", [0, -1])
    async def test_no_registration_record(self, service, created_time):
        service.user_repo.get_by_id.return_value = make_user(created_time=created_time)

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.NO_REGISTRATION_RECORD

    @pytest.mark.asyncio
    async def test_no_registration_record_at_any_time(self, service, clock):
        service.user_repo.get_by_id.return_value = make_user(created_time=0)

        for _ in range(3):
            result = await service.check_eligibility(1)
            assert result.reason == EligibilityReason.NO_REGISTRATION_RECORD
            clock.advance(days=30)

    @pytest.mark.asyncio
    async def test_window_expired(self, service):
        created = NOW - timedelta(days=7)
        service.user_repo.get_by_id.return_value = make_user(
            created_time=int(created.timestamp())
        )

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.WINDOW_EXPIRED
        assert result.message == (
            "check-in is only available within 7 days after registration"
        )

    @pytest.mark.asyncio
    async def test_last_day_of_window_is_eligible(self, service):
        created = NOW - timedelta(days=6, hours=23, minutes=59)
        service.user_repo.get_by_id.return_value = make_user(
            created_time=int(created.timestamp())
        )

        result = await service.check_eligibility(1)

        assert result.eligible is True

    @pytest.mark.asyncio
    async def test_zero_window_always_expired(self, service):
        service.config = CheckinConfig(reward_per_sign=1000, window_days=0)

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.WINDOW_EXPIRED

    @pytest.mark.asyncio
    async def test_already_signed_today(self, service):
        service.log_repo.count_by_user_and_type.return_value = 1

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.ALREADY_SIGNED_TODAY
        assert result.message == "already checked in today"

    @pytest.mark.asyncio
    async def test_status_check_failure(self, service):
        service.log_repo.count_by_user_and_type.side_effect = OperationalError(
            "SELECT", {}, Exception("db down")
        )

        result = await service.check_eligibility(1)

        assert result.reason == EligibilityReason.STATUS_CHECK_FAILED

    @pytest.mark.asyncio
    async def test_today_query_uses_local_day_bounds(self, service):
        await service.check_eligibility(1)

        kwargs = service.log_repo.count_by_user_and_type.call_args.kwargs
        midnight = int(NOW.replace(hour=0, minute=0).timestamp())
        assert kwargs["start"] == midnight
        assert kwargs["end"] == midnight + 86399
