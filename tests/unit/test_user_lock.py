"""Unit tests for the per-user lock."""

import asyncio

import pytest

from app.utils.exceptions import CheckinLockTimeout
from app.utils.user_lock import UserLock


class TestLocalLock:
    """Tests for the process-local fallback."""

    @pytest.mark.asyncio
    async def test_serializes_same_user(self):
        lock = UserLock()
        order = []

        async def worker(name):
            async with lock.lock(1, timeout=1.0):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert order in (
            ["a-in", "a-out", "b-in", "b-out"],
            ["b-in", "b-out", "a-in", "a-out"],
        )

    @pytest.mark.asyncio
    async def test_different_users_do_not_block(self):
        lock = UserLock()

        async with lock.lock(1, timeout=0.1):
            async with lock.lock(2, timeout=0.1):
                pass

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        lock = UserLock()

        async with lock.lock(1, timeout=1.0):
            with pytest.raises(CheckinLockTimeout):
                async with lock.lock(1, timeout=0.05):
                    pass

    @pytest.mark.asyncio
    async def test_released_after_error(self):
        lock = UserLock()

        with pytest.raises(ValueError):
            async with lock.lock(1, timeout=0.1):
                raise ValueError("boom")

        async with lock.lock(1, timeout=0.1):
            pass


class TestRedisLock:
    """Tests for the Redis-backed lock."""

    @pytest.mark.asyncio
    async def test_acquire_and_release(self, mock_redis_client):
        lock = UserLock(redis_client=mock_redis_client, ttl_seconds=30)

        async with lock.lock(7, timeout=1.0):
            pass

        args, kwargs = mock_redis_client.set.call_args
        assert args[0] == "checkin_lock:7"
        assert kwargs == {"nx": True, "px": 30000}
        token = args[1]
        mock_redis_client.eval.assert_awaited_once()
        assert mock_redis_client.eval.call_args.args[1:] == (1, "checkin_lock:7", token)

    @pytest.mark.asyncio
    async def test_busy_key_times_out(self, mock_redis_client):
        mock_redis_client.set.return_value = None
        lock = UserLock(redis_client=mock_redis_client)

        with pytest.raises(CheckinLockTimeout):
            async with lock.lock(7, timeout=0.1):
                pass

        mock_redis_client.eval.assert_not_called()
