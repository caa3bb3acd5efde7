"""
Per-user lock.

Serializes check-in grants for the same user so the
"already signed today" check and the grant act as one step.

With a Redis client the lock is shared across processes
(``SET NX PX`` + compare-and-delete release). Without Redis it falls
back to a process-local ``asyncio.Lock`` per key, which is enough for a
single bot process.
"""

import asyncio
import secrets
import time
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.config.constants import (
    CHECKIN_LOCK_KEY_PREFIX,
    CHECKIN_LOCK_RETRY_DELAY,
    CHECKIN_LOCK_TTL_SECONDS,
)
from app.utils.exceptions import CheckinLockTimeout


# Delete the key only if we still own it
_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class UserLock:
    """
    Lock keyed by user ID.

    Usage:
        lock = UserLock(redis_client=redis_client)
        async with lock.lock(user_id, timeout=5.0):
            ...
    """

    def __init__(
        self,
        redis_client: Redis | None = None,
        ttl_seconds: int = CHECKIN_LOCK_TTL_SECONDS,
    ) -> None:
        """
        Initialize lock.

        Args:
            redis_client: Redis client for cross-process locking (optional)
            ttl_seconds: Redis key expiry guarding crashed holders
        """
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds
        self._local_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @staticmethod
    def key_for(user_id: int) -> str:
        """Build lock key for a user."""
        return f"{CHECKIN_LOCK_KEY_PREFIX}{user_id}"

    @asynccontextmanager
    async def lock(self, user_id: int, timeout: float) -> AsyncIterator[None]:
        """
        Hold the lock for a user.

        Args:
            user_id: User ID
            timeout: Max seconds to wait for acquisition

        Raises:
            CheckinLockTimeout: If not acquired within timeout
        """
        key = self.key_for(user_id)
        if self.redis is not None:
            async with self._redis_lock(key, timeout):
                yield
        else:
            async with self._local_lock(key, timeout):
                yield

    @asynccontextmanager
    async def _local_lock(self, key: str, timeout: float) -> AsyncIterator[None]:
        local = self._local_locks.get(key)
        if local is None:
            local = asyncio.Lock()
            self._local_locks[key] = local

        try:
            await asyncio.wait_for(local.acquire(), timeout=timeout)
        except TimeoutError as e:
            raise CheckinLockTimeout(f"Lock {key} not acquired in {timeout}s") from e

        try:
            yield
        finally:
            local.release()

    @asynccontextmanager
    async def _redis_lock(self, key: str, timeout: float) -> AsyncIterator[None]:
        token = secrets.token_hex(16)
        deadline = time.monotonic() + timeout

        while True:
            acquired = await self.redis.set(
                key, token, nx=True, px=self.ttl_seconds * 1000
            )
            if acquired:
                break
            if time.monotonic() >= deadline:
                raise CheckinLockTimeout(f"Lock {key} not acquired in {timeout}s")
            await asyncio.sleep(CHECKIN_LOCK_RETRY_DELAY)

        try:
            yield
        finally:
            try:
                await self.redis.eval(_RELEASE_SCRIPT, 1, key, token)
            except RedisError as e:
                # Key expires by TTL
                logger.warning(f"Failed to release lock {key}: {e}")


# Process-wide default (local locks must be shared between sessions)
_default_lock: UserLock | None = None


def configure_user_lock(redis_client: Redis | None) -> UserLock:
    """Replace the process-wide lock, using Redis when a client is given."""
    global _default_lock
    _default_lock = UserLock(redis_client=redis_client)
    return _default_lock


def get_user_lock() -> UserLock:
    """Get the process-wide lock (process-local unless configured)."""
    global _default_lock
    if _default_lock is None:
        _default_lock = UserLock()
    return _default_lock
