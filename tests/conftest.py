"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

# Minimal environment for tests (settings are read at import time)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("CHECKIN_QUOTA_PER_SIGN", "0")
os.environ.setdefault("CHECKIN_WINDOW_DAYS", "7")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config.checkin import CheckinConfig  # noqa: E402
from app.config.database import init_models  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.group_policy import SettingsGroupPolicy  # noqa: E402
from app.utils.user_lock import UserLock  # noqa: E402


# 2024-06-15 12:00 UTC, a Saturday
FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Controllable clock for the check-in service."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def fixed_now():
    """Reference instant for time-dependent tests."""
    return FIXED_NOW


@pytest.fixture
def clock():
    """Clock fixed at FIXED_NOW."""
    return FakeClock()


@pytest.fixture
def checkin_config():
    """Enabled check-in: 1000 quota per sign, 7-day window, UTC days."""
    return CheckinConfig(
        reward_per_sign=1000,
        window_days=7,
        min_quota=1000,
        max_quota=10000,
        timezone="UTC",
        lock_timeout_seconds=2.0,
    )


@pytest.fixture
def group_policy():
    """Policy allowing every group except 'banned'."""
    return SettingsGroupPolicy(denied=["banned"])


@pytest.fixture
def user_lock():
    """Process-local lock shared by all sessions of one test."""
    return UserLock()


@pytest.fixture
def mock_session():
    """Mock AsyncSession for tests without a database."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    return session


@pytest.fixture
def mock_redis_client():
    """Mock Redis client for lock tests."""
    client = AsyncMock()
    client.set = AsyncMock(return_value=True)
    client.eval = AsyncMock(return_value=1)
    return client


@pytest.fixture
async def db_engine(tmp_path):
    """File-backed SQLite engine (shared by concurrent sessions)."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'checkin.db'}")
    await init_models(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    """Single session for a test."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def make_user(session_maker):
    """Factory inserting a user row and returning its ID."""

    async def _make_user(
        created_time: int | None = None,
        group: str = "default",
        username: str | None = "alice",
        quota: int = 0,
        telegram_id: int | None = None,
    ) -> int:
        if created_time is None:
            created_time = int(FIXED_NOW.timestamp())
        async with session_maker() as session:
            user = User(
                telegram_id=telegram_id,
                username=username,
                group=group,
                quota=quota,
                created_time=created_time,
            )
            session.add(user)
            await session.commit()
            return user.id

    return _make_user
