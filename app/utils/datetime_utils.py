"""
Datetime utilities.

Provides timezone-aware datetime functions and local day boundaries.
All day boundaries are computed in the configured timezone; ``tz=None``
means the server's system local time.
"""

from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from app.config.constants import DATE_FORMAT, SECONDS_PER_DAY


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """
    Resolve a timezone name.

    Args:
        name: IANA timezone name or None

    Returns:
        ZoneInfo, or None for server local time
    """
    return ZoneInfo(name) if name else None


def to_local(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert an aware datetime to the given (or system local) timezone."""
    return moment.astimezone(tz)


def local_today(tz: tzinfo | None = None, now: datetime | None = None) -> date:
    """Get today's calendar date in local time."""
    return to_local(now or utc_now(), tz).date()


def _local_datetime(day: date, at: time, tz: tzinfo | None) -> datetime:
    if tz is None:
        # Naive -> system local time
        return datetime.combine(day, at).astimezone()
    return datetime.combine(day, at, tzinfo=tz)


def day_start(day: date, tz: tzinfo | None = None) -> int:
    """Epoch seconds at local midnight of ``day``."""
    return int(_local_datetime(day, time.min, tz).timestamp())


def day_end(day: date, tz: tzinfo | None = None) -> int:
    """Epoch seconds at 23:59:59 local of ``day`` (sub-second part truncated)."""
    return int(_local_datetime(day, time.max, tz).timestamp())


def today_start(tz: tzinfo | None = None, now: datetime | None = None) -> int:
    """
    Get epoch seconds at local midnight of the current day.

    Args:
        tz: Timezone (None = server local)
        now: Current instant (default: utc_now())

    Returns:
        Epoch seconds
    """
    return day_start(local_today(tz, now), tz)


def today_end(tz: tzinfo | None = None, now: datetime | None = None) -> int:
    """
    Get epoch seconds at 23:59:59 local time of the current day.

    Args:
        tz: Timezone (None = server local)
        now: Current instant (default: utc_now())

    Returns:
        Epoch seconds
    """
    return day_end(local_today(tz, now), tz)


def timestamp_to_local_date(ts: int, tz: tzinfo | None = None) -> date:
    """Get local calendar date of an epoch timestamp."""
    return datetime.fromtimestamp(ts, UTC).astimezone(tz).date()


def day_key(day: date) -> str:
    """Format date as YYYY-MM-DD."""
    return day.strftime(DATE_FORMAT)


def elapsed_days(since_ts: int, now: datetime | None = None) -> int:
    """
    Whole days elapsed since an epoch timestamp.

    Integer division, so 23h59m counts as 0 days.

    Args:
        since_ts: Start timestamp, epoch seconds
        now: Current instant (default: utc_now())

    Returns:
        Number of full days
    """
    now_ts = int((now or utc_now()).timestamp())
    diff = now_ts - since_ts
    # Truncate toward zero (future timestamps give 0, not -1)
    if diff < 0:
        return -(-diff // SECONDS_PER_DAY)
    return diff // SECONDS_PER_DAY


def date_range(start: date, end: date) -> list[date]:
    """
    All calendar days from start to end, inclusive.

    Returns an empty list when start > end.
    """
    if start > end:
        return []
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]
