"""
Check-in handler.

Thin transport over CheckinService:
/checkin - claim today's reward
/checkin_info - summary of the check-in status
/checkin_calendar - day-by-day signed status
"""

from typing import Any

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.checkin import CheckinService, DayStatus, SignInfo
from app.utils.exceptions import CheckinError, is_safe_to_ignore
from app.utils.formatters import format_quota, format_user_identifier


router = Router(name="checkin")

NOT_LOGGED_IN_MESSAGE = "user not logged in"
GENERIC_FAILURE_MESSAGE = "check-in is temporarily unavailable, please try again later"


def build_envelope(
    success: bool, message: str = "", data: Any = None
) -> dict[str, Any]:
    """
    Build the response envelope used by API clients.

    Args:
        success: Whether the operation succeeded
        message: User-facing message
        data: Payload

    Returns:
        Dict like {"success": ..., "message": ..., "data": ...}
    """
    return {"success": success, "message": message, "data": data}


def render_info(info: SignInfo) -> str:
    """Render the info view as plain text."""
    if not info.enabled:
        return info.message

    lines = [
        f"Reward per check-in: {format_quota(info.quota_per_sign)}",
        f"Check-in window: {info.sign_in_days} days after registration",
        f"Checked in today: {'yes' if info.signed_today else 'no'}",
        f"Days checked in: {info.total_sign_days}",
        f"Days remaining: {info.remaining_days}",
    ]
    if info.can_sign:
        lines.append("You can check in now: /checkin")
    elif info.message:
        lines.append(info.message)
    return "\n".join(lines)


def render_calendar(days: list[DayStatus]) -> str:
    """Render the calendar, one line per day."""
    if not days:
        return "No check-in days in your window."
    return "\n".join(
        f"{day.date} {'✅' if day.signed else '▫️'}" for day in days
    )


async def _reply(message: Message, text: str) -> None:
    try:
        await message.answer(text)
    except Exception as e:
        if not is_safe_to_ignore(e):
            raise
        logger.warning(f"Failed to deliver check-in reply: {e}")


@router.message(Command("checkin"))
async def cmd_checkin(
    message: Message,
    session: AsyncSession,
    **data: Any,
) -> dict[str, Any]:
    """Handle /checkin: grant today's reward."""
    user: User | None = data.get("user")
    if user is None:
        await _reply(message, NOT_LOGGED_IN_MESSAGE)
        return build_envelope(False, NOT_LOGGED_IN_MESSAGE)

    try:
        result = await CheckinService(session).grant(user.id)
    except CheckinError as e:
        logger.error(f"Check-in failed for {format_user_identifier(user)}: {e}")
        await _reply(message, GENERIC_FAILURE_MESSAGE)
        return build_envelope(False, GENERIC_FAILURE_MESSAGE)

    await _reply(message, result.message)
    return build_envelope(result.success, result.message, {"quota": result.quota})


@router.message(Command("checkin_info"))
async def cmd_checkin_info(
    message: Message,
    session: AsyncSession,
    **data: Any,
) -> dict[str, Any]:
    """Handle /checkin_info: show the check-in summary."""
    user: User | None = data.get("user")
    if user is None:
        await _reply(message, NOT_LOGGED_IN_MESSAGE)
        return build_envelope(False, NOT_LOGGED_IN_MESSAGE)

    try:
        info = await CheckinService(session).get_info_view(user.id)
    except CheckinError as e:
        logger.error(f"Check-in info failed for {format_user_identifier(user)}: {e}")
        await _reply(message, GENERIC_FAILURE_MESSAGE)
        return build_envelope(False, GENERIC_FAILURE_MESSAGE)

    await _reply(message, render_info(info))
    return build_envelope(True, "", info.to_dict())


@router.message(Command("checkin_calendar"))
async def cmd_checkin_calendar(
    message: Message,
    session: AsyncSession,
    **data: Any,
) -> dict[str, Any]:
    """Handle /checkin_calendar: show signed days."""
    user: User | None = data.get("user")
    if user is None:
        await _reply(message, NOT_LOGGED_IN_MESSAGE)
        return build_envelope(False, NOT_LOGGED_IN_MESSAGE)

    try:
        days = await CheckinService(session).list_calendar(user.id)
    except CheckinError as e:
        logger.error(f"Check-in calendar failed for {format_user_identifier(user)}: {e}")
        await _reply(message, GENERIC_FAILURE_MESSAGE)
        return build_envelope(False, GENERIC_FAILURE_MESSAGE)

    await _reply(message, render_calendar(days))
    return build_envelope(True, "", [day.to_dict() for day in days])
