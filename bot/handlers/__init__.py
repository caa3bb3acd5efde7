"""
Handlers.

Bot message handlers.
"""

from bot.handlers import checkin


__all__ = ["checkin"]
