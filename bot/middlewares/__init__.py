"""
Middlewares.

Bot middlewares for request processing.
"""

from bot.middlewares.database import DatabaseMiddleware


__all__ = [
    "DatabaseMiddleware",
]
