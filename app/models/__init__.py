"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from app.models.base import Base

# Audit log
from app.models.log import Log, LogType

# Core Models
from app.models.user import User

__all__ = [
    # Base
    "Base",
    # Core Models
    "User",
    # Audit log
    "Log",
    "LogType",
]
