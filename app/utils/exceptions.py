"""
Exception handling utilities.

Defines categorized exception types for proper error handling.
Ineligibility is never an exception: it is returned as a reason code.
"""

from aiogram.exceptions import TelegramAPIError
from sqlalchemy.exc import SQLAlchemyError


class CheckinError(Exception):
    """Base class for check-in faults."""
    pass


class CheckinStorageError(CheckinError):
    """Raised when the user or audit store fails (fatal, not retried)."""
    pass


class CheckinLockTimeout(CheckinError):
    """Raised when the per-user grant lock cannot be acquired in time."""
    pass


# Exception categories based on handling strategy

# Safe to ignore - operations that fail gracefully
SAFE_TO_IGNORE = (
    TelegramAPIError,  # Reply delivery, message editing
)

# Storage faults - surfaced to the caller as CheckinStorageError
STORAGE_FAULTS = (
    SQLAlchemyError,
)


def is_safe_to_ignore(exc: Exception) -> bool:
    """
    Check if exception can be safely ignored.

    Args:
        exc: Exception to check

    Returns:
        True if exception is safe to ignore
    """
    return isinstance(exc, SAFE_TO_IGNORE)


def is_storage_fault(exc: Exception) -> bool:
    """
    Check if exception is a storage fault.

    Args:
        exc: Exception to check

    Returns:
        True if raised by the database layer
    """
    return isinstance(exc, STORAGE_FAULTS)
