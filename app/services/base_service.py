"""
Base service class.

Provides common functionality for all service classes including session management,
logging, and helper decorators.
"""

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession


# Type variable for generic decorator return types
T = TypeVar("T")


class BaseService:
    """
    Base service class.

    Provides common functionality for all service classes:
    - Session management
    - Logging with bound service context
    - Transaction helpers
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize base service.

        Args:
            session: Async database session
        """
        self.session = session
        self.logger = logger.bind(service=self.__class__.__name__)

    async def commit(self) -> None:
        """
        Commit current transaction.

        Raises:
            Exception: If commit fails
        """
        await self.session.commit()

    async def rollback(self) -> None:
        """
        Rollback current transaction.

        Raises:
            Exception: If rollback fails
        """
        await self.session.rollback()


def log_operation(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator to log method entry/exit with timing.

    Logs:
    - Method entry
    - Method exit with duration
    - Exceptions if any

    Usage:
        @log_operation
        async def my_service_method(self, user_id: int):
            # Your code here
            pass

    Args:
        func: Async method to wrap

    Returns:
        Wrapped async method
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> Any:
        start_time = time.monotonic()

        self.logger.debug(f"Starting {func.__name__}")

        try:
            result = await func(self, *args, **kwargs)
        except Exception as e:
            duration = time.monotonic() - start_time
            self.logger.error(
                f"Failed {func.__name__} after {duration:.3f}s: {e}"
            )
            raise

        duration = time.monotonic() - start_time
        self.logger.debug(f"Completed {func.__name__} in {duration:.3f}s")
        return result

    return wrapper
