"""
Bot Initialization Module.

This module contains all initialization logic split into focused modules:
- logging: Logger configuration
- storage: Redis client for the check-in lock
- middlewares: Middleware registration
- handlers: Handler registration
- shutdown: Graceful shutdown handler
"""

__all__ = []
