"""
Formatters utility.

Utility functions for formatting data in the app layer.
"""


def format_user_identifier(user) -> str:
    """
    Format user as @username or ID:user_id.

    Args:
        user: Object with username and id attributes

    Returns:
        Formatted string like "@username" or "ID:123"
    """
    if getattr(user, "username", None):
        return f"@{user.username}"
    if getattr(user, "id", None) is not None:
        return f"ID:{user.id}"
    return "Unknown"


def format_quota(quota: int) -> str:
    """
    Format quota amount for messages and audit content.

    Args:
        quota: Quota units

    Returns:
        String like "1,000 quota"
    """
    return f"{quota:,} quota"
