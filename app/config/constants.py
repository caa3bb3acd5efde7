"""
Application constants.

Centralized constants for the application.
"""

# ========================================================================
# CHECK-IN DEFAULTS
# ========================================================================

# Reward granted per check-in (quota units). 0 disables the feature.
DEFAULT_CHECKIN_QUOTA_PER_SIGN = 0

# Days after registration during which check-in is allowed
DEFAULT_CHECKIN_WINDOW_DAYS = 7

# Configured reward range (kept for configuration parity, grant uses the fixed value)
DEFAULT_CHECKIN_MIN_QUOTA = 1000
DEFAULT_CHECKIN_MAX_QUOTA = 10000

# Days shown in the calendar when the user has no registration timestamp
CALENDAR_FALLBACK_DAYS = 30

# ========================================================================
# TIME CONSTANTS
# ========================================================================

SECONDS_PER_DAY = 24 * 60 * 60

# Calendar date format (YYYY-MM-DD)
DATE_FORMAT = "%Y-%m-%d"

# ========================================================================
# LOCK SETTINGS
# ========================================================================

# Max time to wait for the per-user grant lock
DEFAULT_CHECKIN_LOCK_TIMEOUT_SECONDS = 5.0

# Redis lock key TTL in seconds (released explicitly, TTL guards crashed holders)
CHECKIN_LOCK_TTL_SECONDS = 30

# Delay between Redis lock acquisition attempts
CHECKIN_LOCK_RETRY_DELAY = 0.05

CHECKIN_LOCK_KEY_PREFIX = "checkin_lock:"
