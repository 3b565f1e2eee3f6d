"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_CIVIL_TIMEZONE = "Asia/Taipei"
DEFAULT_SESSION_DAYS = 7

# A sign-in/sign-out pair is only credited when 0 < hours <= this bound.
MAX_SESSION_HOURS = 24

RECENT_ACTIVITY_LIMIT = 10
RECENT_RESCUE_LIMIT = 5
# Offset applied to rescue ids in the recent feed so they never collide with activity ids.
RESCUE_FEED_ID_OFFSET = 1000

MIN_PASSWORD_LENGTH = 6
SUPERSEDE_LOCK_TIMEOUT_SECONDS = 10
