"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

# Weekday numbering used across the domain: 0 = Sunday ... 6 = Saturday.
NON_WORKING_WEEKDAY = 0
DEFAULT_SHORT_DAY_OF_WEEK = 6
DEFAULT_STANDARD_DAILY_MINUTES = 480

SHORT_DAY_MINUTES = 240
# UI treats any positive target up to this value as a short day.
SHORT_DAY_THRESHOLD = 240

DEFAULT_SYNC_INTERVAL_SECONDS = 60
DEFAULT_SYNC_LOCK_SECONDS = 10
DEFAULT_REMOTE_TIMEOUT_SECONDS = 10
