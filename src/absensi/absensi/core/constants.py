"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time, timedelta

DEFAULT_TZ_OFFSET_HOURS = 7
DEFAULT_LATE_THRESHOLD = time(8, 0, 0)
DEFAULT_MIN_WORK_DURATION = timedelta(hours=8, seconds=30)
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_PERMISSION_HISTORY_LIMIT = 50
RECENT_ACTIVITY_LIMIT = 5
MAX_RECAP_DAYS = 366

HOLIDAY_MAX_YEAR_SPAN = 2
DEFAULT_SESSION_DAYS = 7

DEFAULT_HOLIDAY_API_URL = "https://libur.deno.dev/api"
DEFAULT_HOLIDAY_API_TIMEOUT = 10
DEFAULT_HOLIDAY_CACHE_TTL = 24 * 60 * 60
HOLIDAY_FALLBACK_NAME = "Hari Libur"
