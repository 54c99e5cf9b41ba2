"""Settings shared by every environment. Environment modules star-import this and override."""

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absensi_db"),
}

# Reference timezone for every day boundary (WIB = UTC+7)
TZ_OFFSET_HOURS = float(os.getenv("TZ_OFFSET_HOURS", "7"))

# Check-in strictly after this local time is "late"
LATE_THRESHOLD = os.getenv("LATE_THRESHOLD", "08:00:00")

# Minimum time between check-in and check-out; 0 disables the rule
MIN_WORK_SECONDS = int(os.getenv("MIN_WORK_SECONDS", str(8 * 3600 + 30)))

# New permissions are stored as approved unless disabled
PERMISSION_AUTO_APPROVE = bool(int(os.getenv("PERMISSION_AUTO_APPROVE", "1")))

HOLIDAY_API_URL = os.getenv("HOLIDAY_API_URL", "https://libur.deno.dev/api")
HOLIDAY_API_TIMEOUT = float(os.getenv("HOLIDAY_API_TIMEOUT", "10"))
# Seconds a fetched year stays cached; 0 keeps it for the process lifetime
HOLIDAY_CACHE_TTL = int(os.getenv("HOLIDAY_CACHE_TTL", str(24 * 3600)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
