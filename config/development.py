import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timekeeper_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

MONTHLY_LEAVE_QUOTA = int(os.getenv("MONTHLY_LEAVE_QUOTA", "3"))
# Week definition for the monthly breakdown (0=Monday ... 6=Sunday).
WEEK_FIRST_DAY = int(os.getenv("WEEK_FIRST_DAY", "6"))
WEEK_MIN_DAYS = int(os.getenv("WEEK_MIN_DAYS", "1"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
