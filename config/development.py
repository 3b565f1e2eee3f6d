import os

from .config import (
    ADMIN_NAMES,
    CIVIL_TIMEZONE,
    SESSION_DAYS,
    TEST_ACCOUNTS,
    TRUSTED_PROXY_COUNT,
    VOLUNTEER_NAMES,
    db_config_from_env,
    env_flag,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_password="volunteer")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")

VOLUNTEER_NAMES = VOLUNTEER_NAMES or ["Demo Volunteer"]
ADMIN_NAMES = ADMIN_NAMES or ["Demo Admin"]
