import os

from .config import (
    ADMIN_NAMES,
    CIVIL_TIMEZONE,
    LOG_LEVEL,
    SESSION_DAYS,
    TEST_ACCOUNTS,
    TRUSTED_PROXY_COUNT,
    VOLUNTEER_NAMES,
    db_config_from_env,
    env_flag,
)

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
