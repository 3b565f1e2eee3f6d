"""Settings shared by every environment module."""

import os


def env_list(name: str, default: str = "") -> list[str]:
    """Comma separated env var as a list of trimmed, non-empty items."""
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "volunteer_duty"),
    }


# Fixed civil timezone for every day/month boundary (UTC+8 in the reference deployment).
CIVIL_TIMEZONE = os.getenv("CIVIL_TIMEZONE", "Asia/Taipei")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

# Registration roster: only these names may sign up; ADMIN_NAMES register as admins.
VOLUNTEER_NAMES = env_list("VOLUNTEER_NAMES")
ADMIN_NAMES = env_list("ADMIN_NAMES")

# Demo/QA logins. They can use the app, but nothing they record is stored.
TEST_ACCOUNTS = [
    {"username": "test", "password": os.getenv("TEST_ACCOUNT_PASSWORD", "test"), "name": "Test Account"},
]

# Number of reverse proxies in front of the app whose X-Forwarded-For is trusted (0: none).
TRUSTED_PROXY_COUNT = int(os.getenv("TRUSTED_PROXY_COUNT", "0"))
