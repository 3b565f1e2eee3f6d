from .config import CIVIL_TIMEZONE, SESSION_DAYS, TRUSTED_PROXY_COUNT, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

VOLUNTEER_NAMES = ["Volunteer One", "Volunteer Two"]
ADMIN_NAMES = ["Chief"]
TEST_ACCOUNTS = [{"username": "test", "password": "test", "name": "Test Account"}]
