from config.config import DB_CONFIG, SESSION_TTL_HOURS

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
SESSION_COOKIE_SECURE = False

SESSION_BACKEND = "memory"
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

__all__ = [
    "SECRET_KEY",
    "DB_CONFIG",
    "DEBUG",
    "TESTING",
    "SESSION_TTL_HOURS",
    "SESSION_BACKEND",
    "SESSION_COOKIE_SECURE",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "LOG_LEVEL",
]
