import os

from config.config import DB_CONFIG, LOG_LEVEL, SESSION_BACKEND, SESSION_TTL_HOURS, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = env_flag("DEBUG", "1")
SESSION_COOKIE_SECURE = env_flag("SESSION_COOKIE_SECURE", "0")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed the demo company on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

__all__ = [
    "SECRET_KEY",
    "DB_CONFIG",
    "DEBUG",
    "SESSION_TTL_HOURS",
    "SESSION_BACKEND",
    "SESSION_COOKIE_SECURE",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "LOG_LEVEL",
]
