"""Settings shared by every environment, read from the process environment (.env included)."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_db"),
}

# Absolute lifetime of a login session; it is not extended by activity.
SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", "24"))

# "mysql" keeps sessions in the sessions table, "memory" in the worker process.
SESSION_BACKEND = os.getenv("SESSION_BACKEND", "mysql")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
