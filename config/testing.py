import os

from .development import TEAM_CODES  # noqa: F401

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "workers_management_test"),
}

SMTP_CONFIG = {}

REWARD_WORKER_TIMEOUT_SECONDS = 5.0

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
