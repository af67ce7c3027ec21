import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "workers_management"),
}

# Empty SMTP host: reward e-mails are only logged.
SMTP_CONFIG = {
    "host": os.getenv("SMTP_HOST", ""),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "user": os.getenv("SMTP_USER", ""),
    "password": os.getenv("SMTP_PASSWORD", ""),
    "sender": os.getenv("SMTP_FROM", "no-reply@localhost"),
    "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "1"))),
}

# Team name -> worker number prefix.
TEAM_CODES = {
    "Maturity": "MAR-",
    "Ministry": "MIN-",
    "Membership": "MEM-",
    "Program": "PROG-",
    "Kidzone": "KID-",
    "General Service": "GEN-",
    "Missions": "MISS-",
}

REWARD_WORKER_TIMEOUT_SECONDS = float(os.getenv("REWARD_WORKER_TIMEOUT_SECONDS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, the batch entry point applies schema.sql first (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
