import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "memory" keeps everything in process; "mysql" persists the collections.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hour_bank"),
}

# Spreadsheet script endpoint used when no URL was saved in the settings yet
SCRIPT_URL = os.getenv("SCRIPT_URL", os.getenv("GOOGLE_SCRIPT_URL", ""))

AUTO_SYNC = bool(int(os.getenv("AUTO_SYNC", "1")))
SYNC_INTERVAL_SECONDS = int(os.getenv("SYNC_INTERVAL_SECONDS", "60"))
SYNC_LOCK_SECONDS = int(os.getenv("SYNC_LOCK_SECONDS", "10"))
REMOTE_TIMEOUT_SECONDS = int(os.getenv("REMOTE_TIMEOUT_SECONDS", "10"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will create the database and collections table on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
