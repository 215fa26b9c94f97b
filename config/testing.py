SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
DB_CONFIG = {}

SCRIPT_URL = ""
AUTO_SYNC = False
SYNC_LOCK_SECONDS = 0
REMOTE_TIMEOUT_SECONDS = 1

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
