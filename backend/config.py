"""Application configuration."""

import os
from pathlib import Path

DATA_DIR = Path(os.environ.get("DATA_DIR", str(Path(__file__).parent.parent / "data")))

FILES_DIR = Path(os.environ.get("DROP_FILES_DIR", str(DATA_DIR / "uploads")))

DATABASE_URL = os.environ.get("DROP_DATABASE_URL", f"sqlite:///{DATA_DIR}/dropshare.db")
DB_ECHO = os.environ.get("DROP_DB_ECHO", "false").lower() in ("1", "true", "yes")

# Sessions slide forward by this window on every authenticated request
SESSION_DURATION_MINUTES = int(os.environ.get("DROP_SESSION_MINUTES", "15"))
COOKIE_NAME = "session"
SECURE_COOKIES = os.environ.get("DROP_SECURE_COOKIES", "false").lower() in ("1", "true", "yes")

# Uploads
MAX_FILE_SIZE = int(os.environ.get("DROP_MAX_FILE_SIZE", str(15 * 1024**3)))  # 15 GB
CHUNK_SIZE = 1024 * 1024  # 1MB
FILE_ID_LENGTH = 10

# Instance defaults until first-run setup writes the config table
DEFAULT_APP_NAME = "Dropshare"
DEFAULT_MAX_STORAGE = 15 * 1024**3

PURGE_CONFIRMATION = os.environ.get("DROP_PURGE_CONFIRMATION", "SUPPRIMER-TOUT")

PASSWORD_HASH_ITERATIONS = int(os.environ.get("DROP_PASSWORD_ITERATIONS", "210000"))

LOG_LEVEL = os.environ.get("DROP_LOG_LEVEL", "INFO").upper()
