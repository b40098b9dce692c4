"""
Basic settings used across the API.
The values are loaded from environment variables so they can be changed
without touching the code (handy for local dev vs. production).

Env files are layered: the backend folder first, then the repository root,
then `.env` in the working directory. Values that are already set
(by the process or by an earlier file) are never overwritten.
"""
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent
ROOT_DIR = BACKEND_DIR.parent.parent

# Ordered env sources; None means ".env" in the current working directory
ENV_SOURCES: List[Optional[Path]] = [
    BACKEND_DIR / ".env",
    ROOT_DIR / ".env",
    None,
]


def load_env_layers(sources: Optional[List[Optional[Path]]] = None) -> List[str]:
    """
    Load each env source in order without overriding keys that are already set.

    A missing or unreadable file just contributes nothing.
    Returns the sources that actually loaded something, mostly for logging.
    """
    loaded: List[str] = []
    for source in ENV_SOURCES if sources is None else sources:
        path = Path.cwd() / ".env" if source is None else source
        try:
            found = load_dotenv(dotenv_path=path, override=False)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping env source %s: %s", path, exc)
            continue
        if found:
            loaded.append(str(path))
    return loaded


def int_setting(key: str, default: int) -> int:
    """Read an integer setting, falling back to `default` when it is not a number."""
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %s", key, raw, default)
        return default


LOADED_ENV_FILES = load_env_layers()

# Runtime / server settings
PORT = int_setting("PORT", 3001)
HOST = os.getenv("HOST", "0.0.0.0")
APP_ENV = (os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development").lower()
SERVERLESS_FLAGS = ("NETLIFY", "VERCEL")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database settings
DB_DRIVER = os.getenv("DB_DRIVER", "postgres").lower()
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int_setting("DB_PORT", 5432)
DB_NAME = os.getenv("DB_NAME", "sweetshop")
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")
SQLITE_PATH = os.getenv("SQLITE_PATH", str(Path("data") / "sweetshop.db"))

# FastAPI app metadata
APP_TITLE = "Sweet Shop API"
HEALTH_OK_MESSAGE = "Sweet Shop API is running"
HEALTH_DB_FAILED_MESSAGE = "Sweet Shop API is running but database connection failed"

# CORS is wide open: the UI may be served from anywhere
CORS_ALLOW_ORIGIN = "*"
CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
CORS_ALLOW_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]
CORS_EXPOSE_HEADERS = ["Content-Type", "Authorization"]

# Request bodies (JSON and urlencoded) are capped at 50 MB
MAX_BODY_BYTES = 50 * 1024 * 1024

# JWT settings
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret")
JWT_ALGO = os.getenv("JWT_ALGO", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int_setting("ACCESS_TOKEN_EXPIRE_MINUTES", 15)
REFRESH_TOKEN_EXPIRE_DAYS = int_setting("REFRESH_TOKEN_EXPIRE_DAYS", 30)
