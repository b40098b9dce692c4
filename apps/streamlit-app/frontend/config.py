"""
App-level configuration: where the Sweet Shop API lives.

The base URL is resolved once, at import, from the first of these that is set:

    VITE_PUBLIC_API_URL  ->  VITE_API_URL  ->  REACT_APP_PUBLIC_API_URL

Nothing set means "" (same origin), in production and development alike.
"""
import os
from typing import Mapping, Optional, TypedDict

from dotenv import load_dotenv

# Local dev convenience; real environment variables always win
load_dotenv(override=False)

PUBLIC_API_URL_KEY = "VITE_PUBLIC_API_URL"
API_URL_KEY = "VITE_API_URL"
LEGACY_PUBLIC_API_URL_KEY = "REACT_APP_PUBLIC_API_URL"
PRODUCTION_FLAG_KEY = "PROD"

API_TIMEOUT_MS = 10_000

TRUTHY = {"1", "true", "yes", "on"}


class ApiConfig(TypedDict):
    base_url: Optional[str]
    timeout: int  # milliseconds


def is_production(env: Mapping[str, str]) -> bool:
    return (env.get(PRODUCTION_FLAG_KEY) or "").strip().lower() in TRUTHY


def resolve_api_url(env: Mapping[str, str]) -> str:
    """Pick the API base URL from `env`; first non-empty candidate wins."""
    if env.get(PUBLIC_API_URL_KEY):
        return env[PUBLIC_API_URL_KEY]

    if env.get(API_URL_KEY):
        return env[API_URL_KEY]

    # Older deployments still set this one; absent simply means None
    legacy_url = env.get(LEGACY_PUBLIC_API_URL_KEY)
    if legacy_url:
        return legacy_url

    if is_production(env):
        # Served behind the same host as the API
        return ""

    return ""


API_BASE_URL = resolve_api_url(os.environ)


def api_url(path: str, base_url: str = API_BASE_URL) -> str:
    """Join `path` onto the base URL, adding the leading slash if it is missing."""
    normalized_path = path if path.startswith("/") else f"/{path}"
    return f"{base_url or ''}{normalized_path}"


def get_api_config() -> ApiConfig:
    """Options for building an HTTP client against the API."""
    return {"base_url": API_BASE_URL or None, "timeout": API_TIMEOUT_MS}
