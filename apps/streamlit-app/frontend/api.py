"""Tiny HTTP helpers for talking to the Sweet Shop API."""
from typing import Optional

import httpx

from frontend.config import API_URL_KEY, api_url, get_api_config


class ApiNotConfigured(RuntimeError):
    """No absolute API base URL, so a server-side client has nowhere to send requests."""


def _client(access_token: Optional[str] = None) -> httpx.Client:
    config = get_api_config()
    headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
    return httpx.Client(base_url=config["base_url"] or "", timeout=config["timeout"] / 1000, headers=headers)


def _url(path: str) -> str:
    url = api_url(path)
    if not url.startswith(("http://", "https://")):
        raise ApiNotConfigured(f"API base URL is not set; set {API_URL_KEY} (e.g. http://localhost:3001)")
    return url


def api_error_message(exc: Exception) -> str:
    """Pull the backend's `message` out of an HTTP error, falling back to str(exc)."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            return exc.response.json().get("message") or str(exc)
        except ValueError:
            return str(exc)
    return str(exc)


def api_get(path: str, params: Optional[dict] = None, access_token: Optional[str] = None):
    url = _url(path)
    with _client(access_token) as client:
        r = client.get(url, params=params)
        r.raise_for_status()
        return r.json()


def api_post(path: str, payload: dict, access_token: Optional[str] = None):
    """
    JSON POST helper for endpoints like /api/auth/login or /api/sweets.
    """
    url = _url(path)
    with _client(access_token) as client:
        r = client.post(url, json=payload)
        r.raise_for_status()
        return r.json()


def api_patch(path: str, payload: dict, access_token: Optional[str] = None):
    url = _url(path)
    with _client(access_token) as client:
        r = client.patch(url, json=payload)
        r.raise_for_status()
        return r.json()


def api_delete(path: str, access_token: Optional[str] = None) -> None:
    url = _url(path)
    with _client(access_token) as client:
        r = client.delete(url)
        r.raise_for_status()
