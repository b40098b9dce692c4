"""Helpers to manage Streamlit session state in one place."""
import base64
import json
from typing import List, Optional

import streamlit as st

AUTH_QUERY_KEY = "auth"


def ensure_base_state():
    """Ensure the auth and catalogue keys are present."""
    if "user" not in st.session_state:
        st.session_state.user = None  # {"id": ..., "email": ..., "role": ...}
    if "tokens" not in st.session_state:
        st.session_state.tokens = None  # {"access_token": ..., "refresh_token": ...}
    if "sweets" not in st.session_state:
        st.session_state.sweets = []
    if "sweets_loaded" not in st.session_state:
        st.session_state.sweets_loaded = False


def access_token() -> Optional[str]:
    return (st.session_state.get("tokens") or {}).get("access_token")


def fetch_sweets(force_refresh: bool = False) -> List[dict]:
    """Load the catalogue from the backend and cache it in session_state."""
    if st.session_state.sweets_loaded and not force_refresh:
        return st.session_state.sweets

    # Import locally to avoid circular imports at module load time
    from frontend.api import api_get

    try:
        resp = api_get("/api/sweets", access_token=access_token())
    except Exception:
        st.session_state.sweets_loaded = False
        raise

    st.session_state.sweets = resp.get("sweets", [])
    st.session_state.sweets_loaded = True
    return st.session_state.sweets


def invalidate_sweets():
    st.session_state.sweets_loaded = False


def log_out():
    """Drop everything tied to the current user."""
    st.session_state.user = None
    st.session_state.tokens = None
    st.session_state.sweets = []
    st.session_state.sweets_loaded = False
    clear_auth_query_params()


# ---- Lightweight auth persistence across refresh ----


def _encode_auth_payload(user: dict) -> str:
    # Tokens stay in session_state only; URLs end up in history and proxy logs
    payload = {"user": user}
    raw = json.dumps(payload).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def _decode_auth_payload(value: str) -> Optional[dict]:
    try:
        raw = base64.urlsafe_b64decode(value.encode("ascii"))
        return json.loads(raw)
    except (ValueError, UnicodeError):
        return None


def hydrate_auth_from_query_params():
    """
    If session_state is empty (new session) but the URL carries an auth
    payload, restore the user so a browser refresh doesn't log out.
    Tokens are not restored; calls that need one run without it until the
    next sign-in.
    """
    if st.session_state.get("user"):
        return
    encoded = st.query_params.get(AUTH_QUERY_KEY)
    if not encoded:
        return
    payload = _decode_auth_payload(encoded[0] if isinstance(encoded, list) else encoded)
    if payload and payload.get("user"):
        st.session_state.user = payload["user"]
        st.session_state.tokens = None


def persist_auth_to_query_params():
    """Store the current user (never the tokens) in URL query params for reload resilience."""
    user = st.session_state.get("user")
    if not user:
        return
    st.query_params[AUTH_QUERY_KEY] = _encode_auth_payload(user)


def clear_auth_query_params():
    st.query_params.clear()
