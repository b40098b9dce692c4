"""Auth page rendering (login + register)."""
import streamlit as st

from frontend.api import api_error_message, api_post
from frontend.models import User
from frontend.state import invalidate_sweets, persist_auth_to_query_params


def _sign_in(data: dict):
    """Store the {"user": ..., "tokens": ...} body returned by login/register."""
    st.session_state.user = User(**data["user"]).model_dump()
    st.session_state.tokens = data.get("tokens")
    persist_auth_to_query_params()
    invalidate_sweets()


def show_auth_page():
    """Full-page Login / Register, shown when there is no logged-in user."""
    st.title("Sweet Shop")
    st.caption("Browse and manage the shop's sweets")

    tabs = st.tabs(["Login", "Register"])

    with tabs[0]:
        st.subheader("Sign in")
        with st.form("login_form", clear_on_submit=False):
            login_email = st.text_input("Email", key="login_email")
            login_password = st.text_input("Password", type="password", key="login_password")
            login_submitted = st.form_submit_button("Sign in")
        if login_submitted:
            try:
                _sign_in(api_post("/api/auth/login", {"email": login_email, "password": login_password}))
            except Exception as e:
                st.error(f"Login failed: {api_error_message(e)}")
            else:
                st.toast("Login successful", icon="\U00002705")
                st.rerun()

    with tabs[1]:
        st.subheader("Create an account")
        with st.form("register_form", clear_on_submit=False):
            reg_email = st.text_input("Email", key="reg_email")
            reg_password = st.text_input("Password", type="password", key="reg_password")
            reg_confirm = st.text_input("Confirm password", type="password", key="reg_confirm")
            reg_submitted = st.form_submit_button("Create account")
        if reg_submitted:
            if reg_password != reg_confirm:
                st.error("Passwords do not match.")
                return
            try:
                # backend 201 -> {"user": {...}, "tokens": {...}}
                _sign_in(api_post("/api/auth/register", {"email": reg_email, "password": reg_password}))
            except Exception as e:
                st.error(f"Registration failed: {api_error_message(e)}")
            else:
                st.toast("Registration successful", icon="\U00002705")
                st.rerun()
