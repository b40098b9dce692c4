import streamlit as st

from frontend.config import API_BASE_URL, API_URL_KEY
from frontend.state import ensure_base_state, hydrate_auth_from_query_params, log_out
from frontend.views.auth import show_auth_page
from frontend.views.sweets import render_add_sweet_form, render_catalogue

# ---------- Layout + main app ----------

st.set_page_config(
    page_title="Sweet Shop",
    page_icon=":candy:",
    layout="wide",
)

ensure_base_state()
hydrate_auth_from_query_params()

if not API_BASE_URL:
    st.warning(f"No API base URL configured. Set {API_URL_KEY} (e.g. http://localhost:3001) and restart.")

# If not logged in -> only show auth page
if not st.session_state.user:
    show_auth_page()
    st.stop()

# ---------- Top bar: Title + Account details ----------
top_col1, top_col2 = st.columns([4, 3])

with top_col1:
    st.title("Sweet Shop")
    st.caption(f"API: {API_BASE_URL or 'same origin'}")

with top_col2:
    info_col1, info_col2 = st.columns([3, 2])
    with info_col1:
        st.write("Logged in")
        st.write(f"**{st.session_state.user['email']}**")
    with info_col2:
        if st.button("Logout", key="logout_btn"):
            log_out()
            st.toast("Logged out", icon="✅")
            st.rerun()

render_add_sweet_form()
render_catalogue()
