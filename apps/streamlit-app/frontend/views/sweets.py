"""Catalogue view: list sweets, add new ones, adjust stock, delete."""
import streamlit as st

from frontend.api import api_delete, api_error_message, api_patch, api_post
from frontend.models import Sweet
from frontend.state import access_token, fetch_sweets, invalidate_sweets


def render_add_sweet_form():
    with st.expander("Add a sweet"):
        with st.form("add_sweet_form", clear_on_submit=True):
            name = st.text_input("Name")
            category = st.text_input("Category")
            price = st.number_input("Price", min_value=0.0, step=0.1, format="%.2f")
            quantity = st.number_input("Quantity", min_value=0, step=1)
            submitted = st.form_submit_button("Add")
        if submitted:
            payload = {"name": name, "category": category, "price": price, "quantity": int(quantity)}
            try:
                api_post("/api/sweets", payload, access_token=access_token())
            except Exception as e:
                st.error(f"Could not add sweet: {api_error_message(e)}")
                return
            invalidate_sweets()
            st.toast(f"Added {name}", icon="\U0001F36C")
            st.rerun()


def _render_sweet_row(sweet: Sweet):
    name_col, stock_col, delete_col = st.columns([4, 3, 1])
    with name_col:
        st.markdown(f"**{sweet.name}**  \n{sweet.category} | ${sweet.price:.2f}")
    with stock_col:
        new_quantity = st.number_input(
            "In stock",
            min_value=0,
            step=1,
            value=sweet.quantity,
            key=f"qty_{sweet.id}",
        )
        if new_quantity != sweet.quantity:
            try:
                api_patch(f"/api/sweets/{sweet.id}", {"quantity": int(new_quantity)}, access_token=access_token())
            except Exception as e:
                st.error(f"Could not update {sweet.name}: {api_error_message(e)}")
            else:
                invalidate_sweets()
                st.rerun()
    with delete_col:
        if st.button("Delete", key=f"delete_{sweet.id}"):
            try:
                api_delete(f"/api/sweets/{sweet.id}", access_token=access_token())
            except Exception as e:
                st.error(f"Could not delete {sweet.name}: {api_error_message(e)}")
            else:
                invalidate_sweets()
                st.rerun()


def render_catalogue():
    st.subheader("Catalogue")
    if st.button("Refresh", key="refresh_sweets"):
        invalidate_sweets()

    try:
        sweets = [Sweet(**row) for row in fetch_sweets()]
    except Exception as e:
        st.warning(f"Could not load sweets: {api_error_message(e)}")
        return

    if not sweets:
        st.info("No sweets yet. Add the first one above.")
        return

    for sweet in sweets:
        _render_sweet_row(sweet)
