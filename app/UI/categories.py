from __future__ import annotations

import html
import re

import streamlit as st

from app.models.category import DEFAULT_COLOR, Category
from app.services.category_client import CategoryClient, CategoryServiceError

from . import state

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def safe_color(color: str | None) -> str:
    """Return ``color`` when it is a hex colour, otherwise the default colour."""

    if color and _HEX_COLOR.match(color):
        return color
    return DEFAULT_COLOR


def category_badge(category: Category) -> str:
    """HTML for a coloured dot followed by the bold category name."""

    return f"<span style='color: {safe_color(category.color)}'>●</span> **{html.escape(category.name)}**"


def render_categories(client: CategoryClient) -> None:
    """Render the category manager: the create/edit form and the category list."""

    try:
        categories = client.list()
    except CategoryServiceError as exc:
        st.error(str(exc))
        st.warning("Error loading categories. Please check server connection.")
        return

    _render_form(client, categories)
    st.divider()
    _render_list(client, categories)


def _render_form(client: CategoryClient, categories: list[Category]) -> None:
    editing_id = state.get_editing_category()
    editing = next((category for category in categories if category.id == editing_id), None)
    if editing_id is not None and editing is None:
        state.set_editing_category(None)

    st.markdown("### Edit Category" if editing else "### Create New Category")
    with st.form("category_form", clear_on_submit=editing is None):
        name = st.text_input("Name", value=editing.name if editing else "")
        description = st.text_area("Description", value=editing.description if editing else "")
        color = st.color_picker("Color", value=safe_color(editing.color) if editing else DEFAULT_COLOR)
        submitted = st.form_submit_button("Update Category" if editing else "Create Category")

    if editing and st.button("Cancel", key="cancel_edit_button"):
        state.set_editing_category(None)
        st.rerun()

    if not submitted:
        return

    if not name.strip():
        st.error("Category name is required")
        return

    try:
        if editing:
            client.update(editing.id, name=name.strip(), description=description.strip(), color=color)
            state.set_editing_category(None)
            st.toast("Category updated successfully")
        else:
            client.create(name.strip(), description=description.strip(), color=color)
            st.toast("Category created successfully")
    except CategoryServiceError as exc:
        st.error(str(exc))
        return
    st.rerun()


def _render_list(client: CategoryClient, categories: list[Category]) -> None:
    st.markdown("### Categories")
    if not categories:
        st.info("No categories yet. Create your first category above!")
        return

    pending_id = state.get_pending_delete()
    for category in categories:
        info_col, edit_col, delete_col = st.columns([6, 1, 1])
        with info_col:
            st.markdown(category_badge(category), unsafe_allow_html=True)
            st.caption(category.description or "No description")
        with edit_col:
            if st.button("Edit", key=f"edit_category_{category.id}"):
                state.set_editing_category(category.id)
                st.rerun()
        with delete_col:
            if st.button("Delete", key=f"delete_category_{category.id}"):
                state.set_pending_delete(category.id)
                st.rerun()

        if category.id == pending_id:
            _render_delete_confirmation(client, category)


def _render_delete_confirmation(client: CategoryClient, category: Category) -> None:
    st.warning(f'Are you sure you want to delete "{category.name}"?')
    confirm_col, cancel_col = st.columns(2)
    with confirm_col:
        confirmed = st.button("Confirm delete", key=f"confirm_delete_{category.id}", type="primary")
    with cancel_col:
        cancelled = st.button("Keep category", key=f"cancel_delete_{category.id}")

    if cancelled:
        state.set_pending_delete(None)
        st.rerun()
    if not confirmed:
        return

    state.set_pending_delete(None)
    try:
        client.delete(category.id)
    except CategoryServiceError as exc:
        st.error(str(exc))
        return
    st.toast("Category deleted successfully")
    st.rerun()
