from __future__ import annotations

import streamlit as st

from app.UI import categories
from app.core.config import settings
from app.services.category_client import CategoryClient

st.set_page_config(page_title="Categories", page_icon="🗂️", layout="centered")


@st.cache_resource
def _get_client() -> CategoryClient:
    """Return the shared categories API client."""

    return CategoryClient(settings.categories_api_url)


categories.render_categories(_get_client())
