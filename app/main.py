"""Streamlit entrypoint for the manual judgment gate."""

import logging

import streamlit as st

from app.pages.judgment import render as judgment_page
from app.pages.settings import render as settings_page
from app.state.session import get_session_settings, init_session_state

logging.basicConfig(level=logging.INFO)

# ---------------------------------------------------------------------------
# Session state initialization
# ---------------------------------------------------------------------------

init_session_state()

# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

pages = st.navigation(
    [
        st.Page(judgment_page, title="Manual Judgment", icon="🚦", url_path="judgment", default=True),
        st.Page(settings_page, title="Settings", icon="⚙️", url_path="settings"),
    ]
)

# ---------------------------------------------------------------------------
# Sidebar branding (below the built-in page nav)
# ---------------------------------------------------------------------------

settings = get_session_settings()

with st.sidebar:
    st.title("🚦 Judgment Gate")
    st.caption(f"Mode: **{settings.approval_mode}** | Scenario: **{settings.mock_scenario}**")

# ---------------------------------------------------------------------------
# Run the selected page
# ---------------------------------------------------------------------------

pages.run()
