"""
Streamlit app entrypoint - logging setup, configuration checks and navigation.

This module configures logging from ``.streamlit/secrets.toml``, reports
configuration problems in the log, and registers the directory pages:
- Search: free-text search, location/category/service/hours filters, distance
- Provider Details: the full record of one provider

The provider dataset itself is loaded lazily by the pages through
``src.app_logic.load_application_data`` and cached by Streamlit.
"""

from __future__ import annotations

import logging

import streamlit as st

st.set_page_config(page_title="Provider Directory", page_icon=":hospital:", layout="wide")

from src.utils.config import configure_logging, validate_configuration  # noqa: E402 - after set_page_config

logger = logging.getLogger(__name__)

__all__ = ["show_configuration_warnings"]

_nav_items = [
    ("pages/1_🔎_Search.py", "Search", "🔎"),
    ("pages/2_🏥_Provider_Details.py", "Provider Details", "🏥"),
]


def show_configuration_warnings() -> None:
    """Log configuration issues once per session and surface them in debug mode."""
    if st.session_state.get("_config_checked"):
        return
    issues = validate_configuration()
    for section, message in issues.items():
        logger.warning(f"Configuration issue in [{section}]: {message}")
    st.session_state["_config_checked"] = True
    st.session_state["_config_issues"] = issues


def _build_and_run_app():
    """Build navigation and run the selected page.

    Intentionally encapsulated to prevent duplicate rendering when pages import app.
    """
    configure_logging()
    show_configuration_warnings()

    nav_pages = [st.Page(path, title=title, icon=icon) for path, title, icon in _nav_items]
    pg = st.navigation(nav_pages)
    pg.run()


if __name__ == "__main__":
    _build_and_run_app()
