"""Streamlit application shell."""

from __future__ import annotations


def render_app() -> None:
    import streamlit as st

    # set_page_config() must run before any other streamlit call
    from casegraph.config import APP_TITLE

    st.set_page_config(page_title=APP_TITLE, layout="wide")

    from casegraph.ui.sidebar import render_sidebar
    from casegraph.ui.tabs import render_tabs

    st.title(APP_TITLE)
    state = render_sidebar()
    render_tabs(state)
