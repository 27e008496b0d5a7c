"""
Interactive controls shared by dashboard pages: login state and the zoom
toolbar.
"""

from typing import Optional

import streamlit as st
from loguru import logger

from api.client import EnergyApiClient
from viz.config import get_screen_config, load_config, viewport_for_screen
from viz.viewport import ViewportTransform


def get_client() -> EnergyApiClient:
    """API client kept for the lifetime of the browser session."""
    if "api_client" not in st.session_state:
        st.session_state.api_client = EnergyApiClient.from_config(load_config())
    return st.session_state.api_client


def use_sample_data() -> bool:
    """True when pages should render generated data instead of the backend."""
    return st.session_state.get("use_sample_data", True)


def render_login(client: EnergyApiClient):
    """Sidebar login / logout form."""
    st.sidebar.markdown("## Account")

    st.session_state.use_sample_data = st.sidebar.checkbox(
        "Use sample data", value=use_sample_data(),
        help="Render generated data without contacting the backend",
    )

    if client.is_authenticated:
        st.sidebar.success(f"Signed in as {st.session_state.get('username', 'user')}")
        if st.sidebar.button("Log out"):
            client.logout()
            st.session_state.pop("username", None)
            st.rerun()
        return

    with st.sidebar.form("login"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")

    if submitted:
        if not username or not password:
            st.sidebar.error("Please enter username and password")
        elif client.login(username, password):
            st.session_state.username = username
            st.session_state.use_sample_data = False
            st.rerun()
        else:
            st.sidebar.error("Login failed")


def get_viewport(screen_key: str, width: float, height: float) -> ViewportTransform:
    """
    Viewport for a screen, created on first use and kept across reruns.

    The content size can change between reruns (e.g. another fuel with more
    plants), so the kept viewport is resized to the current dimensions.
    """
    key = f"viewport_{screen_key}"
    if key not in st.session_state:
        logger.debug(f"Creating viewport for {screen_key} ({width}x{height})")
        st.session_state[key] = viewport_for_screen(screen_key, width, height)
    viewport = st.session_state[key]
    if (viewport.width, viewport.height) != (width, height):
        viewport.resize(width, height)
    return viewport


def render_zoom_toolbar(
    viewport: ViewportTransform,
    screen_key: str,
    presets: Optional[list[float]] = None,
):
    """
    Render Fit / preset / + / - zoom buttons for a viewport.

    Args:
        viewport: Viewport to drive
        screen_key: Screen key (used for widget keys and configured presets)
        presets: Zoom presets; configured screen presets if omitted
    """
    presets = presets or get_screen_config(screen_key).get("zoom_presets", [1.0])
    cols = st.columns(len(presets) + 3)

    if cols[0].button("Fit", key=f"{screen_key}_fit"):
        viewport.fit()
    for col, preset in zip(cols[1:], presets):
        if col.button(f"{preset * 100:.0f}%", key=f"{screen_key}_preset_{preset}"):
            viewport.set_zoom(preset)
    if cols[-2].button("＋", key=f"{screen_key}_zoom_in"):
        viewport.zoom_in()
    if cols[-1].button("－", key=f"{screen_key}_zoom_out"):
        viewport.zoom_out()

    st.caption(f"Zoom {viewport.scale * 100:.0f}%")
