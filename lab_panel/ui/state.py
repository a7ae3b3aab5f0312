"""Session state for the Streamlit app.

Each browser session owns exactly one panel; nothing is persisted across a
reload.
"""

from __future__ import annotations

import streamlit as st

from lab_panel.config import PanelConfig, load_config
from lab_panel.core.panel import LmsPanel

PANEL_KEY = "lms_panel"


def get_panel(config: PanelConfig | None = None) -> LmsPanel:
    """Return this session's panel, creating it on first access."""
    if PANEL_KEY not in st.session_state:
        st.session_state[PANEL_KEY] = LmsPanel(config or load_config())
    return st.session_state[PANEL_KEY]


def reset_panel(config: PanelConfig | None = None) -> LmsPanel:
    """Close the current panel (dropping any late results) and start a new one."""
    old = st.session_state.get(PANEL_KEY)
    if old is not None:
        old.close()
        config = config or old.config
    st.session_state[PANEL_KEY] = LmsPanel(config or load_config())
    return st.session_state[PANEL_KEY]
