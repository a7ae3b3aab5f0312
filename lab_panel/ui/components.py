"""Reusable Streamlit pieces for the LMS panel.

Components are stateless: they take ``st`` and data and render it.
"""

from __future__ import annotations

from typing import Callable

from lab_panel.ui.formatting import artifact_caption

PREVIEW_WIDTH = 650
PREVIEW_HEIGHT = 262


def render_script_preview(components_html: Callable[..., object], display: str) -> None:
    """Render the script preview in an isolated iframe (``components.html``)."""
    components_html(display, width=PREVIEW_WIDTH, height=PREVIEW_HEIGHT, scrolling=True)


def render_loading(st) -> None:
    st.info("Loading...")


def render_artifacts(st, urls: list[str]) -> None:
    for i, url in enumerate(urls):
        st.image(url, caption=artifact_caption(i))


def render_run_error(st, message: str | None) -> None:
    st.warning(f"Run failed: {message or 'unknown error'}")
