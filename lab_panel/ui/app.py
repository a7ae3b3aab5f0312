"""Streamlit UI entrypoint.

Run with ``streamlit run lab_panel/ui/app.py``.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# Ensure repo root is on sys.path for imports.
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

import streamlit as st
import streamlit.components.v1 as st_components

from lab_panel.config import load_config
from lab_panel.ui.page_modules import lms_page
from lab_panel.ui.state import get_panel, reset_panel


def main() -> None:
    config = load_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    st.set_page_config(layout="wide", page_title="LMS Equalization")

    lms_page.render_lms_page(
        st=st,
        components_html=st_components.html,
        run_async=asyncio.run,
        panel=get_panel(config),
        reset_panel=reset_panel,
    )


if __name__ == "__main__":
    main()
