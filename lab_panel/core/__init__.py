"""Core (pure) library layer.

This package is UI-agnostic and safe to import from tests and scripts.
It should not import Streamlit or trigger side effects at import time.
"""
