"""Streamlit page renderers."""
