"""Thin UI layer.

Streamlit pages that collect inputs, call the panel, and render artifacts.
Business logic lives in lab_panel.core.
"""
