"""Streamlit components for rendering multi-step forms."""
