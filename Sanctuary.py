"""
Streamlit frontend for Cosmic Community Creator (Sanctuary view).

Alias entry point so the app can be launched as `streamlit run Sanctuary.py`.
"""

from app import *  # Re-export everything so Streamlit runs the same UI
