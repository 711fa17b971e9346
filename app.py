import logging

import streamlit as st
from dotenv import load_dotenv

from utils.inventory_view import ViewerState
from utils.ui_components import (
    CARD_CSS,
    render_error,
    render_header,
    render_inventory_list,
    render_loading,
)

# Load environment variables
load_dotenv()
logger = logging.getLogger(__name__)

# Set page configuration
st.set_page_config(
    page_title="📦 Stock Tracker",
    page_icon="📦",
    layout="centered",
)

# Custom CSS for inventory cards
st.markdown(CARD_CSS, unsafe_allow_html=True)

# Initialize session state; a fresh state starts in loading so the first run fetches
if "viewer_state" not in st.session_state:
    st.session_state.viewer_state = ViewerState()


def main():
    """Render whichever view matches the current state"""
    state = st.session_state.viewer_state

    if state.status == "loading":
        render_loading(state)
        return

    render_header()

    if state.status == "error":
        render_error(state)
        return

    render_inventory_list(state)


if __name__ == "__main__":
    main()
