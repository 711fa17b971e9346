import html

import streamlit as st

from utils.inventory_view import ViewerState, card_fields, filter_inventory, load, retry


CARD_CSS = """
<style>
.inventory-card {
    background: #ffffff;
    border: 1px solid #e5e7eb;
    border-radius: 12px;
    padding: 16px;
    margin-bottom: 12px;
    box-shadow: 0 1px 3px rgba(0, 0, 0, 0.06);
}
.item-name {
    font-size: 1.1rem;
    font-weight: 600;
    margin-bottom: 10px;
}
.item-details {
    display: grid;
    grid-template-columns: repeat(4, 1fr);
    gap: 8px;
}
.detail-label {
    font-size: 0.75rem;
    color: #6b7280;
    text-transform: uppercase;
}
.detail-value {
    font-weight: 500;
}
.detail-item.highlight .detail-value {
    color: #16a34a;
    font-weight: 700;
}
.empty {
    text-align: center;
    color: #6b7280;
    padding: 40px 0;
}
.empty-icon {
    font-size: 2.5rem;
}
</style>
"""


def render_header():
    """Render the application header"""
    st.title("📦 Stock Tracker")


def render_loading(state: ViewerState):
    """Show the spinner while the inventory loads, then rerun with the result"""
    with st.spinner("Loading inventory..."):
        load(state, show_refreshing=False)
    st.rerun()


def render_error(state: ViewerState):
    """Error panel with a single retry action"""
    st.error(f"⚠️ {state.error}")
    if st.button("Try Again", type="primary"):
        with st.spinner("Loading inventory..."):
            retry(state)
        st.rerun()


def render_search(state: ViewerState) -> str:
    if "search_term" not in st.session_state:
        st.session_state.search_term = state.search_term
    state.search_term = st.text_input(
        "Search items",
        key="search_term",
        placeholder="Search items...",
        label_visibility="collapsed",
    )
    return state.search_term


def render_inventory_card(item):
    fields = {key: html.escape(value) for key, value in card_fields(item).items()}
    st.markdown(
        f"""
<div class="inventory-card">
  <div class="item-name">{fields['name']}</div>
  <div class="item-details">
    <div class="detail-item"><div class="detail-label">Color</div><div class="detail-value">{fields['color']}</div></div>
    <div class="detail-item"><div class="detail-label">Size</div><div class="detail-value">{fields['size']}</div></div>
    <div class="detail-item"><div class="detail-label">Length</div><div class="detail-value">{fields['length']}</div></div>
    <div class="detail-item highlight"><div class="detail-label">Available</div><div class="detail-value">{fields['stock']}</div></div>
  </div>
</div>
""",
        unsafe_allow_html=True,
    )


def render_empty():
    st.markdown(
        '<div class="empty"><div class="empty-icon">📭</div><p>No items found</p></div>',
        unsafe_allow_html=True,
    )


def render_refresh_button(state: ViewerState):
    """Refresh control, disabled while a refresh is in flight"""
    st.button(
        "🔄 Refresh",
        disabled=state.refreshing,
        on_click=state.begin_load,
        args=(True,),
        help="Refresh inventory",
    )

    if state.refreshing:
        with st.spinner("Refreshing inventory..."):
            load(state, show_refreshing=True)
        st.rerun()


def render_inventory_list(state: ViewerState):
    """Search box, inventory cards and the refresh control"""
    term = render_search(state)
    filtered = filter_inventory(state.inventory, term)

    if not filtered:
        render_empty()
    else:
        for item in filtered:
            render_inventory_card(item)

    render_refresh_button(state)
