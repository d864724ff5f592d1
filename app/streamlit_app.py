"""Model Catalog — Streamlit browser page.

Thin presentation over CatalogStore: every widget forwards to a store
method and the page renders the store's snapshot. Badges are placed by
the flow layout engine and drawn as absolutely positioned HTML.
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import html

import streamlit as st

import config
from main import build_registry
from src.flow_layout import LayoutConfig, flow_badges
from src.logging_config import PerformanceTimer, configure_logging
from src.model_catalog import (
    CatalogConfig,
    CatalogStore,
    EmptyState,
    LoadStatus,
    SortOption,
    build_detail,
    format_popularity,
)
from src.model_providers import PROVIDER_STYLES, CapabilityTag, ProviderId

BADGE_LAYOUT = LayoutConfig(
    horizontal_spacing=config.BADGE_H_SPACING,
    vertical_spacing=config.BADGE_V_SPACING,
    char_width=config.BADGE_CHAR_WIDTH,
    badge_padding=config.BADGE_PADDING,
    badge_height=config.BADGE_HEIGHT,
)

EMPTY_MESSAGES = {
    EmptyState.LOADING: "Loading models...",
    EmptyState.ERROR: "Could not load models. Try refreshing.",
    EmptyState.NO_DATA: "This provider has no models.",
    EmptyState.NO_MATCHES: "No models match your search and filters.",
}

# ── Page config (must be first Streamlit call) ──────────────────────
st.set_page_config(
    page_title="Model Catalog",
    page_icon="",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ── Session state defaults ──────────────────────────────────────────
def init_session_state():
    if "catalog_store" not in st.session_state:
        configure_logging()
        st.session_state.catalog_store = CatalogStore(
            build_registry(),
            CatalogConfig(
                default_provider=ProviderId.parse(config.DEFAULT_PROVIDER),
                default_sort=SortOption(config.DEFAULT_SORT),
            ),
        )
    store = st.session_state.catalog_store
    if store.status == LoadStatus.IDLE:
        asyncio.run(store.load())


init_session_state()
store: CatalogStore = st.session_state.catalog_store


# ── Badge rendering ─────────────────────────────────────────────────
def render_badges(labels, color: str = "#334155"):
    """Draw badges at the positions computed by the flow layout."""
    if not labels:
        return
    with PerformanceTimer("badge_layout", threshold_ms=50):
        result = flow_badges(labels, config.CARD_WIDTH, BADGE_LAYOUT)
    items = []
    for label, pos in zip(labels, result.positions):
        width = len(label) * BADGE_LAYOUT.char_width + BADGE_LAYOUT.badge_padding
        items.append(
            f'<span style="position:absolute;left:{pos.x}px;top:{pos.y}px;'
            f'width:{width}px;height:{BADGE_LAYOUT.badge_height}px;'
            f'line-height:{BADGE_LAYOUT.badge_height}px;text-align:center;'
            f'border-radius:12px;background:{color};color:#f1f5f9;'
            f'font-size:12px;font-family:monospace;">{html.escape(label)}</span>'
        )
    st.markdown(
        f'<div style="position:relative;width:{config.CARD_WIDTH}px;'
        f'height:{result.total_height}px;">{"".join(items)}</div>',
        unsafe_allow_html=True,
    )


# ── Sidebar: provider and query controls ────────────────────────────
with st.sidebar:
    st.markdown("## Model Catalog")

    providers = list(ProviderId)
    selected = st.selectbox(
        "Provider",
        options=providers,
        index=providers.index(store.provider),
        format_func=lambda p: PROVIDER_STYLES[p].display_name,
        key="provider_selector",
    )
    if selected != store.provider:
        asyncio.run(store.select_provider(selected))
        # Filters are provider-scoped; drop the widget values so they follow the store
        for key in ("search_input", "capability_filter"):
            st.session_state.pop(key, None)
        st.rerun()

    search = st.text_input("Search", value=store.query.search_text, key="search_input")
    store.set_search_text(search)

    capabilities = st.multiselect(
        "Input capabilities",
        options=list(CapabilityTag),
        default=sorted(store.query.selected_capabilities, key=lambda c: c.value),
        format_func=lambda c: c.label,
        key="capability_filter",
    )
    for tag in set(capabilities) ^ set(store.query.selected_capabilities):
        store.toggle_capability(tag)

    sort_options = list(SortOption)
    sort = st.selectbox(
        "Sort by",
        options=sort_options,
        index=sort_options.index(store.query.sort_option),
        format_func=lambda s: s.label,
        key="sort_selector",
    )
    store.set_sort_option(sort)

    if st.button("Refresh", use_container_width=True):
        asyncio.run(store.refresh())


# ── Catalog list ────────────────────────────────────────────────────
snapshot = store.snapshot()
style = PROVIDER_STYLES[snapshot.provider]

st.title(f"{style.display_name} models")
st.caption(
    f"{len(snapshot.derived_records)} of {len(snapshot.records)} models "
    f"· sorted by {snapshot.query.sort_option.label}"
)

if snapshot.error_message:
    st.error(snapshot.error_message)

if snapshot.empty_state is not None:
    st.info(EMPTY_MESSAGES[snapshot.empty_state])

for record in snapshot.derived_records:
    with st.container(border=True):
        header, badge = st.columns([4, 1])
        header.markdown(f"**{record.display_name}**")
        if record.short_description:
            header.caption(record.short_description)
        popularity = format_popularity(record.popularity)
        if popularity:
            badge.metric("Popularity", popularity)

        render_badges([c.label for c in record.input_capabilities], color=style.color)

        with st.expander("Details"):
            detail = build_detail(record)
            if detail.subtitle:
                st.caption(detail.subtitle)
            if detail.flags:
                render_badges(list(detail.flags))
            if detail.release_date_text:
                st.write(f"Released {detail.release_date_text}")
            if detail.description:
                st.write(detail.description)
            st.write("Inputs")
            render_badges(list(detail.input_labels))
            st.write("Outputs")
            render_badges(list(detail.output_labels))
            if detail.tags:
                st.write("Tags")
                render_badges(list(detail.tags))
            for key, value in detail.stats:
                st.text(f"{key}: {value}")
