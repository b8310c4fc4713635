"""Map Bookmarks - Zoom between saved views on a live feature map.

Seeds an OpenStreetMap basemap plus a layer of random points, bookmarks
each point, and lets the user step through the bookmarks.

Run: streamlit run map_bookmarks/app.py
"""

import logging
import traceback

import streamlit as st

from map_bookmarks.constants import AppConfig, MapConfig, RandomPointConfig
from map_bookmarks.core.store import Store
from map_bookmarks.ui import (
    MapRenderer,
    SidebarRenderer,
    add_random_points,
    bookmark_features,
    get_store,
    map_version_subscriber,
    render_control_panel,
    seed_map,
    trigger_rerun,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def create_seeded_store() -> Store:
    """Create a store, seed the map and add one batch of bookmarked random points."""
    store = Store()
    seed_map(store)
    features = add_random_points(store, count=RandomPointConfig.BATCH_SIZE)
    bookmark_features(store, features)
    store.subscribe(map_version_subscriber(store))
    return store


def init_session_state() -> None:
    """Initialize session state with one store per browser session."""
    if "store" not in st.session_state:
        st.session_state.store = create_seeded_store()

    if "map_renderer" not in st.session_state:
        st.session_state.map_renderer = MapRenderer()

    if "map_version" not in st.session_state:
        st.session_state.map_version = 0


def reset_session_state() -> None:
    """Tear down the session's store and start over with a freshly seeded one.

    Called when an error occurs to recover gracefully.
    """
    logger.info("Resetting session store due to error recovery")
    old_store: Store | None = st.session_state.get("store")
    if old_store is not None:
        old_store.teardown()

    st.session_state.store = create_seeded_store()
    st.session_state.map_version = st.session_state.get("map_version", 0) + 1
    logger.info("Session store reset complete")


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    st.title(AppConfig.TITLE)

    try:
        _run_app_ui()
    except Exception as e:
        # Log full traceback for debugging
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")

        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")

        reset_session_state()

        if st.button("🔄 Reset and Continue", type="primary"):
            trigger_rerun()


def _run_app_ui() -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    store = get_store()
    renderer: MapRenderer = st.session_state.map_renderer
    state = store.get_state()

    map_version = st.session_state.get("map_version", 0)
    logger.info(
        f"[MAIN] Render cycle starting: bookmark={state.bookmark.count}/{len(state.bookmark.bookmarks)}, "
        f"map_version={map_version}"
    )

    SidebarRenderer(store=store).render()

    render_control_panel(store=store)

    deck = renderer.render(map_state=state.map, current_bookmark=state.bookmark.current)
    st.pydeck_chart(deck, height=MapConfig.HEIGHT_PX, key=f"map_{map_version}")

    current = state.bookmark.current
    if current is not None:
        lon, lat = current.center
        st.caption(f"Current bookmark: **{current.label}** at ({lon:.4f}, {lat:.4f}), zoom {current.zoom}")


if __name__ == "__main__":
    main()
