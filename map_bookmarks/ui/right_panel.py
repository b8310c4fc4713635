"""Control panel buttons for the bookmark viewer.

Buttons only dispatch through ui/actions.py, then rerun the script so the
map and sidebar render from the new state.
"""

import logging

import streamlit as st

from map_bookmarks.constants import RandomPointConfig
from map_bookmarks.core.store import Store
from map_bookmarks.ui.actions import (
    add_random_points,
    bookmark_features,
    next_bookmark,
    previous_bookmark,
    remove_current_bookmark,
    zoom_to_current_bookmark,
)
from map_bookmarks.ui.infra import trigger_rerun

logger = logging.getLogger(__name__)


def add_random_bookmarked_points(store: Store) -> None:
    """Add a batch of random points and bookmark each of them."""
    features = add_random_points(store, count=RandomPointConfig.BATCH_SIZE)
    bookmark_features(store, features)


def step_and_zoom(store: Store, forward: bool) -> None:
    """Next/previous bookmark, then zoom to where the cursor landed."""
    if forward:
        next_bookmark(store)
    else:
        previous_bookmark(store)
    zoom_to_current_bookmark(store)


def render_control_panel(store: Store) -> None:
    """Render the control buttons in one row. Any click dispatches and reruns."""
    bookmark_state = store.get_state().bookmark
    no_bookmarks = bookmark_state.is_empty
    last_index = len(bookmark_state.bookmarks) - 1

    cols = st.columns(4)
    with cols[0]:
        if st.button(f"➕ Add {RandomPointConfig.BATCH_SIZE} random points", key="add_points", width="stretch"):
            logger.info("[UI] Add random points clicked")
            add_random_bookmarked_points(store)
            trigger_rerun()
    with cols[1]:
        if st.button("🗑️ Remove current Bookmark", key="remove_bookmark", width="stretch", disabled=no_bookmarks):
            logger.info(f"[UI] Remove bookmark clicked at count={bookmark_state.count}")
            remove_current_bookmark(store)
            zoom_to_current_bookmark(store)
            trigger_rerun()
    with cols[2]:
        if st.button(
            "⬅️ Previous Bookmark",
            key="previous_bookmark",
            width="stretch",
            disabled=no_bookmarks or bookmark_state.count == 0,
        ):
            step_and_zoom(store, forward=False)
            trigger_rerun()
    with cols[3]:
        if st.button(
            "➡️ Next Bookmark",
            key="next_bookmark",
            width="stretch",
            disabled=no_bookmarks or bookmark_state.count == last_index,
        ):
            step_and_zoom(store, forward=True)
            trigger_rerun()
