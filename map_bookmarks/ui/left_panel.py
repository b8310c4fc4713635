"""Sidebar UI renderer for the bookmark list.

Renders the left sidebar with one button per bookmark. The bookmark under
the cursor is highlighted; clicking any entry moves the cursor there and
zooms the map to it.

Pure presentation: all state changes go through ui/actions.py.
"""

import logging

import streamlit as st

from map_bookmarks.core.store import Store
from map_bookmarks.model.bookmark import BookmarkState
from map_bookmarks.ui.actions import go_to_bookmark
from map_bookmarks.ui.infra import trigger_rerun

logger = logging.getLogger(__name__)


def bookmark_caption(index: int, bookmark_state: BookmarkState) -> str:
    """Button caption like '2. Mila Mero (12.34, -56.78)'."""
    bookmark = bookmark_state.bookmarks[index]
    lon, lat = bookmark.center
    label = bookmark.label or f"Bookmark {index + 1}"
    return f"{index + 1}. {label} ({lon:.2f}, {lat:.2f})"


class SidebarRenderer:
    """Renders the bookmark list in the Streamlit sidebar.

    Example:
        SidebarRenderer(store=store).render()
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    def render(self) -> None:
        bookmark_state = self.store.get_state().bookmark
        with st.sidebar:
            st.markdown("### 🔖 Bookmarks")
            if bookmark_state.is_empty:
                st.info("No bookmarks yet - add some random points.")
                return

            st.caption(f"{bookmark_state.count + 1} of {len(bookmark_state.bookmarks)}")
            for index in range(len(bookmark_state.bookmarks)):
                is_current = index == bookmark_state.count
                if st.button(
                    bookmark_caption(index=index, bookmark_state=bookmark_state),
                    key=f"bookmark_{index}",
                    type="primary" if is_current else "secondary",
                    width="stretch",
                ):
                    logger.info(f"[UI] Bookmark {index} clicked")
                    go_to_bookmark(self.store, index)
                    trigger_rerun()
