"""Infrastructure utilities for Streamlit UI operations.

This module abstracts Streamlit-specific infrastructure (st.rerun,
st.session_state) so the rest of the UI can be tested with mocks.

IMPORTANT: Only infrastructure belongs here (session store, map version, rerun).
- Trigger-to-action translation stays in actions.py
- Widget rendering stays in left_panel.py / right_panel.py
"""

import logging
from collections.abc import Callable

import streamlit as st

from map_bookmarks.core.store import Store

logger = logging.getLogger(__name__)


def trigger_rerun(scope: str = "app") -> None:
    """Trigger Streamlit rerun with optional scope.

    In tests, patch 'map_bookmarks.ui.infra.trigger_rerun' to prevent
    actual reruns (which raise StopExecution).
    """
    st.rerun(scope=scope)


def get_store() -> Store:
    """The session's store (created by app.init_session_state)."""
    return st.session_state.store


def bump_map_version() -> None:
    """Increment map_version to create a fresh Pydeck component.

    A new component instance picks up the new initial_view_state instead
    of keeping the camera the user last panned to.
    """
    old_version = st.session_state.get("map_version", 0)
    new_version = old_version + 1
    st.session_state.map_version = new_version
    logger.info(f"[MAP] Bumped map_version: {old_version} -> {new_version}")


def map_version_subscriber(store: Store) -> Callable[[], None]:
    """Store subscriber that bumps map_version when the view moves.

    Feature or layer changes alone keep the component (and the user's
    camera); center/zoom changes recreate it.
    """
    last_view = (store.get_state().map.center, store.get_state().map.zoom)

    def on_change() -> None:
        nonlocal last_view
        map_state = store.get_state().map
        view = (map_state.center, map_state.zoom)
        if view != last_view:
            last_view = view
            bump_map_version()

    return on_change
