"""User interface components for the map bookmark viewer.

File Structure (layout-based naming):
- left_panel.py: Sidebar with the bookmark list
- center_map.py: Pydeck map rendered from MapViewState
- right_panel.py: Control buttons (random points, remove, next, previous)

Core Components:
- actions.py: Trigger-to-action translation (seed, random points, navigation)
- infra.py: Streamlit session store, map version, rerun
"""

from map_bookmarks.ui.actions import (
    add_random_points,
    bookmark_features,
    go_to_bookmark,
    next_bookmark,
    previous_bookmark,
    remove_current_bookmark,
    seed_map,
    zoom_to,
    zoom_to_current_bookmark,
)
from map_bookmarks.ui.center_map import MapRenderer
from map_bookmarks.ui.infra import (
    bump_map_version,
    get_store,
    map_version_subscriber,
    trigger_rerun,
)
from map_bookmarks.ui.left_panel import SidebarRenderer
from map_bookmarks.ui.right_panel import render_control_panel

__all__ = [
    "MapRenderer",
    "SidebarRenderer",
    "render_control_panel",
    "add_random_points",
    "bookmark_features",
    "go_to_bookmark",
    "next_bookmark",
    "previous_bookmark",
    "remove_current_bookmark",
    "seed_map",
    "zoom_to",
    "zoom_to_current_bookmark",
    "bump_map_version",
    "get_store",
    "map_version_subscriber",
    "trigger_rerun",
]
