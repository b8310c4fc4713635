"""Core state-synchronization classes.

This package contains:
- map_reducer: Pure map slice reducer (view, sources, layers, features)
- bookmark_reducer: Pure bookmark slice reducer driven by BookmarkNavigator
- Store: Composition root that dispatches to both reducers and notifies subscribers
"""

from map_bookmarks.core.bookmark_reducer import (
    BookmarkNavigator,
    NavigationDraft,
    bookmark_reducer,
    clamp,
)
from map_bookmarks.core.map_reducer import map_reducer
from map_bookmarks.core.store import AppState, Store, StoreClosedError

__all__ = [
    "AppState",
    "BookmarkNavigator",
    "NavigationDraft",
    "Store",
    "StoreClosedError",
    "bookmark_reducer",
    "clamp",
    "map_reducer",
]
