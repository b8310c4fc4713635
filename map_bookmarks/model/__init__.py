"""Data model classes for the map bookmark viewer.

- Feature / Geometry: GeoJSON-style records
- FeatureStore: immutable per-source feature buckets with tagged inserts
- SourceDescriptor / LayerDescriptor: declarative style-spec inputs
- MapViewState: center, zoom, sources, layers, features
- Bookmark / BookmarkState: saved viewpoints plus cursor
- Actions: tagged records consumed by the reducers
"""

from map_bookmarks.model.actions import (
    Action,
    ActionType,
    AddBookmark,
    AddFeatures,
    AddLayer,
    AddSource,
    MoveSlide,
    RemoveBookmark,
    SetView,
    action_name,
)
from map_bookmarks.model.bookmark import Bookmark, BookmarkState
from map_bookmarks.model.feature import (
    Feature,
    FeatureStore,
    Geometry,
    InsertOutcome,
    InsertResult,
)
from map_bookmarks.model.map_state import (
    LayerDescriptor,
    MapViewState,
    SourceDescriptor,
)

__all__ = [
    "Action",
    "ActionType",
    "AddBookmark",
    "AddFeatures",
    "AddLayer",
    "AddSource",
    "MoveSlide",
    "RemoveBookmark",
    "SetView",
    "action_name",
    "Bookmark",
    "BookmarkState",
    "Feature",
    "FeatureStore",
    "Geometry",
    "InsertOutcome",
    "InsertResult",
    "LayerDescriptor",
    "MapViewState",
    "SourceDescriptor",
]
