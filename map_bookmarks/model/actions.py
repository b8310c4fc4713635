"""Actions - Immutable, tagged records describing intended state changes.

Each action is a frozen dataclass carrying a type tag (ActionType) and its
payload. Actions are the only way orchestration code talks to reducers.

Slices:
    map: SetView, AddSource, AddLayer, AddFeatures
    bookmark: MoveSlide, AddBookmark, RemoveBookmark

Reducers compare action.type.name rather than classes or enum members,
because Streamlit's module reloading creates NEW class objects on each rerun
while the store in st.session_state still holds the OLD reducers.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from map_bookmarks.model.bookmark import Bookmark
from map_bookmarks.model.feature import Feature
from map_bookmarks.model.map_state import LayerDescriptor, LonLat, SourceDescriptor


class ActionType(Enum):
    """Type tags of the action vocabulary."""

    SET_VIEW = "SET_VIEW"
    ADD_SOURCE = "ADD_SOURCE"
    ADD_LAYER = "ADD_LAYER"
    ADD_FEATURES = "ADD_FEATURES"
    MOVE_SLIDE = "MOVE_SLIDE"
    ADD_BOOKMARK = "ADD_BOOKMARK"
    REMOVE_BOOKMARK = "REMOVE_BOOKMARK"


@dataclass(frozen=True)
class SetView:
    """Replace map center and zoom."""

    center: LonLat
    zoom: float
    type: ActionType = field(default=ActionType.SET_VIEW, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", tuple(self.center))


@dataclass(frozen=True)
class AddSource:
    """Insert or overwrite a source (last writer wins)."""

    source_id: str
    descriptor: SourceDescriptor
    type: ActionType = field(default=ActionType.ADD_SOURCE, init=False)


@dataclass(frozen=True)
class AddLayer:
    """Append a layer (duplicate ids are appended too)."""

    descriptor: LayerDescriptor
    type: ActionType = field(default=ActionType.ADD_LAYER, init=False)


@dataclass(frozen=True)
class AddFeatures:
    """Append features to a source's bucket."""

    source_id: str
    features: tuple[Feature, ...]
    type: ActionType = field(default=ActionType.ADD_FEATURES, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", tuple(self.features))


@dataclass(frozen=True)
class MoveSlide:
    """Move the bookmark cursor to target (clamped by the reducer)."""

    target: int
    type: ActionType = field(default=ActionType.MOVE_SLIDE, init=False)


@dataclass(frozen=True)
class AddBookmark:
    """Append a bookmark."""

    bookmark: Bookmark
    type: ActionType = field(default=ActionType.ADD_BOOKMARK, init=False)


@dataclass(frozen=True)
class RemoveBookmark:
    """Remove the bookmark at index (out of range is a no-op)."""

    index: int
    type: ActionType = field(default=ActionType.REMOVE_BOOKMARK, init=False)


Action = SetView | AddSource | AddLayer | AddFeatures | MoveSlide | AddBookmark | RemoveBookmark


def action_name(action: object) -> str | None:
    """Type tag name of an action, None for objects without a tag."""
    action_type = getattr(action, "type", None)
    return getattr(action_type, "name", None)


# =============================================================================
# Action creators
# =============================================================================


def set_view(center: LonLat, zoom: float) -> SetView:
    return SetView(center=center, zoom=zoom)


def add_source(source_id: str, descriptor: SourceDescriptor | Mapping[str, Any]) -> AddSource:
    """Create AddSource, accepting a style-spec dict or a SourceDescriptor."""
    if not isinstance(descriptor, SourceDescriptor):
        descriptor = SourceDescriptor.from_dict(descriptor)
    return AddSource(source_id=source_id, descriptor=descriptor)


def add_layer(descriptor: LayerDescriptor | Mapping[str, Any]) -> AddLayer:
    """Create AddLayer, accepting a style-spec dict or a LayerDescriptor."""
    if not isinstance(descriptor, LayerDescriptor):
        descriptor = LayerDescriptor.from_dict(descriptor)
    return AddLayer(descriptor=descriptor)


def add_features(source_id: str, features: Iterable[Feature | Mapping[str, Any]]) -> AddFeatures:
    """Create AddFeatures, accepting Feature objects or GeoJSON Feature dicts."""
    converted = tuple(f if isinstance(f, Feature) else Feature.from_geojson(f) for f in features)
    return AddFeatures(source_id=source_id, features=converted)


def move_slide(target: int) -> MoveSlide:
    return MoveSlide(target=target)


def add_bookmark(bookmark: Bookmark) -> AddBookmark:
    return AddBookmark(bookmark=bookmark)


def remove_bookmark(index: int) -> RemoveBookmark:
    return RemoveBookmark(index=index)
