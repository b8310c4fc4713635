"""Bookmark - Saved map viewpoints and the bookmark cursor.

BookmarkState is replaced on every dispatch; the bookmark reducer is the
only code that builds new instances from actions and it keeps count inside
[0, len(bookmarks) - 1] whenever bookmarks is non-empty.
"""

from dataclasses import dataclass

from map_bookmarks.constants import MapConfig
from map_bookmarks.model.feature import Feature


@dataclass(frozen=True)
class Bookmark:
    """Saved viewpoint.

    Attributes:
        center: (lon, lat)
        zoom: Zoom level to restore
        label: Display name (optional)
    """

    center: tuple[float, float]
    zoom: float
    label: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", tuple(self.center))

    @staticmethod
    def from_feature(feature: Feature, zoom: float = MapConfig.BOOKMARK_ZOOM) -> "Bookmark":
        """Bookmark a Point feature, labelled by its randomName/title property."""
        lon_lat = feature.lon_lat
        if lon_lat is None:
            raise ValueError(f"Only Point features can be bookmarked, got {feature.geometry.type}")
        label = feature.properties.get("randomName") or feature.properties.get("title") or feature.id
        return Bookmark(center=lon_lat, zoom=zoom, label=label)


@dataclass(frozen=True)
class BookmarkState:
    """Ordered bookmarks plus the zero-based cursor."""

    bookmarks: tuple[Bookmark, ...] = ()
    count: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "bookmarks", tuple(self.bookmarks))

    @property
    def is_empty(self) -> bool:
        return len(self.bookmarks) == 0

    @property
    def current(self) -> Bookmark | None:
        """Bookmark under the cursor, None when empty."""
        if self.is_empty:
            return None
        return self.bookmarks[self.count]
