"""UI Actions - Trigger-to-action translation for the bookmark viewer.

Each function maps one external trigger (startup, button press, list click)
to one or more dispatched actions. The store is always passed in explicitly.

This module handles:
- Startup seeding (seed_map)
- Random point generation (add_random_points)
- Bookmark management (bookmark_features, remove_current_bookmark)
- Navigation (zoom_to, next_bookmark, previous_bookmark, go_to_bookmark)

Read-then-dispatch
------------------
next_bookmark()/previous_bookmark() read count from the snapshot at trigger
time and dispatch count +/- 1. Handlers run to completion on a single event
queue so no dispatch can slip in between; a handler that awaited between the
read and the dispatch would lose that guarantee. Clamping in the reducer
keeps the cursor valid either way.
"""

import logging
import random
from collections.abc import Iterable
from typing import Any

from map_bookmarks.constants import MapConfig, RandomPointConfig, SourceConfig, StyleConfig
from map_bookmarks.core.store import Store
from map_bookmarks.generators.random_points import RandomPointGenerator
from map_bookmarks.model.actions import (
    add_bookmark,
    add_features,
    add_layer,
    add_source,
    move_slide,
    remove_bookmark,
    set_view,
)
from map_bookmarks.model.bookmark import Bookmark
from map_bookmarks.model.feature import Feature
from map_bookmarks.model.map_state import LonLat

logger = logging.getLogger(__name__)


# =============================================================================
# STARTUP SEEDING
# =============================================================================


def osm_source() -> dict[str, Any]:
    """Raster source for OpenStreetMap tiles."""
    return {
        "type": SourceConfig.RASTER,
        "tileSize": SourceConfig.OSM_TILE_SIZE,
        "tiles": list(SourceConfig.OSM_TILES),
    }


def points_source() -> dict[str, Any]:
    """GeoJSON source for the live point features (starts empty)."""
    return {
        "type": SourceConfig.GEOJSON,
        "clusterRadius": SourceConfig.POINTS_CLUSTER_RADIUS,
        "data": {"type": "FeatureCollection", "features": []},
    }


def point_layers() -> list[dict[str, Any]]:
    """Layers drawing the points source: clusters, cluster labels, single points."""
    points = SourceConfig.POINTS_SOURCE_ID
    return [
        {
            "id": "clustered-points",
            "source": points,
            "type": "circle",
            "paint": {
                "circle-radius": {
                    "type": "interval",
                    "default": StyleConfig.CLUSTER_RADIUS_DEFAULT,
                    "property": "point_count",
                    "stops": StyleConfig.CLUSTER_RADIUS_STOPS,
                },
                "circle-color": StyleConfig.CLUSTER_COLOR,
                "circle-stroke-color": StyleConfig.CLUSTER_STROKE_COLOR,
            },
            "filter": ["has", "point_count"],
        },
        {
            "id": "clustered-labels",
            "source": points,
            "layout": {
                "text-field": "{point_count}",
                "text-font": StyleConfig.LABEL_FONT,
                "text-size": StyleConfig.LABEL_SIZE,
            },
            "filter": ["has", "point_count"],
        },
        {
            "id": "random-points",
            "source": points,
            "type": "circle",
            "paint": {
                "circle-radius": StyleConfig.POINT_RADIUS,
                "circle-color": StyleConfig.POINT_COLOR,
                "circle-stroke-color": StyleConfig.POINT_COLOR,
            },
            "filter": ["!has", "point_count"],
        },
    ]


def seed_map(store: Store) -> None:
    """Dispatch the startup view, OSM basemap, points source and point layers.

    Order: SET_VIEW, ADD_SOURCE(osm), ADD_LAYER(osm), ADD_SOURCE(points),
    then the three point layers.
    """
    store.dispatch(set_view(center=(MapConfig.START_CENTER_LON, MapConfig.START_CENTER_LAT), zoom=MapConfig.START_ZOOM))

    store.dispatch(add_source(SourceConfig.OSM_SOURCE_ID, osm_source()))
    # Raster layers need no paint styles
    store.dispatch(add_layer({"id": SourceConfig.OSM_SOURCE_ID, "source": SourceConfig.OSM_SOURCE_ID}))

    store.dispatch(add_source(SourceConfig.POINTS_SOURCE_ID, points_source()))
    for layer in point_layers():
        store.dispatch(add_layer(layer))

    logger.info(f"[ACTION] Seeded map: {store.get_state().map!r}")


# =============================================================================
# RANDOM POINTS
# =============================================================================


def add_random_points(
    store: Store,
    count: int = RandomPointConfig.BATCH_SIZE,
    rng: random.Random | None = None,
) -> list[Feature]:
    """Generate count random points and add them with one ADD_FEATURES.

    Returns:
        The generated features (ids unique).
    """
    features = RandomPointGenerator(rng=rng).generate(count=count)
    store.dispatch(add_features(SourceConfig.POINTS_SOURCE_ID, features))
    logger.info(f"[ACTION] Added {len(features)} random points to '{SourceConfig.POINTS_SOURCE_ID}'")
    return features


# =============================================================================
# BOOKMARK MANAGEMENT
# =============================================================================


def bookmark_features(store: Store, features: Iterable[Feature]) -> int:
    """Add one bookmark per Point feature. Returns the number added."""
    added = 0
    for feature in features:
        if feature.lon_lat is None:
            logger.warning(f"[ACTION] Skipping non-point feature {feature.id} ({feature.geometry.type})")
            continue
        store.dispatch(add_bookmark(Bookmark.from_feature(feature)))
        added += 1
    return added


def remove_current_bookmark(store: Store) -> None:
    """Remove the bookmark under the cursor (no-op when empty)."""
    bookmark_state = store.get_state().bookmark
    logger.info(f"[ACTION] Remove current bookmark, count={bookmark_state.count}")
    store.dispatch(remove_bookmark(bookmark_state.count))


# =============================================================================
# NAVIGATION
# =============================================================================


def zoom_to(store: Store, coords: LonLat) -> None:
    """Center the map on coords at the fixed zoom-to zoom."""
    store.dispatch(set_view(center=coords, zoom=MapConfig.ZOOM_TO_ZOOM))


def next_bookmark(store: Store) -> None:
    """Move the cursor forward by one (clamped at the last bookmark)."""
    count = store.get_state().bookmark.count
    logger.info(f"[NAV] Next bookmark from count={count}")
    store.dispatch(move_slide(count + 1))


def previous_bookmark(store: Store) -> None:
    """Move the cursor back by one (clamped at the first bookmark)."""
    count = store.get_state().bookmark.count
    logger.info(f"[NAV] Previous bookmark from count={count}")
    store.dispatch(move_slide(count - 1))


def go_to_bookmark(store: Store, index: int) -> None:
    """Move the cursor to index and zoom to the bookmark it lands on."""
    store.dispatch(move_slide(index))
    current = store.get_state().bookmark.current
    if current is None:
        logger.info("[NAV] No bookmarks to go to")
        return
    zoom_to(store, current.center)


def zoom_to_current_bookmark(store: Store) -> None:
    """Zoom to the bookmark under the cursor, if any."""
    current = store.get_state().bookmark.current
    if current is not None:
        zoom_to(store, current.center)
