"""Shared pytest fixtures for map_bookmarks tests.

Provides stores, bookmark lists and seeded random sources.
All fixtures use explicit values with documented rationale.

COORDINATE SYSTEM:
    (lon, lat) everywhere, matching GeoJSON and Pydeck.
"""

import random

import pytest

from map_bookmarks.core.store import Store
from map_bookmarks.model.bookmark import Bookmark, BookmarkState
from map_bookmarks.model.feature import Feature
from map_bookmarks.ui.actions import seed_map


def make_bookmarks(n: int) -> tuple[Bookmark, ...]:
    """n bookmarks spaced 10 degrees apart along the equator."""
    return tuple(Bookmark(center=(10.0 * i, 0.0), zoom=5, label=f"B{i}") for i in range(n))


@pytest.fixture
def three_bookmarks() -> tuple[Bookmark, ...]:
    return make_bookmarks(3)


@pytest.fixture
def bookmark_state_three(three_bookmarks: tuple[Bookmark, ...]) -> BookmarkState:
    """Three bookmarks, cursor on the first."""
    return BookmarkState(bookmarks=three_bookmarks, count=0)


@pytest.fixture
def store() -> Store:
    """Empty store with default slices."""
    return Store()


@pytest.fixture
def store_with_bookmarks(bookmark_state_three: BookmarkState) -> Store:
    """Store with three bookmarks and count=0."""
    return Store(bookmark_state=bookmark_state_three)


@pytest.fixture
def seeded_store() -> Store:
    """Store after the startup seeding (view, osm + points sources, 4 layers)."""
    store = Store()
    seed_map(store)
    return store


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def minneapolis() -> Feature:
    """Point feature near Minneapolis with a caller-assigned id."""
    return Feature.point(lon=-93.26, lat=44.98, properties={"randomName": "Mila Mero"}, id="mpls")
