"""Tests for map_bookmarks generators.

Tests: RandomPointGenerator
Focus: Unique ids, coordinate bounds, property bag, argument checks
"""

import random

import pytest
from hypothesis import given, settings, strategies as st

from map_bookmarks.constants import NameConfig, RandomPointConfig
from map_bookmarks.generators.random_points import RandomPointGenerator


class TestRandomPointGenerator:
    """RandomPointGenerator - random point features."""

    def test_generates_requested_count(self, rng: random.Random) -> None:
        features = RandomPointGenerator(rng=rng).generate(count=10)
        assert len(features) == 10

    def test_default_batch_size(self, rng: random.Random) -> None:
        features = RandomPointGenerator(rng=rng).generate()
        assert len(features) == RandomPointConfig.BATCH_SIZE

    def test_zero_count_returns_empty(self, rng: random.Random) -> None:
        assert RandomPointGenerator(rng=rng).generate(count=0) == []

    def test_negative_count_raises(self, rng: random.Random) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            RandomPointGenerator(rng=rng).generate(count=-1)

    def test_empty_name_pool_raises(self) -> None:
        with pytest.raises(ValueError, match="name pool"):
            RandomPointGenerator(names=[])

    def test_properties(self, rng: random.Random) -> None:
        feature = RandomPointGenerator(rng=rng).generate_one()
        assert feature.geometry.type == "Point"
        assert feature.properties["title"] == NameConfig.RANDOM_POINT_TITLE
        assert feature.properties["isRandom"] is True
        assert feature.properties["randomName"] in NameConfig.RANDOM_NAMES
        assert feature.properties["id"] == feature.id

    def test_custom_name_pool(self, rng: random.Random) -> None:
        features = RandomPointGenerator(rng=rng, names=["Only"]).generate(count=5)
        assert {f.properties["randomName"] for f in features} == {"Only"}

    def test_same_seed_same_coordinates(self) -> None:
        first = RandomPointGenerator(rng=random.Random(7)).generate(count=5)
        second = RandomPointGenerator(rng=random.Random(7)).generate(count=5)
        assert [f.lon_lat for f in first] == [f.lon_lat for f in second]


class TestRandomPointProperties:
    """Invariants over arbitrary seeds and batch sizes."""

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1), count=st.integers(min_value=0, max_value=50))
    @settings(max_examples=50)
    def test_ids_unique_and_coordinates_in_bounds(self, seed: int, count: int) -> None:
        features = RandomPointGenerator(rng=random.Random(seed)).generate(count=count)
        assert len({f.id for f in features}) == count
        for feature in features:
            lon, lat = feature.lon_lat
            assert RandomPointConfig.LON_MIN <= lon <= RandomPointConfig.LON_MAX
            assert RandomPointConfig.LAT_MIN <= lat <= RandomPointConfig.LAT_MAX
