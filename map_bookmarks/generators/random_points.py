"""RandomPointGenerator - Synthesizes random point features for the live layer.

Points are placed uniformly over the whole planet (unbounded, not biased
toward landmass). Each feature gets a fresh uuid4 id, and the id is mirrored
in properties so the renderer tooltip can show it.
"""

import logging
import random
import uuid
from collections.abc import Sequence

from map_bookmarks.constants import NameConfig, RandomPointConfig
from map_bookmarks.model.feature import Feature, Geometry

logger = logging.getLogger(__name__)


class RandomPointGenerator:
    """Generates random Point features.

    Example:
        generator = RandomPointGenerator(rng=random.Random(42))
        features = generator.generate(count=10)
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        names: Sequence[str] = NameConfig.RANDOM_NAMES,
    ) -> None:
        """Initialize generator.

        Args:
            rng: Random source (fresh unseeded random.Random when None)
            names: Label pool for the randomName property
        """
        if not names:
            raise ValueError("Random name pool must not be empty")
        self.rng = rng if rng is not None else random.Random()
        self.names = list(names)

    def random_lon_lat(self) -> tuple[float, float]:
        """Uniform (lon, lat) somewhere on the planet."""
        lon = self.rng.uniform(RandomPointConfig.LON_MIN, RandomPointConfig.LON_MAX)
        lat = self.rng.uniform(RandomPointConfig.LAT_MIN, RandomPointConfig.LAT_MAX)
        return lon, lat

    def generate_one(self) -> Feature:
        feature_id = str(uuid.uuid4())
        lon, lat = self.random_lon_lat()
        return Feature(
            id=feature_id,
            geometry=Geometry(type="Point", coordinates=(lon, lat)),
            properties={
                "title": NameConfig.RANDOM_POINT_TITLE,
                "isRandom": True,
                "randomName": self.rng.choice(self.names),
                "id": feature_id,
            },
        )

    def generate(self, count: int = RandomPointConfig.BATCH_SIZE) -> list[Feature]:
        """Generate count features with unique ids."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        features = [self.generate_one() for _ in range(count)]
        logger.info(f"[GEN] Generated {len(features)} random points")
        return features
