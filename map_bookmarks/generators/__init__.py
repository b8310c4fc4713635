"""Feature generators for the live feature layer.

Provides the RandomPointGenerator for planet-wide random point features.
"""

from map_bookmarks.generators.random_points import RandomPointGenerator

__all__ = [
    "RandomPointGenerator",
]
