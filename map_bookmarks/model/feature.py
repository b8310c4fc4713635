"""Feature - Geometry/property records and the per-source Feature Store.

Features are grouped into buckets keyed by source id. The store is an
immutable value: add() returns a new store and leaves the old one intact,
so earlier state snapshots stay valid.

Bulk insert is additive only. Caller-supplied ids are preserved and no
dedup by id happens. Adding to a source id that was never declared creates
the bucket implicitly; the outcome is tagged so callers can tell the two
cases apart.
"""

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Geometry:
    """GeoJSON-style geometry: type tag plus coordinate payload."""

    type: str
    coordinates: Any

    def to_geojson(self) -> dict[str, Any]:
        return {"type": self.type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class Feature:
    """Single feature record.

    Attributes:
        id: Caller-assigned or generated unique id
        geometry: Geometry (type + coordinates)
        properties: Property bag (read-only mapping)
    """

    id: str
    geometry: Geometry
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the property bag so held snapshots cannot be edited in place
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @property
    def lon_lat(self) -> tuple[float, float] | None:
        """(lon, lat) for Point geometries, None otherwise."""
        if self.geometry.type != "Point":
            return None
        lon, lat = self.geometry.coordinates[0], self.geometry.coordinates[1]
        return (lon, lat)

    def to_geojson(self) -> dict[str, Any]:
        """Convert to a GeoJSON Feature dict."""
        return {
            "type": "Feature",
            "id": self.id,
            "properties": dict(self.properties),
            "geometry": self.geometry.to_geojson(),
        }

    @staticmethod
    def from_geojson(data: Mapping[str, Any]) -> "Feature":
        """Create from a GeoJSON Feature dict.

        The id is taken from the top-level "id", then properties["id"],
        otherwise a uuid4 is generated.
        """
        properties = dict(data.get("properties") or {})
        if data.get("id") is not None:
            feature_id = data["id"]
        elif properties.get("id") is not None:
            feature_id = properties["id"]
        else:
            feature_id = str(uuid.uuid4())
        geometry = data["geometry"]
        return Feature(
            id=str(feature_id),
            geometry=Geometry(type=geometry["type"], coordinates=geometry["coordinates"]),
            properties=properties,
        )

    @staticmethod
    def point(lon: float, lat: float, properties: Mapping[str, Any] | None = None, id: str | None = None) -> "Feature":
        """Factory for a Point feature. Generates a uuid4 id when none is given."""
        return Feature(
            id=id if id is not None else str(uuid.uuid4()),
            geometry=Geometry(type="Point", coordinates=(lon, lat)),
            properties=properties or {},
        )


class InsertOutcome(Enum):
    """Result tag of a bulk insert."""

    INSERTED = "inserted"  # Bucket belongs to a declared source
    CREATED_IMPLICITLY = "created_implicitly"  # Source id was never declared


@dataclass(frozen=True)
class InsertResult:
    """New store plus the tagged outcome of FeatureStore.add()."""

    store: "FeatureStore"
    outcome: InsertOutcome


@dataclass(frozen=True)
class FeatureStore:
    """Immutable feature buckets keyed by source id.

    Attributes:
        buckets: source id -> tuple of features in insertion order
        implicit_sources: source ids whose bucket exists without a declared source
    """

    buckets: Mapping[str, tuple[Feature, ...]] = field(default_factory=dict)
    implicit_sources: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "buckets", MappingProxyType(dict(self.buckets)))

    def add(self, source_id: str, features: Iterable[Feature], declared: bool) -> InsertResult:
        """Append features to the bucket for source_id.

        Args:
            source_id: Target bucket
            features: Features to append (ids preserved, no dedup)
            declared: Whether source_id names a declared map source

        Returns:
            InsertResult with the new store and INSERTED / CREATED_IMPLICITLY.
        """
        buckets = dict(self.buckets)
        buckets[source_id] = buckets.get(source_id, ()) + tuple(features)

        if declared:
            return InsertResult(
                store=FeatureStore(buckets=buckets, implicit_sources=self.implicit_sources),
                outcome=InsertOutcome.INSERTED,
            )
        return InsertResult(
            store=FeatureStore(buckets=buckets, implicit_sources=self.implicit_sources | {source_id}),
            outcome=InsertOutcome.CREATED_IMPLICITLY,
        )

    def declare(self, source_id: str) -> "FeatureStore":
        """Store with source_id no longer marked implicit (same object if it was not)."""
        if source_id not in self.implicit_sources:
            return self
        return FeatureStore(buckets=self.buckets, implicit_sources=self.implicit_sources - {source_id})

    def bucket(self, source_id: str) -> tuple[Feature, ...]:
        """Features for source_id (empty tuple if no bucket exists)."""
        return self.buckets.get(source_id, ())

    def count(self, source_id: str) -> int:
        return len(self.bucket(source_id))

    def to_feature_collection(self, source_id: str) -> dict[str, Any]:
        """GeoJSON FeatureCollection for one bucket."""
        return {
            "type": "FeatureCollection",
            "features": [feature.to_geojson() for feature in self.bucket(source_id)],
        }

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self.buckets.values())
