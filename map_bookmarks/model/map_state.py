"""MapViewState - Declarative map view: center, zoom, sources, layers, features.

Pure value, replaced wholesale on every update by the map reducer.

Source and layer descriptors follow the Mapbox GL style specification that
the renderer consumes. from_dict()/to_dict() accept and produce the
camelCase keys of that spec (tileSize, clusterRadius).

Referential integrity is NOT enforced here: layers may name a source that
does not exist and layer ids may repeat. Use duplicate_layer_ids(),
dangling_layers() and undeclared_feature_sources() to detect those cases.
"""

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from map_bookmarks.constants import MapConfig
from map_bookmarks.model.feature import FeatureStore

# Internal geometry uses (lon, lat) to match GeoJSON/Pydeck conventions
LonLat = tuple[float, float]


@dataclass(frozen=True)
class SourceDescriptor:
    """Data source for layers.

    Attributes:
        type: "raster" or "geojson"
        tiles: Tile URL templates (raster sources)
        data: Inline GeoJSON payload (geojson sources)
        tile_size: Raster tile size in px
        cluster_radius: Cluster radius in px (geojson sources)
    """

    type: str
    tiles: tuple[str, ...] | None = None
    data: Mapping[str, Any] | None = None
    tile_size: int | None = None
    cluster_radius: int | None = None

    @staticmethod
    def from_dict(descriptor: Mapping[str, Any]) -> "SourceDescriptor":
        if "type" not in descriptor:
            raise ValueError(f"Source descriptor requires 'type': {dict(descriptor)}")
        tiles = descriptor.get("tiles")
        return SourceDescriptor(
            type=descriptor["type"],
            tiles=tuple(tiles) if tiles is not None else None,
            data=descriptor.get("data"),
            tile_size=descriptor.get("tileSize"),
            cluster_radius=descriptor.get("clusterRadius"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        if self.tiles is not None:
            result["tiles"] = list(self.tiles)
        if self.data is not None:
            result["data"] = self.data
        if self.tile_size is not None:
            result["tileSize"] = self.tile_size
        if self.cluster_radius is not None:
            result["clusterRadius"] = self.cluster_radius
        return result


@dataclass(frozen=True)
class LayerDescriptor:
    """How to draw a source.

    Attributes:
        id: Layer id (uniqueness not enforced)
        source: Source id this layer reads from
        type: Layer type ("raster", "circle", "symbol"); None lets the renderer infer it
        paint: Paint properties (e.g. "circle-color")
        layout: Layout properties (e.g. "text-field")
        filter: Filter expression (e.g. ["has", "point_count"])
    """

    id: str
    source: str
    type: str | None = None
    paint: Mapping[str, Any] | None = None
    layout: Mapping[str, Any] | None = None
    filter: list[Any] | None = None

    @staticmethod
    def from_dict(descriptor: Mapping[str, Any]) -> "LayerDescriptor":
        for key in ("id", "source"):
            if key not in descriptor:
                raise ValueError(f"Layer descriptor requires '{key}': {dict(descriptor)}")
        return LayerDescriptor(
            id=descriptor["id"],
            source=descriptor["source"],
            type=descriptor.get("type"),
            paint=descriptor.get("paint"),
            layout=descriptor.get("layout"),
            filter=descriptor.get("filter"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "source": self.source}
        for key in ("type", "paint", "layout", "filter"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


@dataclass(frozen=True)
class MapViewState:
    """Map view snapshot.

    Attributes:
        center: (lon, lat); ranges are not validated
        zoom: Zoom level
        sources: source id -> SourceDescriptor
        layers: Layer descriptors in draw order
        features: Feature buckets keyed by source id
    """

    center: LonLat = (MapConfig.START_CENTER_LON, MapConfig.START_CENTER_LAT)
    zoom: float = MapConfig.START_ZOOM
    sources: Mapping[str, SourceDescriptor] = field(default_factory=dict)
    layers: tuple[LayerDescriptor, ...] = ()
    features: FeatureStore = field(default_factory=FeatureStore)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", tuple(self.center))
        object.__setattr__(self, "sources", MappingProxyType(dict(self.sources)))
        object.__setattr__(self, "layers", tuple(self.layers))

    @property
    def lon(self) -> float:
        return self.center[0]

    @property
    def lat(self) -> float:
        return self.center[1]

    def layer_ids(self) -> list[str]:
        """Layer ids in draw order (duplicates included)."""
        return [layer.id for layer in self.layers]

    def duplicate_layer_ids(self) -> set[str]:
        """Layer ids that appear more than once."""
        return {layer_id for layer_id, n in Counter(self.layer_ids()).items() if n > 1}

    def dangling_layers(self) -> list[LayerDescriptor]:
        """Layers whose source is not a declared source."""
        return [layer for layer in self.layers if layer.source not in self.sources]

    def undeclared_feature_sources(self) -> set[str]:
        """Feature bucket ids that do not name a declared source."""
        return {source_id for source_id in self.features.buckets if source_id not in self.sources}

    def __repr__(self) -> str:
        return (
            f"MapViewState(center={self.center}, zoom={self.zoom}, "
            f"sources={list(self.sources)}, layers={self.layer_ids()}, "
            f"features={len(self.features)})"
        )
