"""MapRenderer - Pydeck rendering of MapViewState.

Turns the declarative map slice into a pdk.Deck:
- Raster sources/layers become a Mapbox GL style dict (map_style)
- "circle" layers on geojson sources become ScatterplotLayers
- Layers with a "text-field" layout become TextLayers
- The current bookmark is drawn as a marker on top

Why map_style dict for raster tiles?
- pydeck's TileLayer fetches tiles but needs a renderSubLayers callback
  (JavaScript) to draw them, which pydeck doesn't expose to Python
- deck.gl natively understands the style-spec format for raster tiles
- Requires map_provider="mapbox" in pdk.Deck() (works without API key for raster)

No clustering is computed. Layers filtered on cluster properties
(["has", "point_count"]) therefore render empty and every point is drawn
by the unclustered layer.

Key conventions:
- Uses [lon, lat] coordinate order (GeoJSON standard)
- Colors as RGBA lists [R, G, B, A] (0-255)
- Data prepared as list[dict] for GPU streaming
"""

import logging
import re
from collections import Counter
from collections.abc import Mapping
from typing import Any

import pydeck as pdk

from map_bookmarks.constants import MapConfig, SourceConfig, StyleConfig
from map_bookmarks.model.bookmark import Bookmark
from map_bookmarks.model.feature import Feature
from map_bookmarks.model.map_state import LayerDescriptor, MapViewState, SourceDescriptor

logger = logging.getLogger(__name__)

_TEMPLATE_KEY = re.compile(r"\{([^}]+)\}")


# =============================================================================
# STYLE HELPERS
# =============================================================================


def hex_to_rgba(color: str, alpha: int = 255) -> list[int]:
    """Convert '#rrggbb' (or '#rgb') to [R, G, B, A]."""
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"Unsupported color '{color}'")
    return [int(value[i : i + 2], 16) for i in (0, 2, 4)] + [alpha]


def matches_filter(expression: list[Any] | None, properties: Mapping[str, Any]) -> bool:
    """Evaluate a style-spec filter against feature properties.

    Supported: ["has", key], ["!has", key], ["==", key, value], ["!=", key, value].
    A missing filter matches everything; unknown operators match nothing.
    """
    if not expression:
        return True
    operator, key = expression[0], expression[1]
    if operator == "has":
        return key in properties
    if operator == "!has":
        return key not in properties
    if operator == "==":
        return properties.get(key) == expression[2]
    if operator == "!=":
        return properties.get(key) != expression[2]
    logger.warning(f"[MAP] Unsupported filter operator '{operator}'")
    return False


def resolve_radius(value: Any, properties: Mapping[str, Any]) -> float:
    """Resolve a circle-radius paint value for one feature.

    Numbers pass through. Interval functions pick the radius of the highest
    stop whose minimum is <= the property value, else the default.
    """
    if value is None:
        return StyleConfig.DEFAULT_CIRCLE_RADIUS
    if isinstance(value, (int, float)):
        return value

    default = value.get("default", StyleConfig.DEFAULT_CIRCLE_RADIUS)
    prop = properties.get(value.get("property"))
    if prop is None:
        return default
    radius = default
    for minimum, stop_radius in value.get("stops", []):
        if prop >= minimum:
            radius = stop_radius
    return radius


def format_text_field(template: str, properties: Mapping[str, Any]) -> str | None:
    """Fill '{key}' placeholders from properties. None if a key is missing."""
    missing = [key for key in _TEMPLATE_KEY.findall(template) if key not in properties]
    if missing:
        return None
    return _TEMPLATE_KEY.sub(lambda match: str(properties[match.group(1)]), template)


def infer_layer_type(layer: LayerDescriptor, source: SourceDescriptor) -> str:
    """Explicit layer type, otherwise derived from layout and source type."""
    if layer.type:
        return layer.type
    if layer.layout and "text-field" in layer.layout:
        return "symbol"
    if source.type == SourceConfig.RASTER:
        return "raster"
    return "circle"


# =============================================================================
# RENDERER
# =============================================================================


class MapRenderer:
    """Renders a MapViewState on a Pydeck map.

    Example:
        renderer = MapRenderer()
        deck = renderer.render(map_state=store.get_state().map)
        st.pydeck_chart(deck)
    """

    def __init__(self, pitch: float = 0.0, bearing: float = 0.0) -> None:
        self.pitch = pitch
        self.bearing = bearing

    def get_view_state(self, map_state: MapViewState) -> pdk.ViewState:
        """Create Pydeck ViewState from the map slice."""
        return pdk.ViewState(
            longitude=map_state.lon,
            latitude=map_state.lat,
            zoom=map_state.zoom,
            pitch=self.pitch,
            bearing=self.bearing,
        )

    def build_map_style(self, map_state: MapViewState) -> dict[str, Any] | None:
        """Mapbox GL style dict for raster layers, None when there are none."""
        style_sources: dict[str, Any] = {}
        style_layers: list[dict[str, Any]] = []

        for pydeck_id, layer in self._unique_ids(map_state.layers):
            source = map_state.sources.get(layer.source)
            if source is None or infer_layer_type(layer, source) != "raster":
                continue
            entry = {"type": "raster", "tiles": list(source.tiles or ())}
            entry["tileSize"] = source.tile_size or SourceConfig.OSM_TILE_SIZE
            if layer.source == SourceConfig.OSM_SOURCE_ID:
                entry["attribution"] = SourceConfig.OSM_ATTRIBUTION
            style_sources[layer.source] = entry
            style_layers.append({"id": pydeck_id, "type": "raster", "source": layer.source})

        if not style_layers:
            return None
        return {"version": 8, "sources": style_sources, "layers": style_layers}

    def render(self, map_state: MapViewState, current_bookmark: Bookmark | None = None) -> pdk.Deck:
        """Render the complete map.

        Args:
            map_state: Map slice to draw
            current_bookmark: Bookmark to mark on top (optional)

        Returns:
            pdk.Deck object ready for display.
        """
        layers = self.create_feature_layers(map_state)
        if current_bookmark is not None:
            layers.append(self._create_bookmark_marker(current_bookmark))

        map_style = self.build_map_style(map_state)
        deck = pdk.Deck(
            map_style=None,
            map_provider="mapbox" if map_style is not None else None,
            initial_view_state=self.get_view_state(map_state),
            layers=layers,
            tooltip=self._create_tooltip_config(),
        )
        # The constructor resolves named styles only; style dicts are set directly
        deck.map_style = map_style
        return deck

    def create_feature_layers(self, map_state: MapViewState) -> list[pdk.Layer]:
        """Pydeck layers for every non-raster layer, in draw order."""
        result: list[pdk.Layer] = []
        for pydeck_id, layer in self._unique_ids(map_state.layers):
            source = map_state.sources.get(layer.source)
            if source is None:
                logger.warning(f"[MAP] Layer '{layer.id}' references unknown source '{layer.source}', skipped")
                continue

            layer_type = infer_layer_type(layer, source)
            features = map_state.features.bucket(layer.source)
            if layer_type == "circle":
                result.append(self._create_circle_layer(pydeck_id, layer, features))
            elif layer_type == "symbol":
                result.append(self._create_text_layer(pydeck_id, layer, features))
            elif layer_type != "raster":
                logger.warning(f"[MAP] Layer '{layer.id}' has unsupported type '{layer_type}', skipped")
        return result

    # =========================================================================
    # LAYER FACTORIES
    # =========================================================================

    @staticmethod
    def _unique_ids(layers: tuple[LayerDescriptor, ...]) -> list[tuple[str, LayerDescriptor]]:
        """Pair layers with pydeck ids; repeated ids get a positional suffix."""
        seen: Counter[str] = Counter()
        paired = []
        for layer in layers:
            seen[layer.id] += 1
            pydeck_id = layer.id if seen[layer.id] == 1 else f"{layer.id}-{seen[layer.id]}"
            paired.append((pydeck_id, layer))
        return paired

    @staticmethod
    def _point_rows(features: tuple[Feature, ...], layer: LayerDescriptor) -> list[dict[str, Any]]:
        rows = []
        for feature in features:
            lon_lat = feature.lon_lat
            if lon_lat is None or not matches_filter(layer.filter, feature.properties):
                continue
            rows.append({**feature.properties, "feature_id": feature.id, "position": list(lon_lat)})
        return rows

    def _create_circle_layer(self, pydeck_id: str, layer: LayerDescriptor, features: tuple[Feature, ...]) -> pdk.Layer:
        paint = layer.paint or {}
        rows = self._point_rows(features, layer)
        for row in rows:
            row["radius"] = resolve_radius(paint.get("circle-radius"), row)

        fill = paint.get("circle-color")
        stroke = paint.get("circle-stroke-color")
        return pdk.Layer(
            "ScatterplotLayer",
            rows,
            id=pydeck_id,
            get_position="position",
            get_radius="radius",
            radius_units=StyleConfig.RADIUS_UNITS,
            get_fill_color=hex_to_rgba(fill) if fill else StyleConfig.DEFAULT_CIRCLE_COLOR,
            get_line_color=hex_to_rgba(stroke) if stroke else StyleConfig.DEFAULT_CIRCLE_COLOR,
            stroked=stroke is not None,
            line_width_min_pixels=1,
            pickable=True,
            auto_highlight=True,
            highlight_color=StyleConfig.HIGHLIGHT_COLOR,
        )

    def _create_text_layer(self, pydeck_id: str, layer: LayerDescriptor, features: tuple[Feature, ...]) -> pdk.Layer:
        layout = layer.layout or {}
        template = layout.get("text-field", "")
        rows = []
        for row in self._point_rows(features, layer):
            text = format_text_field(template, row)
            if text is not None:
                rows.append({**row, "text": text})

        return pdk.Layer(
            "TextLayer",
            rows,
            id=pydeck_id,
            get_position="position",
            get_text="text",
            get_size=layout.get("text-size", StyleConfig.LABEL_SIZE),
            get_color=StyleConfig.LABEL_COLOR,
            font_family=", ".join(layout.get("text-font", StyleConfig.LABEL_FONT)),
        )

    @staticmethod
    def _create_bookmark_marker(bookmark: Bookmark) -> pdk.Layer:
        return pdk.Layer(
            "ScatterplotLayer",
            [{"position": list(bookmark.center), "randomName": bookmark.label or "Bookmark"}],
            id="current-bookmark",
            get_position="position",
            get_radius=MapConfig.BOOKMARK_MARKER_RADIUS_PX,
            radius_units=StyleConfig.RADIUS_UNITS,
            get_fill_color=[0, 0, 0, 0],
            get_line_color=hex_to_rgba(StyleConfig.CLUSTER_STROKE_COLOR),
            stroked=True,
            filled=False,
            line_width_min_pixels=2,
            pickable=False,
        )

    @staticmethod
    def _create_tooltip_config() -> dict[str, str | dict[str, str]]:
        """Create Pydeck tooltip configuration - name only."""
        return {
            "html": "<b>{randomName}</b>",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }
