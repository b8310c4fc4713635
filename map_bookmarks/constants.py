"""Configuration constants for Map Bookmarks.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    MapConfig: Default map view parameters
    SourceConfig: Source ids and tile endpoints
    StyleConfig: Layer paints, colors and layouts
    NameConfig: Random name pool for generated points
    RandomPointConfig: Random point batch size and coordinate bounds
"""


class AppConfig:
    """UI application settings."""

    TITLE = "Map Bookmarks - Zoom Between Saved Views"
    ICON = "🔖"
    LAYOUT = "wide"


class MapConfig:
    """Default map view parameters."""

    # Initial center for program start: Minnesota, USA (lon, lat)
    START_CENTER_LON = -93.0
    START_CENTER_LAT = 45.0
    START_ZOOM = 5

    # Zoom used by zoom_to() when jumping to a bookmark
    ZOOM_TO_ZOOM = 5

    # Zoom stored on bookmarks created from point features
    BOOKMARK_ZOOM = 5

    # Chart height in pixels
    HEIGHT_PX = 600

    # Ring drawn around the current bookmark
    BOOKMARK_MARKER_RADIUS_PX = 12


class SourceConfig:
    """Source ids and tile endpoints."""

    OSM_SOURCE_ID = "osm"
    POINTS_SOURCE_ID = "points"

    # Standard OpenStreetMap tiles on three subdomains for parallel loading
    OSM_TILES = [
        "https://a.tile.openstreetmap.org/{z}/{x}/{y}.png",
        "https://b.tile.openstreetmap.org/{z}/{x}/{y}.png",
        "https://c.tile.openstreetmap.org/{z}/{x}/{y}.png",
    ]
    OSM_TILE_SIZE = 256
    OSM_ATTRIBUTION = '© <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'

    POINTS_CLUSTER_RADIUS = 50

    RASTER = "raster"
    GEOJSON = "geojson"


class StyleConfig:
    """Layer paints, colors and layouts for the seeded map."""

    CLUSTER_COLOR = "#feb24c"
    CLUSTER_STROKE_COLOR = "#f03b20"
    POINT_COLOR = "#756bb1"
    POINT_RADIUS = 3

    # Interval stops: (min point_count, radius px)
    CLUSTER_RADIUS_STOPS = [[0, 5], [2, 8], [5, 13], [10, 21]]
    CLUSTER_RADIUS_DEFAULT = 3

    LABEL_FONT = ["Arial"]
    LABEL_SIZE = 10
    LABEL_COLOR = [40, 40, 40, 255]

    # Fallbacks when a layer omits paint properties
    DEFAULT_CIRCLE_RADIUS = 5
    DEFAULT_CIRCLE_COLOR = [0, 0, 0, 255]

    # Radius in px is converted to meters with radius_units="pixels" in pydeck
    RADIUS_UNITS = "pixels"

    HIGHLIGHT_COLOR = [255, 255, 0, 180]


class NameConfig:
    """Random names to give generated points more content.

    Source: http://listofrandomnames.com/
    """

    RANDOM_NAMES = [
        "Riva Ristau",
        "Reena Rodgers",
        "Brent Borgia",
        "Annemarie Asher",
        "Solomon Salgado",
        "Tatiana Treece",
        "Albina Auclair",
        "Breanne Blind",
        "Carmina Croney",
        "Mila Mero",
        "Lorita Laux",
    ]

    RANDOM_POINT_TITLE = "Random Point"


class RandomPointConfig:
    """Random point batch size and coordinate bounds (whole planet, unbounded)."""

    BATCH_SIZE = 10

    LON_MIN = -180.0
    LON_MAX = 180.0
    LAT_MIN = -90.0
    LAT_MAX = 90.0


assert RandomPointConfig.LON_MIN < RandomPointConfig.LON_MAX, "Longitude bounds must be ordered"
assert RandomPointConfig.LAT_MIN < RandomPointConfig.LAT_MAX, "Latitude bounds must be ordered"
assert len(NameConfig.RANDOM_NAMES) > 0, "Random name pool must not be empty"
