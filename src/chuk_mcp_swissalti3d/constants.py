"""
Constants for chuk-mcp-swissalti3d server.

All magic strings, dataset geometry, and configuration values live here.
"""


class ServerConfig:
    NAME = "chuk-mcp-swissalti3d"
    VERSION = "0.1.0"
    DESCRIPTION = "swissALTI3D point elevation MCP Server"


class EnvVar:
    CACHE_DIR = "SWISSALTI3D_CACHE_DIR"
    AUTO_REMOVE = "SWISSALTI3D_AUTO_REMOVE"
    TIMEOUT_S = "SWISSALTI3D_TIMEOUT_S"
    MCP_STDIO = "MCP_STDIO"


class LookupStatus:
    OK = "ok"
    OUTSIDE_COVERAGE = "outside_coverage"
    NO_TILE = "no_tile"
    INDEX_UNAVAILABLE = "index_unavailable"
    DOWNLOAD_FAILED = "download_failed"
    DECODE_FAILED = "decode_failed"
    NO_DATA = "no_data"


ALL_LOOKUP_STATUSES = [
    LookupStatus.OK,
    LookupStatus.OUTSIDE_COVERAGE,
    LookupStatus.NO_TILE,
    LookupStatus.INDEX_UNAVAILABLE,
    LookupStatus.DOWNLOAD_FAILED,
    LookupStatus.DECODE_FAILED,
    LookupStatus.NO_DATA,
]

# ---------------------------------------------------------------------------
# Dataset geometry (EPSG:2056, metres)
# ---------------------------------------------------------------------------

DATASET_NAME = "swissalti3d"
SOURCE_CRS = "EPSG:4326"
DATASET_CRS = "EPSG:2056"

# Closed intervals of supported projected coordinates
X_RANGE = (2_420_000, 2_900_000)
Y_RANGE = (1_000_000, 1_350_000)

TILE_SIZE_M = 1000
RESOLUTION_M = 2
TILE_SIZE_PX = TILE_SIZE_M // RESOLUTION_M

# Dataset bands are 0-based; rasterio bands are 1-based
ELEVATION_BAND = 0

# Tile filenames look like swissalti3d_2019_2501-1120_2_2056_5728.tif
TILE_KEY_FIELD = 2

# Full flush once the in-memory raster cache grows past this many tiles
RASTER_CACHE_MAX_TILES = 100

# ---------------------------------------------------------------------------
# Remote listing and local cache
# ---------------------------------------------------------------------------

TILING_SCHEME_URL = (
    "https://ogd.swisstopo.admin.ch/services/swiseld/services/assets/"
    "ch.swisstopo.swissalti3d/search?format=image/tiff;%20application=geotiff;"
    "%20profile=cloud-optimized&resolution=2.0&srid=2056&state=current&csv=true"
)
MAPPING_FILENAME = "mappings.csv"
DEFAULT_CACHE_DIR = "/tmp/swissalti3d"

DEFAULT_TIMEOUT_S = 10.0
USER_AGENT = "chuk-mcp-swissalti3d"
DOWNLOAD_CHUNK_BYTES = 64 * 1024

MAX_POINTS = 1000

DATASET_INFO: dict = {
    "id": DATASET_NAME,
    "name": "swisstopo swissALTI3D",
    "resolution_m": RESOLUTION_M,
    "coverage": "Switzerland and Liechtenstein",
    "coverage_bounds_lv95": [X_RANGE[0], Y_RANGE[0], X_RANGE[1], Y_RANGE[1]],
    "horizontal_crs": DATASET_CRS,
    "vertical_unit": "metres",
    "tile_size_m": TILE_SIZE_M,
    "tile_size_px": TILE_SIZE_PX,
    "interpolation": False,
    "lookup_statuses": ALL_LOOKUP_STATUSES,
    "license": "swisstopo OGD",
    "access_url": "https://www.swisstopo.admin.ch/en/geodata/height/alti3d.html",
}


class ErrorMessages:
    CACHE_NOT_DIRECTORY = "Cache path has to be a directory: {}"
    UNKNOWN_CRS = "Could not resolve coordinate systems {} -> {}: {}"
    NOT_PROJECTABLE = "Point ({}, {}) has no finite projection"
    LISTING_FETCH_FAILED = "Could not fetch swissalti3d tile listing: {}"
    LISTING_MALFORMED = "Tile listing response has no CSV href: {}"
    LISTING_READ_FAILED = "Could not read cached tile listing {}: {}"
    DOWNLOAD_FAILED = "Failed to download {}: {}"
    DECODE_FAILED = "Can't decode {}: {}"
    INVALID_POINT = "Point must be [lat, lon], got {}"
    TOO_MANY_POINTS = "Too many points ({}), maximum is {}"
    EMPTY_POINTS = "At least one point is required"


class SuccessMessages:
    POINT_ELEVATION = "Elevation at point: {:.1f}m"
    POINT_NO_DATA = "No elevation available ({})"
    POINTS_ELEVATION = "Retrieved elevation for {} points ({} with data)"
    STATUS = "swissalti3d MCP Server v{} ({} tiles indexed, {} rasters cached)"
    DESCRIBE = "Dataset: {} ({}m, {})"
