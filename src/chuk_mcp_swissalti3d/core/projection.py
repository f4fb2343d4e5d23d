"""
LV95 projection helpers: reprojection, coverage test, and tile keys.
"""

import math

from ..constants import (
    DATASET_CRS,
    SOURCE_CRS,
    TILE_KEY_FIELD,
    TILE_SIZE_M,
    X_RANGE,
    Y_RANGE,
    ErrorMessages,
)
from ..errors import ReprojectionError


class SwissProjector:
    """Projects WGS84 (lat, lon) into integer EPSG:2056 (x, y).

    The transformer is built once at construction and reused for every
    point; pyproj transformers are safe to share between threads.
    """

    def __init__(self, src_crs: str = SOURCE_CRS, dst_crs: str = DATASET_CRS) -> None:
        from pyproj import Transformer
        from pyproj.exceptions import CRSError

        try:
            self._transformer = Transformer.from_crs(src_crs, dst_crs, always_xy=True)
        except CRSError as e:
            raise ReprojectionError(ErrorMessages.UNKNOWN_CRS.format(src_crs, dst_crs, e)) from e

    def project(self, lat: float, lon: float) -> tuple[int, int]:
        """Project a geographic point, truncating towards zero."""
        x, y = self._transformer.transform(lon, lat)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ReprojectionError(ErrorMessages.NOT_PROJECTABLE.format(lat, lon))
        return int(x), int(y)


def is_inside_supported_area(x: int, y: int) -> bool:
    """Whether (x, y) lies within the dataset's coverage rectangle (inclusive)."""
    return X_RANGE[0] <= x <= X_RANGE[1] and Y_RANGE[0] <= y <= Y_RANGE[1]


def tile_key(x: int, y: int) -> str:
    """Key of the 1 km tile containing (x, y), e.g. ``"2501-1120"``."""
    return f"{x // TILE_SIZE_M}-{y // TILE_SIZE_M}"


def tile_key_from_url(url: str) -> str | None:
    """
    Extract the tile key embedded in a tile URL or filename.

    ``.../swissalti3d_2019_2501-1120_2_2056_5728.tif`` gives ``"2501-1120"``.
    Returns None when the filename does not follow the naming scheme.
    """
    filename = url.rsplit("/", 1)[-1]
    parts = filename.split("_")
    if len(parts) <= TILE_KEY_FIELD:
        return None
    return parts[TILE_KEY_FIELD]
