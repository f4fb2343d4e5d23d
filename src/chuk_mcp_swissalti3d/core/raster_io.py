"""
Raster I/O for swissalti3d tiles.

All functions are synchronous; callers wrap them in asyncio.to_thread().
Handles GeoTIFF decoding and within-tile pixel addressing.
"""

import logging
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..constants import ELEVATION_BAND, RESOLUTION_M, TILE_SIZE_M, TILE_SIZE_PX, ErrorMessages
from ..errors import DecodeError

logger = logging.getLogger(__name__)

# Type aliases
FloatArray = NDArray[np.floating[Any]]


# ---------------------------------------------------------------------------
# Tile decoding
# ---------------------------------------------------------------------------


def read_tile(path: str | Path, band: int = ELEVATION_BAND) -> FloatArray:
    """
    Decode a tile file into a 2D elevation array.

    Args:
        path: Local GeoTIFF path
        band: 0-based band index holding elevation

    Returns:
        float32 array indexed [row, col], row 0 being the northern edge;
        nodata pixels are NaN

    Raises:
        DecodeError: the file is missing, truncated, or not a raster
    """
    import rasterio
    from rasterio.errors import RasterioError

    try:
        with rasterio.open(path) as src:
            data = src.read(band + 1).astype(np.float32)
            nodata = src.nodata
    except (RasterioError, OSError, IndexError) as e:
        raise DecodeError(ErrorMessages.DECODE_FAILED.format(Path(path).name, e)) from e

    # Replace nodata with NaN
    if nodata is not None:
        data[data == nodata] = np.nan

    return data


# ---------------------------------------------------------------------------
# Point sampling
# ---------------------------------------------------------------------------


def pixel_for(x: int, y: int) -> tuple[int, int]:
    """
    Pixel (col, row) of projected point (x, y) within its tile.

    A tile is 500px for 1000m and stored north to south, so the row axis
    runs opposite to northing.
    """
    px = (x % TILE_SIZE_M) // RESOLUTION_M
    py = (TILE_SIZE_PX - 1) - (y % TILE_SIZE_M) // RESOLUTION_M
    return px, py


def sample_tile(raster: FloatArray, x: int, y: int) -> float:
    """
    Sample the tile raster at projected point (x, y).

    Returns NaN where the tile has no data.

    Raises:
        DecodeError: the raster is smaller than a full tile
    """
    px, py = pixel_for(x, y)
    rows, cols = raster.shape
    if py >= rows or px >= cols:
        raise DecodeError(
            ErrorMessages.DECODE_FAILED.format(
                f"tile raster {rows}x{cols}", f"pixel ({px}, {py}) out of range"
            )
        )
    return float(raster[py, px])
