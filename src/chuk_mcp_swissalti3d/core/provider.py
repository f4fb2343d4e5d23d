"""
Elevation providers: central orchestrator for swissalti3d point queries.

Resolves a WGS84 point to its LV95 tile, loads the tile through the
index / file / raster caches, and samples it. Per-query failures never
raise; they degrade to an explicit lookup status and the 0.0 sentinel.
Async methods wrap the synchronous pipeline via asyncio.to_thread().
"""

import asyncio
import logging
import math
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from ..constants import (
    DATASET_NAME,
    DEFAULT_CACHE_DIR,
    DEFAULT_TIMEOUT_S,
    USER_AGENT,
    ErrorMessages,
    LookupStatus,
)
from ..errors import DecodeError, DownloadError, IndexUnavailableError, ReprojectionError
from . import raster_io
from .downloader import Downloader
from .projection import SwissProjector, is_inside_supported_area, tile_key
from .raster_cache import RasterCache
from .tile_index import TileIndex
from .tile_store import TileStore

logger = logging.getLogger(__name__)


@dataclass
class ElevationLookup:
    """Outcome of a single point lookup."""

    elevation_m: float
    status: str
    x: int
    y: int
    tile_key: str | None = None

    @property
    def has_data(self) -> bool:
        return self.status == LookupStatus.OK


@dataclass
class MultiPointResult:
    """Result of a multi-point elevation query."""

    elevations: list[float]
    statuses: list[str]
    elevation_range: list[float]


class ElevationProvider(ABC):
    """Common contract for elevation datasets."""

    @abstractmethod
    def can_interpolate(self) -> bool:
        """Whether get_ele interpolates between samples."""

    @abstractmethod
    def get_ele(self, lat: float, lon: float) -> float:
        """Elevation in metres at (lat, lon); 0.0 when unavailable. Never raises."""

    @abstractmethod
    def release(self) -> None:
        """Free in-memory data, and temporary files if the provider owns them."""

    def describe(self) -> str:
        return str(self)


class Swissalti3dElevationProvider(ElevationProvider):
    """
    Elevation from swisstopo swissALTI3D (2 m, EPSG:2056).

    Every tile covers 1000x1000 m as a 500x500 pixel GeoTIFF. Tile URLs come
    from the dataset's CSV listing, tiles are cached on disk by filename, and
    up to RASTER_CACHE_MAX_TILES decoded tiles are kept in memory.
    """

    def __init__(
        self,
        cache_dir: str | Path = "",
        downloader: Downloader | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        auto_remove_temporary: bool = False,
    ) -> None:
        path = Path(cache_dir or DEFAULT_CACHE_DIR)
        if path.exists() and not path.is_dir():
            raise ValueError(ErrorMessages.CACHE_NOT_DIRECTORY.format(path))
        self.cache_dir = path.resolve()
        self.auto_remove_temporary = auto_remove_temporary

        self._owns_downloader = downloader is None
        self.downloader = downloader or Downloader(USER_AGENT, timeout=timeout)
        self.projector = SwissProjector()

        self.index = TileIndex(self.cache_dir, self.downloader)
        self.store = TileStore(self.cache_dir, self.downloader)
        self.rasters = RasterCache(self.index, self.store)

    def __str__(self) -> str:
        return DATASET_NAME

    def can_interpolate(self) -> bool:
        return False

    def set_auto_remove_temporary_files(self, remove: bool) -> "Swissalti3dElevationProvider":
        self.auto_remove_temporary = remove
        return self

    def release(self) -> None:
        self.rasters.clear()
        if self._owns_downloader:
            self.downloader.close()
        if self.auto_remove_temporary and self.cache_dir.exists():
            logger.info(f"Removing swissalti3d cache {self.cache_dir}")
            shutil.rmtree(self.cache_dir)

    # ------------------------------------------------------------------
    # Point queries (sync)
    # ------------------------------------------------------------------

    def get_ele(self, lat: float, lon: float) -> float:
        return self.lookup(lat, lon).elevation_m

    def lookup(self, lat: float, lon: float) -> ElevationLookup:
        """
        Elevation at (lat, lon) with an explicit status.

        ``elevation_m`` is 0.0 for every status other than ``ok``; note that
        0.0 with status ``ok`` is a genuine sample.
        """
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return ElevationLookup(0.0, LookupStatus.OUTSIDE_COVERAGE, 0, 0)

        try:
            x, y = self.projector.project(lat, lon)
        except ReprojectionError as e:
            logger.warning(str(e))
            return ElevationLookup(0.0, LookupStatus.OUTSIDE_COVERAGE, 0, 0)
        if not is_inside_supported_area(x, y):
            return ElevationLookup(0.0, LookupStatus.OUTSIDE_COVERAGE, x, y)

        key = tile_key(x, y)
        try:
            raster = self.rasters.get(key)
            if raster is None:
                logger.warning(f"No swissalti3d tile {key} for ({x}, {y})")
                return ElevationLookup(0.0, LookupStatus.NO_TILE, x, y, key)
            elevation = raster_io.sample_tile(raster, x, y)
        except IndexUnavailableError as e:
            logger.warning(f"Could not get raster data for ({x}, {y}): {e}")
            return ElevationLookup(0.0, LookupStatus.INDEX_UNAVAILABLE, x, y, key)
        except DownloadError as e:
            logger.warning(f"Could not get raster data for ({x}, {y}): {e}")
            return ElevationLookup(0.0, LookupStatus.DOWNLOAD_FAILED, x, y, key)
        except DecodeError as e:
            logger.warning(f"Could not get raster data for ({x}, {y}): {e}")
            return ElevationLookup(0.0, LookupStatus.DECODE_FAILED, x, y, key)

        if math.isnan(elevation):
            logger.debug(f"Tile {key} has no data at ({x}, {y})")
            return ElevationLookup(0.0, LookupStatus.NO_DATA, x, y, key)
        return ElevationLookup(elevation, LookupStatus.OK, x, y, key)

    # ------------------------------------------------------------------
    # Point queries (async)
    # ------------------------------------------------------------------

    async def fetch_point(self, lat: float, lon: float) -> ElevationLookup:
        """Get elevation at a single point."""
        return await asyncio.to_thread(self.lookup, lat, lon)

    async def fetch_points(self, points: list[list[float]]) -> MultiPointResult:
        """Get elevations at multiple [lat, lon] points."""
        for point in points:
            if len(point) != 2:
                raise ValueError(ErrorMessages.INVALID_POINT.format(point))

        results = await asyncio.to_thread(
            lambda: [self.lookup(lat, lon) for lat, lon in points]
        )

        valid = [r.elevation_m for r in results if r.has_data]
        if valid:
            elev_range = [min(valid), max(valid)]
        else:
            elev_range = [0.0, 0.0]

        return MultiPointResult(
            elevations=[r.elevation_m for r in results],
            statuses=[r.status for r in results],
            elevation_range=elev_range,
        )

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def cache_status(self) -> dict:
        """Counts describing the current cache state."""
        return {
            "cache_dir": str(self.cache_dir),
            "index_loaded": self.index.loaded,
            "tiles_indexed": len(self.index),
            "rasters_cached": len(self.rasters),
            "auto_remove_temporary": self.auto_remove_temporary,
        }
