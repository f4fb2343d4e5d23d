"""
In-memory cache of decoded tile rasters.

Misses go through the tile index and tile store, then the decoder.
Memory is bounded with a full flush: once more than
RASTER_CACHE_MAX_TILES rasters are held, the next insert clears the whole
cache first. This trades periodic cold misses for zero bookkeeping; an LRU
would smooth the misses but is not what this cache does.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from ..constants import RASTER_CACHE_MAX_TILES
from . import raster_io
from .raster_io import FloatArray
from .tile_index import TileIndex
from .tile_store import TileStore

logger = logging.getLogger(__name__)


class RasterCache:
    """Tile key -> decoded raster, bounded by full-clear eviction."""

    def __init__(
        self,
        index: TileIndex,
        store: TileStore,
        decode: Callable[[Path], FloatArray] = raster_io.read_tile,
        max_tiles: int = RASTER_CACHE_MAX_TILES,
    ) -> None:
        self.index = index
        self.store = store
        self.decode = decode
        self.max_tiles = max_tiles
        self._rasters: dict[str, FloatArray] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rasters)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._rasters

    def get(self, key: str) -> FloatArray | None:
        """
        Decoded raster for ``key``, or None if the dataset has no such tile.

        Raises:
            IndexUnavailableError: the tile listing could not be loaded
            DownloadError: the tile file could not be fetched
            DecodeError: the tile file could not be decoded
        """
        with self._lock:
            raster = self._rasters.get(key)
        if raster is not None:
            return raster

        tile_url = self.index.resolve_url(key)
        if tile_url is None:
            return None

        path = self.store.ensure_local(key, tile_url)
        raster = self.decode(path)
        self.put(key, raster)
        return raster

    def put(self, key: str, raster: FloatArray) -> None:
        with self._lock:
            if key in self._rasters:
                return
            if len(self._rasters) > self.max_tiles:
                logger.debug("Clearing in memory raster cache")
                self._rasters.clear()
            self._rasters[key] = raster

    def clear(self) -> None:
        with self._lock:
            self._rasters.clear()
