"""
Tile store: keeps downloaded tile files in the cache directory.
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path

from .downloader import Downloader

logger = logging.getLogger(__name__)


class TileStore:
    """Ensures tile files exist locally, downloading each at most once."""

    def __init__(self, cache_dir: Path, downloader: Downloader) -> None:
        self.cache_dir = cache_dir
        self.downloader = downloader
        # key -> [lock, callers holding or waiting on it]
        self._locks: dict[str, list] = {}
        self._locks_guard = threading.Lock()

    def cached_tile_file(self, tile_url: str) -> Path:
        """Local path for a tile URL: its filename under the cache directory."""
        filename = tile_url.rsplit("/", 1)[-1]
        return self.cache_dir / filename

    def ensure_local(self, key: str, tile_url: str) -> Path:
        """Return the local tile file, downloading it first if needed.

        Raises:
            DownloadError: the tile could not be fetched or written
        """
        cached = self.cached_tile_file(tile_url)
        if cached.exists():
            return cached

        with self._key_lock(key):
            if not cached.exists():
                logger.info(f"Fetching tile {key} from {tile_url}")
                self.downloader.download_file(tile_url, cached)
        return cached

    @contextmanager
    def _key_lock(self, key: str):
        with self._locks_guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]
