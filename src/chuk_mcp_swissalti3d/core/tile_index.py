"""
Tile index: maps tile keys to swissalti3d download URLs.

Tile URLs embed the acquisition year, so they cannot be derived from
coordinates alone. The full listing is fetched once, cached as
``mappings.csv`` in the cache directory, and kept in memory for the
lifetime of the index.
"""

import json
import logging
import threading
from pathlib import Path

from ..constants import MAPPING_FILENAME, TILING_SCHEME_URL, ErrorMessages
from ..errors import DownloadError, IndexUnavailableError
from .downloader import Downloader
from .projection import tile_key_from_url

logger = logging.getLogger(__name__)


def parse_tile_listing(csv_text: str) -> dict[str, str]:
    """
    Parse the listing CSV into a key -> URL mapping.

    Each line is a tile URL such as
    ``https://data.geo.admin.ch/ch.swisstopo.swissalti3d/swissalti3d_2019_2501-1120/swissalti3d_2019_2501-1120_2_2056_5728.tif``.
    Lines without a path separator or with an unexpected filename are skipped.
    If a key appears twice the later line wins.
    """
    mapping: dict[str, str] = {}
    for raw in csv_text.splitlines():
        line = raw.strip()
        if "/" not in line:
            continue
        key = tile_key_from_url(line)
        if key is None:
            continue
        mapping[key] = line
    return mapping


def extract_csv_href(response: str) -> str:
    """Pull the CSV URL out of the listing service's ``{"href": ...}`` reply."""
    try:
        href = json.loads(response)["href"]
    except (ValueError, KeyError, TypeError) as e:
        raise IndexUnavailableError(ErrorMessages.LISTING_MALFORMED.format(response[:200])) from e
    if not isinstance(href, str) or not href:
        raise IndexUnavailableError(ErrorMessages.LISTING_MALFORMED.format(response[:200]))
    return href


class TileIndex:
    """Lazily loaded, immutable tile key -> URL mapping."""

    def __init__(
        self,
        cache_dir: Path,
        downloader: Downloader,
        listing_url: str = TILING_SCHEME_URL,
    ) -> None:
        self.cache_dir = cache_dir
        self.downloader = downloader
        self.listing_url = listing_url
        self._mapping: dict[str, str] | None = None
        self._lock = threading.Lock()

    @property
    def mapping_file(self) -> Path:
        return self.cache_dir / MAPPING_FILENAME

    @property
    def loaded(self) -> bool:
        return self._mapping is not None

    def __len__(self) -> int:
        return len(self._mapping) if self._mapping is not None else 0

    def resolve_url(self, key: str) -> str | None:
        """URL of the tile with ``key``, or None if the dataset has no such tile."""
        return self._load().get(key)

    def _load(self) -> dict[str, str]:
        mapping = self._mapping
        if mapping is not None:
            return mapping
        with self._lock:
            if self._mapping is None:
                self._mapping = self._fetch_mapping()
                logger.info(f"Loaded {len(self._mapping)} swissalti3d tile URLs")
            return self._mapping

    def _fetch_mapping(self) -> dict[str, str]:
        mapping_file = self.mapping_file
        if not mapping_file.exists():
            try:
                response = self.downloader.download_as_string(self.listing_url)
                csv_url = extract_csv_href(response)
                self.downloader.download_file(csv_url, mapping_file)
            except DownloadError as e:
                raise IndexUnavailableError(ErrorMessages.LISTING_FETCH_FAILED.format(e)) from e

        try:
            csv_text = mapping_file.read_text(encoding="ascii", errors="replace")
        except OSError as e:
            raise IndexUnavailableError(
                ErrorMessages.LISTING_READ_FAILED.format(mapping_file, e)
            ) from e
        return parse_tile_listing(csv_text)
