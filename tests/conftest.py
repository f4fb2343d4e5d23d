"""Shared test fixtures for chuk-mcp-swissalti3d."""

import json
import os
import threading
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest

from chuk_mcp_swissalti3d.errors import DownloadError

LISTING_CSV_URL = "https://ogd.example.test/ch.swisstopo.swissalti3d-abc.csv"
TILE_PREFIX = "https://data.geo.admin.ch/ch.swisstopo.swissalti3d"


def tile_url(key: str, year: int = 2019) -> str:
    """Listing-style URL for a tile key."""
    name = f"swissalti3d_{year}_{key}"
    return f"{TILE_PREFIX}/{name}/{name}_2_2056_5728.tif"


def write_tile(
    path: Path,
    fill: float = 500.0,
    spots: dict | None = None,
    size: int = 500,
    nodata: float | None = None,
) -> Path:
    """Write a single-band float32 GeoTIFF; ``spots`` maps (row, col) -> value."""
    import rasterio
    from rasterio.transform import from_origin

    data = np.full((size, size), fill, dtype=np.float32)
    for (row, col), value in (spots or {}).items():
        data[row, col] = value

    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=size,
        width=size,
        count=1,
        dtype="float32",
        crs="EPSG:2056",
        transform=from_origin(2_501_000, 1_121_000, 2.0, 2.0),
        nodata=nodata,
    ) as dst:
        dst.write(data, 1)
    return path


class FakeDownloader:
    """Downloader double serving a listing and tile bytes from memory."""

    def __init__(self, tiles: dict[str, bytes] | None = None, listing_keys: list[str] | None = None):
        self.tiles = dict(tiles or {})
        keys = listing_keys if listing_keys is not None else []
        self.listing_csv = "\n".join(tile_url(k) for k in keys) + "\n"
        self.string_calls: list[str] = []
        self.file_calls: list[tuple[str, Path]] = []
        self.fail_urls: set[str] = set()
        self.closed = False
        self._lock = threading.Lock()

    def download_as_string(self, url: str) -> str:
        with self._lock:
            self.string_calls.append(url)
        if url in self.fail_urls:
            raise DownloadError(f"Failed to download {url}: boom")
        return json.dumps({"href": LISTING_CSV_URL})

    def download_file(self, url: str, path) -> Path:
        target = Path(path)
        with self._lock:
            self.file_calls.append((url, target))
        if url in self.fail_urls:
            raise DownloadError(f"Failed to download {url}: boom")
        target.parent.mkdir(parents=True, exist_ok=True)
        part = target.parent / f".{target.name}.{threading.get_ident()}.part"
        if url == LISTING_CSV_URL:
            part.write_text(self.listing_csv, encoding="ascii")
        else:
            part.write_bytes(self.tiles[url])
        os.replace(part, target)
        return target

    def close(self) -> None:
        self.closed = True

    def tile_downloads(self) -> list[str]:
        return [url for url, _ in self.file_calls if url != LISTING_CSV_URL]


@pytest.fixture
def cache_dir(tmp_path):
    """Empty tile cache directory."""
    path = tmp_path / "swissalti3d"
    path.mkdir()
    return path


@pytest.fixture
def tile_bytes(tmp_path):
    """Factory producing GeoTIFF bytes for a tile."""

    def _make(
        fill: float = 500.0,
        spots: dict | None = None,
        size: int = 500,
        nodata: float | None = None,
    ) -> bytes:
        path = tmp_path / f"tile_{fill}_{len(spots or {})}_{size}_{nodata}.tif"
        write_tile(path, fill, spots, size, nodata)
        return path.read_bytes()

    return _make


@pytest.fixture
def write_tile_file():
    return write_tile


@pytest.fixture
def tile_url_for():
    return tile_url


@pytest.fixture
def listing_csv_url():
    return LISTING_CSV_URL


@pytest.fixture
def make_downloader():
    """Factory: FakeDownloader(tiles={url: bytes}, listing_keys=[...])."""
    return FakeDownloader


@pytest.fixture
def fake_downloader():
    return FakeDownloader()


@pytest.fixture
def mock_provider():
    """Provider double for tool tests."""
    provider = MagicMock()
    provider.can_interpolate = MagicMock(return_value=False)
    provider.describe = MagicMock(return_value="swissalti3d")
    provider.cache_status = MagicMock(
        return_value={
            "cache_dir": "/tmp/swissalti3d",
            "index_loaded": True,
            "tiles_indexed": 43590,
            "rasters_cached": 3,
            "auto_remove_temporary": False,
        }
    )
    return provider


@pytest.fixture
def mock_mcp():
    """Mock ChukMCPServer capturing registered tools by name."""
    tools = {}
    mcp = MagicMock()

    def capture_tool(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn

        return decorator

    mcp.tool = capture_tool
    mcp.tools = tools
    return mcp
