"""Tests for reprojection, coverage bounds, and tile key derivation."""

from unittest.mock import MagicMock, patch

import pytest

from chuk_mcp_swissalti3d.core.projection import (
    SwissProjector,
    is_inside_supported_area,
    tile_key,
    tile_key_from_url,
)
from chuk_mcp_swissalti3d.errors import ReprojectionError


class TestSwissProjector:
    def test_dent_de_morcles(self):
        # gdaltransform: 2571970 1116492 <-> 7.07552341505788 46.1992990818056
        x, y = SwissProjector().project(46.1992990818056, 7.07552341505788)
        assert x == pytest.approx(2_571_970, abs=1)
        assert y == pytest.approx(1_116_492, abs=1)

    def test_returns_ints(self):
        x, y = SwissProjector().project(46.5, 7.5)
        assert isinstance(x, int)
        assert isinstance(y, int)

    def test_truncates_instead_of_rounding(self):
        from pyproj import Transformer

        x_f, y_f = Transformer.from_crs("EPSG:4326", "EPSG:2056", always_xy=True).transform(7.5, 46.5)
        x, y = SwissProjector().project(46.5, 7.5)
        assert x == int(x_f)
        assert y == int(y_f)

    def test_transformer_built_once(self):
        from pyproj import Transformer

        with patch.object(Transformer, "from_crs", wraps=Transformer.from_crs) as from_crs:
            projector = SwissProjector()
            for i in range(50):
                projector.project(46.0 + i * 0.01, 7.0)

        from_crs.assert_called_once()

    def test_far_outside_switzerland_projects(self):
        x, y = SwissProjector().project(60.0000001, 16)
        assert not is_inside_supported_area(x, y)

    def test_infinite_result_raises(self):
        projector = SwissProjector()
        projector._transformer = MagicMock()
        projector._transformer.transform.return_value = (float("inf"), 1_200_000.0)
        with pytest.raises(ReprojectionError, match="finite"):
            projector.project(46.5, 7.5)

    def test_unknown_crs_raises(self):
        with pytest.raises(ReprojectionError):
            SwissProjector(dst_crs="EPSG:999999")


class TestIsInsideSupportedArea:
    def test_lower_corner_inclusive(self):
        assert is_inside_supported_area(2_420_000, 1_000_000) is True

    def test_upper_corner_inclusive(self):
        assert is_inside_supported_area(2_900_000, 1_350_000) is True

    def test_just_west(self):
        assert is_inside_supported_area(2_419_999, 1_000_000) is False

    def test_just_south(self):
        assert is_inside_supported_area(2_420_000, 999_999) is False

    def test_just_east(self):
        assert is_inside_supported_area(2_900_001, 1_200_000) is False

    def test_just_north(self):
        assert is_inside_supported_area(2_600_000, 1_350_001) is False

    def test_centre(self):
        assert is_inside_supported_area(2_600_000, 1_200_000) is True


class TestTileKey:
    def test_format(self):
        assert tile_key(2_501_970, 1_120_492) == "2501-1120"

    def test_same_tile_same_key(self):
        corners = [(2_501_000, 1_120_000), (2_501_999, 1_120_999), (2_501_500, 1_120_001)]
        assert {tile_key(x, y) for x, y in corners} == {"2501-1120"}

    def test_neighbouring_tiles_differ(self):
        assert tile_key(2_501_999, 1_120_000) != tile_key(2_502_000, 1_120_000)
        assert tile_key(2_501_000, 1_120_999) != tile_key(2_501_000, 1_121_000)


class TestTileKeyFromUrl:
    def test_listing_url(self, tile_url_for):
        url = tile_url_for("2501-1120")
        assert tile_key_from_url(url) == "2501-1120"

    def test_matches_derived_key(self, tile_url_for):
        key = tile_key(2_501_970, 1_120_492)
        assert tile_key_from_url(tile_url_for(key)) == key

    def test_bare_filename(self):
        assert tile_key_from_url("swissalti3d_2021_2600-1200_2_2056_5728.tif") == "2600-1200"

    def test_malformed_filename(self):
        assert tile_key_from_url("https://example.test/readme.txt") is None
