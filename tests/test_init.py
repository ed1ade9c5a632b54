"""Tests for the tmsdownloader package __init__ module."""

import pytest

import tmsdownloader
from tmsdownloader import InvalidBoundingBox, InvalidCoordinate, InvalidZoom, TileError


class TestErrors:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("error", [InvalidBoundingBox, InvalidZoom, InvalidCoordinate])
    def test_errors_share_base(self, error):
        """All engine errors should derive from TileError and ValueError."""
        assert issubclass(error, TileError)
        assert issubclass(error, ValueError)


class TestPackageExports:
    """Tests for package-level exports."""

    @pytest.mark.parametrize("name", [
        "config", "projection", "enumerator", "bounds", "options", "fetch",
        "GeoPoint", "BoundingBox", "TileID",
        "lnglat_to_tile_fraction", "tile_fraction_to_lnglat", "tile_bounds",
        "tile_xy_bounds", "tiles", "count_tiles", "tile_bbox", "format_tile_bbox",
        "Options", "parse_bbox", "parse_zooms",
    ])
    def test_is_accessible(self, name):
        assert hasattr(tmsdownloader, name)

    def test_whole_world_example(self):
        """The top-level API should enumerate the whole world at zoom 1."""
        world = tmsdownloader.parse_bbox("-180,-85.05112878,180,85.05112878")
        assert [tuple(t) for t in tmsdownloader.tiles(world, [1])] == [
            (0, 0, 1), (1, 0, 1), (0, 1, 1), (1, 1, 1)
        ]
