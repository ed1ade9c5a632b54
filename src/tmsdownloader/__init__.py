"""Slippy-map tile downloader.

The core is the tile-coordinate engine: Web Mercator projection onto the
tile grid, enumeration of the tiles covering a bounding box, and per-tile
bounds for request templating.
"""

from . import config, projection, enumerator, bounds, options, fetch
from .errors import TileError, InvalidBoundingBox, InvalidZoom, InvalidCoordinate
from .projection import (
    GeoPoint,
    BoundingBox,
    TileID,
    lnglat_to_tile_fraction,
    tile_fraction_to_lnglat,
    tile_bounds,
    tile_xy_bounds,
)
from .enumerator import tiles, count_tiles
from .bounds import tile_bbox, format_tile_bbox
from .options import Options, parse_bbox, parse_zooms

__version__ = "0.1.0"
