"""Enumerate the tiles covering a bounding box.

The box is treated as half open in projected space: a ``right`` edge that
falls exactly on a tile boundary does not pull in the next column, and a
``bottom`` edge on a boundary does not pull in the next row.
"""
import math
from numbers import Integral
from typing import Iterable, Iterator, List, Tuple

from .projection import (
    TileID,
    check_bbox,
    check_zoom,
    lnglat_to_tile_fraction,
    snap_fraction,
)


def _zoom_levels(zooms) -> List[int]:
    if isinstance(zooms, Integral) and not isinstance(zooms, bool):
        zooms = [zooms]
    return sorted({check_zoom(z) for z in zooms})


def tile_ranges(bbox, zoom: int) -> Tuple[int, int, int, int]:
    """Inclusive tile index ranges covering ``bbox`` at ``zoom``.

    All four corners are projected so the extremes are found regardless
    of which corner produces them. Edges lying on a tile boundary, within
    ``SNAP_TOLERANCE``, do not pull in the neighbouring row or column.

    Returns
    -------
    tuple of int
        ``(x_min, x_max, y_min, y_max)``, each clamped to ``[0, 2**zoom - 1]``.
    """
    left, bottom, right, top = check_bbox(bbox)
    zoom = check_zoom(zoom)
    corners = [
        lnglat_to_tile_fraction((lng, lat), zoom)
        for lng in (left, right)
        for lat in (bottom, top)
    ]
    fxs = [snap_fraction(fx) for fx, _ in corners]
    fys = [snap_fraction(fy) for _, fy in corners]
    last = 2 ** zoom - 1

    def clamp(value):
        return max(0, min(last, value))

    x_min = clamp(math.floor(min(fxs)))
    x_max = clamp(math.ceil(max(fxs)) - 1)
    y_min = clamp(math.floor(min(fys)))
    y_max = clamp(math.ceil(max(fys)) - 1)
    return x_min, max(x_min, x_max), y_min, max(y_min, y_max)


def tiles(bbox, zooms: Iterable[int]) -> Iterator[TileID]:
    """Yield every tile intersecting ``bbox`` at each zoom in ``zooms``.

    Zoom levels are de-duplicated and visited in ascending order; within
    a zoom level tiles come row by row (``y`` ascending, then ``x``
    ascending). Calling again with the same arguments yields the same
    sequence.

    Parameters
    ----------
    bbox : BoundingBox or sequence of float
        ``(left, bottom, right, top)`` in degrees.
    zooms : int or iterable of int
        Zoom levels to enumerate.

    Raises
    ------
    InvalidBoundingBox
        If ``bbox`` is malformed or degenerate.
    InvalidZoom
        If any zoom level is not an integer in [0, MAX_ZOOM].

    Both are raised by this call itself, before any tile is produced.
    """
    bbox = check_bbox(bbox)
    levels = _zoom_levels(zooms)
    ranges = [(zoom, tile_ranges(bbox, zoom)) for zoom in levels]
    return _iter_tiles(ranges)


def _iter_tiles(ranges):
    for zoom, (x_min, x_max, y_min, y_max) in ranges:
        for y in range(y_min, y_max + 1):
            for x in range(x_min, x_max + 1):
                yield TileID(x, y, zoom)


def count_tiles(bbox, zooms: Iterable[int]) -> int:
    """Number of tiles :func:`tiles` yields for the same arguments."""
    bbox = check_bbox(bbox)
    total = 0
    for zoom in _zoom_levels(zooms):
        x_min, x_max, y_min, y_max = tile_ranges(bbox, zoom)
        total += (x_max - x_min + 1) * (y_max - y_min + 1)
    return total
