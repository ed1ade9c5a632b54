"""Spherical Web Mercator projection onto the slippy-map tile grid.

At zoom level ``z`` the projected world square is divided into a
``2**z`` by ``2**z`` grid of tiles. Tile ``(0, 0)`` sits at the northwest
corner, ``x`` grows eastward and ``y`` grows southward. Fractional tile
coordinates are positions in that grid before flooring to a tile index.
"""
import math
from numbers import Integral, Real
from typing import NamedTuple, Tuple

from .errors import InvalidBoundingBox, InvalidCoordinate, InvalidZoom

MAX_LATITUDE = 85.05112878
WEBMERCATOR_RADIUS = 6378137.0
WEBMERCATOR_CIRCUMFERENCE = 2 * math.pi * WEBMERCATOR_RADIUS
MAX_ZOOM = 30
# Fractions closer than this to an integer are taken as lying on the tile edge.
SNAP_TOLERANCE = 1e-8


class GeoPoint(NamedTuple):
    """Longitude/latitude pair in degrees."""
    lng: float
    lat: float


class BoundingBox(NamedTuple):
    """Axis-aligned rectangle given as (left, bottom, right, top)."""
    left: float
    bottom: float
    right: float
    top: float


class TileID(NamedTuple):
    """Address of a single tile in the quadtree."""
    x: int
    y: int
    z: int


def check_zoom(zoom) -> int:
    """Return ``zoom`` if it is a valid zoom level.

    Raises
    ------
    InvalidZoom
        If ``zoom`` is not an integer or lies outside [0, MAX_ZOOM].
    """
    if isinstance(zoom, bool) or not isinstance(zoom, Integral):
        raise InvalidZoom(f"Zoom level must be an integer, got {zoom!r}")
    if zoom < 0:
        raise InvalidZoom(f"Zoom level must be >= 0, got {zoom}")
    if zoom > MAX_ZOOM:
        raise InvalidZoom(f"Zoom level must be <= {MAX_ZOOM}, got {zoom}")
    return int(zoom)


def check_bbox(bbox) -> BoundingBox:
    """Validate a bounding box and return it as a :class:`BoundingBox`.

    Parameters
    ----------
    bbox : BoundingBox or sequence of float
        Box as ``(left, bottom, right, top)`` in degrees.

    Returns
    -------
    BoundingBox
        The same box with every edge converted to ``float``.

    Raises
    ------
    InvalidBoundingBox
        If the box does not hold four finite numbers, a longitude lies
        outside [-180, 180], a latitude lies outside [-90, 90], or the box
        is degenerate (``left >= right`` or ``bottom >= top``). Boxes that
        cross the antimeridian must be split by the caller.
    """
    try:
        left, bottom, right, top = (float(v) for v in bbox)
    except (TypeError, ValueError) as err:
        raise InvalidBoundingBox(
            f"Bounding box must be four numbers (left, bottom, right, top), got {bbox!r}"
        ) from err
    box = BoundingBox(left, bottom, right, top)
    if not all(math.isfinite(v) for v in box):
        raise InvalidBoundingBox(f"Bounding box edges must be finite, got {box}")
    if not (-180 <= left <= 180 and -180 <= right <= 180):
        raise InvalidBoundingBox(f"Longitudes must lie within [-180, 180], got {box}")
    if not (-90 <= bottom <= 90 and -90 <= top <= 90):
        raise InvalidBoundingBox(f"Latitudes must lie within [-90, 90], got {box}")
    if left >= right:
        raise InvalidBoundingBox(
            f"left must be less than right (antimeridian-crossing boxes are "
            f"not supported), got {box}"
        )
    if bottom >= top:
        raise InvalidBoundingBox(f"bottom must be less than top, got {box}")
    return box


def _finite(*values):
    for value in values:
        if not isinstance(value, Real) or not math.isfinite(value):
            raise InvalidCoordinate(f"Coordinate must be a finite number, got {value!r}")


def snap_fraction(value: float) -> float:
    """Round a fractional tile coordinate onto a tile edge when within ``SNAP_TOLERANCE``."""
    nearest = round(value)
    if abs(value - nearest) < SNAP_TOLERANCE:
        return float(nearest)
    return value


def clamp_latitude(lat: float) -> float:
    """Clamp ``lat`` to the latitudes representable in the Mercator square."""
    return max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))


def lnglat_to_tile_fraction(point, zoom: int) -> Tuple[float, float]:
    """Project a geographic point to fractional tile coordinates.

    Parameters
    ----------
    point : GeoPoint or tuple of float
        ``(lng, lat)`` in degrees. Latitude is clamped to
        +/- ``MAX_LATITUDE``; longitude is not wrapped.
    zoom : int
        Zoom level.

    Returns
    -------
    tuple of float
        ``(fx, fy)`` in tile units, ``fx`` growing east and ``fy`` south.
        Values within ``SNAP_TOLERANCE`` of a tile edge are returned as that
        edge, so the corners of a tile project back onto whole numbers.

    Raises
    ------
    InvalidCoordinate
        If either coordinate is NaN or infinite.
    InvalidZoom
        If ``zoom`` is not an integer in [0, MAX_ZOOM].
    """
    lng, lat = point
    _finite(lng, lat)
    n = 2.0 ** check_zoom(zoom)
    lat_rad = math.radians(clamp_latitude(lat))
    fx = (lng + 180.0) / 360.0 * n
    fy = (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0 * n
    return snap_fraction(fx), snap_fraction(fy)


def tile_fraction_to_lnglat(fx: float, fy: float, zoom: int) -> GeoPoint:
    """Inverse of :func:`lnglat_to_tile_fraction`.

    Raises
    ------
    InvalidCoordinate
        If ``fx`` or ``fy`` is NaN or infinite.
    """
    _finite(fx, fy)
    n = 2.0 ** check_zoom(zoom)
    lng = fx / n * 360.0 - 180.0
    lat = math.degrees(math.atan(math.sinh(math.pi * (1.0 - 2.0 * fy / n))))
    return GeoPoint(lng, lat)


def check_tile(tile) -> TileID:
    """Validate a tile address and return it as a :class:`TileID`."""
    x, y, z = tile
    z = check_zoom(z)
    n = 2 ** z
    for name, value in (("x", x), ("y", y)):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidCoordinate(f"Tile {name} must be an integer, got {value!r}")
        if not 0 <= value < n:
            raise InvalidCoordinate(f"Tile {name}={value} outside [0, {n - 1}] at zoom {z}")
    return TileID(int(x), int(y), z)


def tile_bounds(tile) -> BoundingBox:
    """Geographic bounds of a tile, in degrees.

    The northwest corner ``(x, y)`` gives ``left`` and ``top``; the
    southeast corner ``(x + 1, y + 1)`` gives ``right`` and ``bottom``.
    """
    x, y, z = check_tile(tile)
    nw = tile_fraction_to_lnglat(x, y, z)
    se = tile_fraction_to_lnglat(x + 1, y + 1, z)
    return BoundingBox(left=nw.lng, bottom=se.lat, right=se.lng, top=nw.lat)


def tile_xy_bounds(tile) -> BoundingBox:
    """Bounds of a tile in Web Mercator (EPSG:3857) metres."""
    x, y, z = check_tile(tile)
    size = WEBMERCATOR_CIRCUMFERENCE / 2 ** z
    left = -WEBMERCATOR_CIRCUMFERENCE / 2 + x * size
    top = WEBMERCATOR_CIRCUMFERENCE / 2 - y * size
    return BoundingBox(left=left, bottom=top - size, right=left + size, top=top)
