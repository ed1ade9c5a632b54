"""Exceptions raised by the tile-coordinate engine."""


class TileError(ValueError):
    """Base class for invalid input to the tile engine."""


class InvalidBoundingBox(TileError):
    """Bounding box is malformed, degenerate or crosses the antimeridian."""


class InvalidZoom(TileError):
    """Zoom level is not a non-negative integer."""


class InvalidCoordinate(TileError):
    """Coordinate is non-finite or a tile index lies outside its grid."""
