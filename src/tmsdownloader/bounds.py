"""Per-tile bounding boxes for request templating.

WMS-style servers take the area to render as a ``BBOX`` query parameter.
These helpers turn a tile address into that box, either in degrees
(EPSG:4326) or in Web Mercator metres (EPSG:3857).
"""
from .projection import BoundingBox, tile_bounds, tile_xy_bounds

CRS_BOUNDS = {
    "EPSG:4326": tile_bounds,
    "EPSG:3857": tile_xy_bounds,
}


def tile_bbox(tile) -> BoundingBox:
    """Geographic bounding box of ``tile`` in degrees."""
    return tile_bounds(tile)


def format_tile_bbox(tile, crs="EPSG:4326", precision=9):
    """Format a tile's bounds as ``"left,bottom,right,top"``.

    Parameters
    ----------
    tile : TileID or tuple of int
        Tile address ``(x, y, z)``.
    crs : str, optional
        ``"EPSG:4326"`` for degrees or ``"EPSG:3857"`` for metres,
        by default ``"EPSG:4326"``.
    precision : int, optional
        Digits after the decimal point, by default 9.

    Returns
    -------
    str
        Comma-joined bounds with fixed precision.

    Raises
    ------
    ValueError
        If ``crs`` is not supported.
    """
    try:
        bounds = CRS_BOUNDS[crs.upper()]
    except KeyError:
        raise ValueError(
            f"Unsupported CRS {crs!r}, expected one of {', '.join(CRS_BOUNDS)}"
        ) from None
    return ",".join(f"{value:.{precision}f}" for value in bounds(tile))
