"""Parsing and validation of user-supplied download options."""
import pathlib
from typing import List

from .errors import InvalidBoundingBox, InvalidZoom
from .projection import BoundingBox, check_bbox, check_zoom
from . import config


def parse_bbox(text: str) -> BoundingBox:
    """Parse ``"left,bottom,right,top"`` into a validated bounding box.

    Raises
    ------
    InvalidBoundingBox
        If the text does not hold four decimal numbers or the box they
        describe is invalid.
    """
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 4:
        raise InvalidBoundingBox(
            f"Bounding box needs 4 comma-separated values (left,bottom,right,top), got {text!r}"
        )
    try:
        values = [float(part) for part in parts]
    except ValueError as err:
        raise InvalidBoundingBox(f"Bounding box values must be numbers, got {text!r}") from err
    return check_bbox(values)


def parse_zooms(text: str) -> List[int]:
    """Parse comma-separated zoom levels such as ``"3,4,5"``.

    Raises
    ------
    InvalidZoom
        If any value is not an integer in [0, MAX_ZOOM].
    """
    zooms = []
    for part in text.split(","):
        try:
            zoom = int(part.strip())
        except ValueError as err:
            raise InvalidZoom(f"Zoom levels must be integers, got {part.strip()!r}") from err
        zooms.append(check_zoom(zoom))
    return zooms


class Options:
    """Options for a download run.

    Parameters
    ----------
    url : str, optional
        Tile URL template with ``{x}``, ``{y}``, ``{z}`` (and optionally
        ``{bbox}``) placeholders.
    zooms : list of int, optional
        Zoom levels to download.
    bbox : BoundingBox, optional
        Area to download.
    wait : int, optional
        Milliseconds to wait between requests. If None, uses settings.
    output_dir : str or pathlib.Path, optional
        Root directory for the ``z/x/y.ext`` tree. If None, uses settings.
    ext : str, optional
        File extension for saved tiles. If None, uses settings.
    force : bool, optional
        Re-download tiles that already exist on disk, by default False.
    """

    def __init__(self, url=None, zooms=None, bbox=None, wait=None,
                 output_dir=None, ext=None, force=False):
        self.url = url
        self.zooms = zooms
        self.bbox = bbox
        self.wait = wait if wait is not None else config.get("wait_time")
        self.output_dir = pathlib.Path(
            output_dir if output_dir is not None else config.get("tile_dir"))
        self.ext = (ext if ext is not None else config.get("tile_ext")).lstrip(".")
        self.force = force

    def validate(self):
        """Check that every required option has been supplied.

        Raises
        ------
        ValueError
            Naming the first missing option.
        """
        if not self.url:
            raise ValueError("Tile server url is required")
        if not self.zooms:
            raise ValueError("Zooms are required")
        if self.bbox is None:
            raise ValueError("Bbox is required")
        if self.wait < 0:
            raise ValueError(f"Wait time must be >= 0, got {self.wait}")
        check_bbox(self.bbox)
        for zoom in self.zooms:
            check_zoom(zoom)
