"""Download tiles from a tile server and save them in a ``z/x/y`` tree.

Tiles are fetched one after another with a configurable pause between
requests, which keeps the load on public tile servers polite.
"""
import logging
import pathlib
import time

import requests
from tqdm import tqdm

from .bounds import format_tile_bbox
from .enumerator import count_tiles, tiles
from .projection import TileID
from . import config

logger = logging.getLogger(__name__)


def tile_url(template, tile, crs=None, precision=None):
    """Fill a URL template with a tile's address.

    The literal placeholders ``{x}``, ``{y}`` and ``{z}`` are replaced by
    the tile's integer coordinates, and ``{bbox}`` by its bounds formatted
    with :func:`~tmsdownloader.bounds.format_tile_bbox`. Any other braces
    in the template are left alone.

    Parameters
    ----------
    template : str
        URL template, e.g. ``"https://tile.example.com/{z}/{x}/{y}.png"``.
    tile : TileID
        Tile to request.
    crs : str, optional
        CRS for ``{bbox}``. If None, uses settings.
    precision : int, optional
        Decimal digits for ``{bbox}``. If None, uses settings.

    Returns
    -------
    str
        The request URL.
    """
    x, y, z = tile
    url = template.replace("{x}", str(x)).replace("{y}", str(y)).replace("{z}", str(z))
    if "{bbox}" in url:
        bbox = format_tile_bbox(
            tile,
            crs=crs or config.get("bbox_crs"),
            precision=precision if precision is not None else config.get("bbox_precision"),
        )
        url = url.replace("{bbox}", bbox)
    return url


def tile_path(output_dir, tile, ext="png"):
    """Location of a saved tile: ``<output_dir>/<z>/<x>/<y>.<ext>``."""
    x, y, z = tile
    return pathlib.Path(output_dir) / str(z) / str(x) / f"{y}.{ext}"


def tiles_exists(output_dir, tile, ext="png"):
    """Check whether a tile has already been saved.

    Returns
    -------
    bool
        True if the tile file exists.
    """
    return tile_path(output_dir, tile, ext).is_file()


class Tile:
    """Content received from the tile server for one tile.

    Attributes
    ----------
    tile_id : TileID
        Address of the tile.
    content : bytes
        Response body.
    ext : str
        File extension used when saving.
    """

    def __init__(self, tile_id, content, ext="png"):
        self.tile_id = TileID(*tile_id)
        self.content = content
        self.ext = ext

    @property
    def path(self):
        """Directory of the tile relative to the output root, ``z/x``."""
        return pathlib.Path(str(self.tile_id.z)) / str(self.tile_id.x)

    @property
    def name(self):
        """File name of the tile, ``y.ext``."""
        return f"{self.tile_id.y}.{self.ext}"


class TileFetcher:
    """Fetch tiles over HTTP with a reusable session.

    Parameters
    ----------
    session : requests.Session, optional
        Session used for all requests. A new one is created if None.
    timeout : float, optional
        Request timeout in seconds. If None, uses settings.
    user_agent : str, optional
        ``User-Agent`` header. If None, uses settings.
    """

    def __init__(self, session=None, timeout=None, user_agent=None):
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else config.get("timeout")
        self.user_agent = user_agent or config.get("user_agent")

    def get(self, tile, url_template, ext="png"):
        """Request one tile.

        Raises
        ------
        requests.RequestException
            On transport errors and non-2xx responses.
        """
        url = tile_url(url_template, tile)
        logger.debug(f"GET {url}")
        resp = self.session.get(
            url, headers={"User-Agent": self.user_agent}, timeout=self.timeout
        )
        resp.raise_for_status()
        return Tile(tile, resp.content, ext)

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def save(tile, output_dir):
    """Write a tile below ``output_dir``, creating directories as needed.

    Returns
    -------
    pathlib.Path
        Path of the written file.
    """
    path = pathlib.Path(output_dir) / tile.path
    path.mkdir(parents=True, exist_ok=True)
    outfile = path / tile.name
    outfile.write_bytes(tile.content)
    return outfile


class JobStats:
    """Counters for a download run.

    Attributes
    ----------
    start : float
        ``time.perf_counter()`` value when the run started.
    total : int
        Number of tiles in the run.
    succeeded : int
        Tiles saved, including ones already on disk.
    failed : int
        Tiles that could not be fetched or saved.
    skipped : int
        Tiles already on disk and not fetched again.
    """

    def __init__(self, total=0):
        self.start = time.perf_counter()
        self.total = total
        self.succeeded = 0
        self.failed = 0
        self.skipped = 0

    @property
    def done(self):
        return self.succeeded + self.failed

    @property
    def elapsed(self):
        return time.perf_counter() - self.start

    def summary(self):
        return (f"Done: {self.done}/{self.total} Succeeded: {self.succeeded} "
                f"Skipped: {self.skipped} Failed: {self.failed} "
                f"Execution Time: {self.elapsed:.3f}s")


def download(options, fetcher=None, stats=None, progress=True):
    """Download every tile covered by ``options`` into ``options.output_dir``.

    Parameters
    ----------
    options : Options
        Validated download options.
    fetcher : TileFetcher, optional
        Fetcher to use. A new one is created (and closed) if None.
    stats : JobStats, optional
        Counters to update. A new one is created if None.
    progress : bool, optional
        Show a progress bar, by default True.

    Returns
    -------
    JobStats
        Counters for the run.
    """
    options.validate()
    stats = stats if stats is not None else JobStats()
    stats.total = count_tiles(options.bbox, options.zooms)
    own_fetcher = fetcher is None
    fetcher = fetcher if fetcher is not None else TileFetcher()
    logger.info(f"Downloading {stats.total} tiles for zooms {sorted(set(options.zooms))}")

    fetched = 0
    try:
        with tqdm(total=stats.total, desc="Downloading", unit="tile", disable=not progress) as pbar:
            for tile_id in tiles(options.bbox, options.zooms):
                if not options.force and tiles_exists(options.output_dir, tile_id, options.ext):
                    logger.debug(f"Skipping existing tile {tile_id.z}/{tile_id.x}/{tile_id.y}")
                    stats.skipped += 1
                    stats.succeeded += 1
                else:
                    if fetched and options.wait:
                        time.sleep(options.wait / 1000)
                    fetched += 1
                    try:
                        save(fetcher.get(tile_id, options.url, options.ext), options.output_dir)
                    except (requests.RequestException, OSError) as err:
                        logger.warning(f"Failed tile {tile_id.z}/{tile_id.x}/{tile_id.y}: {err}")
                        stats.failed += 1
                    else:
                        stats.succeeded += 1
                pbar.update(1)
                pbar.set_postfix(succeeded=stats.succeeded, failed=stats.failed)
    finally:
        if own_fetcher:
            fetcher.close()
    return stats
