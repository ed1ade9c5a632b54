"""Command-line interface for the tile downloader.

This module provides CLI commands for downloading slippy-map tiles and
inspecting the tile grid using the Typer framework.
"""
import logging
import pathlib
from typing import Optional

import typer

from .bounds import format_tile_bbox
from .enumerator import count_tiles, tiles
from .errors import TileError
from .options import Options, parse_bbox, parse_zooms
from . import config, fetch

app = typer.Typer(add_completion=False)


@app.callback()
def callback():
    """
    Download slippy map tiles from TMS and WMS servers for a bounding box.
    """


def _parse(parser, value, hint):
    try:
        return parser(value)
    except TileError as err:
        raise typer.BadParameter(str(err), param_hint=hint) from err


def _parse_tile(value):
    try:
        z, x, y = (int(part) for part in value.split("/"))
    except ValueError as err:
        raise typer.BadParameter(f"Tile must be given as Z/X/Y, got {value!r}",
                                 param_hint="TILE") from err
    return x, y, z


@app.command()
def download(
    url: str = typer.Option(..., help="Tile server url with {x}, {y}, {z} or {bbox} placeholders."),
    zooms: str = typer.Option(..., help="Comma-separated list of zooms to download."),
    bbox: str = typer.Option(..., help="Comma-separated bbox: left,bottom,right,top."),
    wait: Optional[int] = typer.Option(None, help="Wait time (ms) between tile downloads."),
    output: Optional[pathlib.Path] = typer.Option(None, help="Directory to save tiles in."),
    ext: Optional[str] = typer.Option(None, help="File extension for saved tiles."),
    force: bool = typer.Option(False, help="Download tiles that already exist."),
    env: str = typer.Option("DEFAULT", help="Settings environment to use."),
    progress: bool = typer.Option(True, help="Show a progress bar."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request."),
):
    """Download tiles and save them as OUTPUT/z/x/y.EXT."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    if env != "DEFAULT":
        config.change_env(env)
    options = Options(
        url=url,
        zooms=_parse(parse_zooms, zooms, "'--zooms'"),
        bbox=_parse(parse_bbox, bbox, "'--bbox'"),
        wait=wait,
        output_dir=output,
        ext=ext,
        force=force,
    )
    if options.wait < 0:
        raise typer.BadParameter("Wait time must be >= 0", param_hint="'--wait'")
    stats = fetch.download(options, progress=progress)
    typer.echo(stats.summary())
    if stats.failed:
        raise typer.Exit(code=1)


@app.command("list")
def list_tiles(
    zooms: str = typer.Option(..., help="Comma-separated list of zooms."),
    bbox: str = typer.Option(..., help="Comma-separated bbox: left,bottom,right,top."),
    count: bool = typer.Option(False, "--count", help="Only print the number of tiles."),
):
    """List the tiles covering a bounding box as z/x/y."""
    zoom_levels = _parse(parse_zooms, zooms, "'--zooms'")
    box = _parse(parse_bbox, bbox, "'--bbox'")
    if count:
        typer.echo(count_tiles(box, zoom_levels))
        return
    for tile in tiles(box, zoom_levels):
        typer.echo(f"{tile.z}/{tile.x}/{tile.y}")


@app.command()
def bounds(
    tile: str = typer.Argument(..., help="Tile address as Z/X/Y."),
    crs: str = typer.Option("EPSG:4326", help="EPSG:4326 (degrees) or EPSG:3857 (metres)."),
    precision: int = typer.Option(9, min=0, help="Digits after the decimal point."),
):
    """Print the bounding box of a tile as left,bottom,right,top."""
    tile_id = _parse_tile(tile)
    try:
        typer.echo(format_tile_bbox(tile_id, crs=crs, precision=precision))
    except TileError as err:
        raise typer.BadParameter(str(err), param_hint="TILE") from err
    except ValueError as err:
        raise typer.BadParameter(str(err), param_hint="'--crs'") from err
