"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

import typer
from rich import print

from .config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_REGION_HEIGHT,
    DEFAULT_REGION_WIDTH,
    RenderSettings,
)
from .errors import InputReadError, OsmSvgError, OutputWriteError, StyleLoadError
from .geometry import BoundingRegion
from .pipeline import convert
from .utils.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)

app = typer.Typer(help="Render a rectangular slice of an OSM extract as SVG")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (InputReadError, OutputWriteError, StyleLoadError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except OsmSvgError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.command()
@_handle_errors
def render(
    input_path: Path = typer.Argument(..., metavar="INPUT", help="OSM file (.osm.pbf or .osm)"),
    x: int = typer.Argument(..., min=0, help="Left edge in RD metres"),
    y: int = typer.Argument(..., min=0, help="Bottom edge in RD metres"),
    w: int = typer.Argument(DEFAULT_REGION_WIDTH, min=0, help="Width in metres"),
    h: int = typer.Argument(DEFAULT_REGION_HEIGHT, min=0, help="Height in metres"),
    output: Path = typer.Option(Path(DEFAULT_OUTPUT_NAME), "--output", "-o", help="SVG file to write"),
    style: Optional[Path] = typer.Option(None, "--style", "-s", help="JSON style table"),
    workers: int = typer.Option(DEFAULT_MAX_WORKERS, "--workers", min=1, help="Worker threads"),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, "--chunk-size", min=1, help="Entities per work item"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug diagnostics"),
) -> None:
    """Render the ways touching the region X Y W H into an SVG file."""

    configure_logging(verbose)
    region = BoundingRegion(x, y, w, h)
    LOGGER.debug("args input=%s region=%s output=%s style=%s", input_path, region, output, style)

    settings = RenderSettings(max_workers=workers, chunk_size=chunk_size)
    target = convert(region, input_path, output, style, settings=settings)
    print(f"[green]Wrote {target}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
