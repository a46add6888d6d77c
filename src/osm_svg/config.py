"""Default configuration values for osm-svg."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

# The grid is drawn on top of everything else.  Geographic styles stay well
# below this priority so the grid never disappears under a filled polygon.
GRID_SPACING: Final[int] = 1000
GRID_PRIORITY: Final[int] = 1000

DEFAULT_REGION_WIDTH: Final[int] = 1000
DEFAULT_REGION_HEIGHT: Final[int] = 1000
DEFAULT_OUTPUT_NAME: Final[str] = "out.svg"

# Entities are handed to the worker pool in chunks.  Large chunks keep the
# per-future overhead negligible for country sized extracts.
DEFAULT_CHUNK_SIZE: Final[int] = 50_000
DEFAULT_MAX_WORKERS: Final[int] = min(32, (os.cpu_count() or 1) + 4)

SOURCE_CRS: Final[str] = "EPSG:4326"
TARGET_CRS: Final[str] = "EPSG:28992"

SVG_NAMESPACE: Final[str] = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE: Final[str] = "http://www.w3.org/1999/xlink"


@dataclass(frozen=True)
class RenderSettings:
    """Tunables passed explicitly into :class:`~osm_svg.pipeline.RenderPipeline`."""

    max_workers: int = DEFAULT_MAX_WORKERS
    chunk_size: int = DEFAULT_CHUNK_SIZE
    grid_spacing: int = GRID_SPACING
    grid_priority: int = GRID_PRIORITY

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        if self.grid_spacing < 1:
            raise ValueError("grid_spacing must be at least 1")
