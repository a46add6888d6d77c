"""Custom exception hierarchy for osm-svg."""

from __future__ import annotations


class OsmSvgError(Exception):
    """Base class for all custom errors raised by osm-svg."""


class InputReadError(OsmSvgError):
    """Raised when the map data file cannot be opened or decoded."""


class OutputWriteError(OsmSvgError):
    """Raised when the SVG document cannot be written."""


class StyleLoadError(OsmSvgError):
    """Raised when a style file cannot be read, parsed or validated."""


class InvalidRegionError(OsmSvgError, ValueError):
    """Raised when a bounding region has negative components."""


__all__ = [
    "InputReadError",
    "InvalidRegionError",
    "OsmSvgError",
    "OutputWriteError",
    "StyleLoadError",
]
