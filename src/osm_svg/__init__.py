"""Render a rectangular slice of OpenStreetMap data as an SVG preview."""

from .drawing import DrawingAccumulator
from .geometry import BoundingRegion
from .pipeline import RenderPipeline, convert
from .point_index import PointIndex
from .style import StyleResolver, StyleRule, StyleTable

__all__ = [
    "BoundingRegion",
    "DrawingAccumulator",
    "PointIndex",
    "RenderPipeline",
    "StyleResolver",
    "StyleRule",
    "StyleTable",
    "convert",
]
