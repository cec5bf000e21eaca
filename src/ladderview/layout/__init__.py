"""Ladder diagram layout and SVG output."""

from ladderview.layout.config import DEFAULT_CONFIG, LayoutConfig
from ladderview.layout.engine import cell_width, layout_rung, sequence_width
from ladderview.layout.geometry import (
    BranchGeometry,
    Circle,
    Diagram,
    HitRegion,
    Line,
    Primitive,
    Rect,
    Text,
)
from ladderview.layout.svg import render_svg, render_svg_stack

__all__ = [
    "LayoutConfig",
    "DEFAULT_CONFIG",
    "layout_rung",
    "cell_width",
    "sequence_width",
    "Diagram",
    "HitRegion",
    "BranchGeometry",
    "Primitive",
    "Line",
    "Rect",
    "Circle",
    "Text",
    "render_svg",
    "render_svg_stack",
]
