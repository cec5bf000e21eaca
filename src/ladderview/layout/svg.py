"""SVG rendering of a laid-out rung."""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from ladderview.layout.geometry import Circle, Diagram, HitRegion, Line, Primitive, Rect, Text

_STYLE = """\
  <style>
    .rail { stroke: currentColor; }
    .wire, .branch, .glyph { stroke: currentColor; fill: none; }
    .label { fill: currentColor; font-family: ui-monospace, monospace; }
    .title { fill: currentColor; font-family: sans-serif; }
    .hit { fill: transparent; stroke: none; }
  </style>"""


def _num(value: float) -> str:
    return f"{value:g}"


def _primitive(p: Primitive) -> str:
    if isinstance(p, Line):
        return (
            f'<line class="{p.role}" x1="{_num(p.x1)}" y1="{_num(p.y1)}" '
            f'x2="{_num(p.x2)}" y2="{_num(p.y2)}" stroke-width="{_num(p.stroke_width)}"/>'
        )
    if isinstance(p, Rect):
        return (
            f'<rect class="{p.role}" x="{_num(p.x)}" y="{_num(p.y)}" '
            f'width="{_num(p.width)}" height="{_num(p.height)}" stroke-width="2"/>'
        )
    if isinstance(p, Circle):
        return (
            f'<circle class="{p.role}" cx="{_num(p.cx)}" cy="{_num(p.cy)}" '
            f'r="{_num(p.r)}" stroke-width="2"/>'
        )
    css = "label" if p.mono else "title"
    weight = ' font-weight="bold"' if p.bold else ""
    return (
        f'<text class="{css}" x="{_num(p.x)}" y="{_num(p.y)}" text-anchor="{p.anchor}" '
        f'font-size="{_num(p.size)}"{weight}>{escape(p.text)}</text>'
    )


def _hit_rect(region: HitRegion) -> str:
    b = region.bounds
    return (
        f'<rect class="hit" data-rung="{region.rung_number}" data-index="{region.index}" '
        f'data-type="{escape(region.type)}" x="{_num(b.x)}" y="{_num(b.y)}" '
        f'width="{_num(b.width)}" height="{_num(b.height)}"/>'
    )


def render_svg(diagram: Diagram, *, rung_number_label: bool = True) -> str:
    """Render ``diagram`` as a standalone SVG document."""
    top = diagram.top
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(diagram.width)}" '
            f'height="{_num(diagram.height)}" '
            f'viewBox="0 {_num(top)} {_num(diagram.width)} {_num(diagram.height)}">'
        ),
        _STYLE,
    ]
    if rung_number_label:
        lines.append(
            f'  <text class="title" x="2" y="{_num(top + 10)}" font-size="10">'
            f"{diagram.rung_number}</text>"
        )
    lines.extend(f"  {_primitive(p)}" for p in diagram.primitives)
    lines.append('  <g class="hit-regions">')
    lines.extend(f"    {_hit_rect(region)}" for region in diagram.hit_regions)
    lines.append("  </g>")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def render_svg_stack(diagrams: Iterable[Diagram], *, gap: float = 10) -> str:
    """Render several rungs stacked vertically in one SVG document."""
    diagrams = list(diagrams)
    width = max((d.width for d in diagrams), default=0)
    lines: list[str] = []
    offset = 0.0
    for diagram in diagrams:
        lines.append(f'  <g transform="translate(0 {_num(offset - diagram.top)})">')
        lines.append(f'    <text class="title" x="2" y="{_num(diagram.top + 10)}" font-size="10">'
                     f"{diagram.rung_number}</text>")
        lines.extend(f"    {_primitive(p)}" for p in diagram.primitives)
        lines.append('    <g class="hit-regions">')
        lines.extend(f"      {_hit_rect(region)}" for region in diagram.hit_regions)
        lines.append("    </g>")
        lines.append("  </g>")
        offset += diagram.height + gap
    height = max(offset - gap, 0)
    header = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(width)}" '
            f'height="{_num(height)}" viewBox="0 0 {_num(width)} {_num(height)}">'
        ),
        _STYLE,
    ]
    return "\n".join(header + lines + ["</svg>"]) + "\n"
