"""Tests for SVG output."""

from __future__ import annotations

from lxml import etree

from ladderview.core.parser import parse_rung_text
from ladderview.layout.engine import layout_rung
from ladderview.layout.svg import render_svg, render_svg_stack

SVG_NS = "{http://www.w3.org/2000/svg}"


def _svg(text: str, **kwargs) -> str:
    return render_svg(layout_rung(parse_rung_text(text), **kwargs))


def test_document_is_well_formed(seal_in) -> None:
    svg = render_svg(layout_rung(seal_in, rung_number=3))
    root = etree.fromstring(svg.encode("utf-8"))
    assert root.tag == f"{SVG_NS}svg"
    assert root.get("width") == "430"


def test_hit_regions_are_tagged_with_identity() -> None:
    svg = _svg("XIC(A)[XIC(B),XIO(C)]OTE(D)", rung_number=7)
    root = etree.fromstring(svg.encode("utf-8"))
    hits = root.findall(f".//{SVG_NS}rect[@class='hit']")
    assert [h.get("data-index") for h in hits] == ["0", "1", "2", "3"]
    assert {h.get("data-rung") for h in hits} == {"7"}
    assert [h.get("data-type") for h in hits] == ["XIC", "XIC", "XIO", "OTE"]


def test_operand_text_is_escaped() -> None:
    svg = _svg("XIC(A<B&C)")
    assert "A&lt;B&amp;C" in svg
    etree.fromstring(svg.encode("utf-8"))


def test_viewbox_starts_at_diagram_top() -> None:
    diagram = layout_rung(parse_rung_text("[XIC(A),XIC(B),XIC(C),XIC(D)]"))
    svg = render_svg(diagram)
    root = etree.fromstring(svg.encode("utf-8"))
    assert root.get("viewBox").split()[1] == f"{diagram.top:g}"


def test_rung_number_label_is_optional() -> None:
    diagram = layout_rung(parse_rung_text("XIC(A)"), rung_number=12)
    assert ">12</text>" in render_svg(diagram)
    assert ">12</text>" not in render_svg(diagram, rung_number_label=False)


def test_stack_places_rungs_one_below_another() -> None:
    first = layout_rung(parse_rung_text("XIC(A)OTE(B)"), rung_number=0)
    second = layout_rung(parse_rung_text("[XIC(C),XIC(D)]MOV(E,F)"), rung_number=1)
    svg = render_svg_stack([first, second], gap=10)
    root = etree.fromstring(svg.encode("utf-8"))
    groups = root.findall(f"{SVG_NS}g")
    assert len(groups) == 2
    assert float(root.get("height")) == first.height + second.height + 10
    assert float(root.get("width")) == max(first.width, second.width)


def test_empty_stack() -> None:
    root = etree.fromstring(render_svg_stack([]).encode("utf-8"))
    assert root.get("height") == "0"


def test_stack_groups_hit_regions_per_rung() -> None:
    diagrams = [
        layout_rung(parse_rung_text("XIC(A)OTE(B)"), rung_number=0),
        layout_rung(parse_rung_text("MOV(C,D)"), rung_number=1),
    ]
    root = etree.fromstring(render_svg_stack(diagrams).encode("utf-8"))
    hit_groups = root.findall(f"{SVG_NS}g/{SVG_NS}g[@class='hit-regions']")
    assert len(hit_groups) == 2
    assert [len(group) for group in hit_groups] == [2, 1]
    assert root.findall(f"{SVG_NS}g/{SVG_NS}rect[@class='hit']") == []


def test_only_hit_rects_are_transparent(seal_in) -> None:
    root = etree.fromstring(render_svg(layout_rung(seal_in)).encode("utf-8"))
    hits = root.findall(f".//{SVG_NS}rect[@class='hit']")
    assert len(hits) == 4
    assert all(h.getparent().get("class") == "hit-regions" for h in hits)
