"""Ladder layout engine.

Turns a parsed rung into a :class:`~ladderview.layout.geometry.Diagram`.

Elements run left to right on the main rail, each taking a fixed cell whose
width depends on its glyph. A branch with ``n`` legs reserves a band of
``n * leg_spacing`` centered on the rail it sits on; leg ``i`` runs at::

    main_y - band / 2 + i * leg_spacing + leg_spacing / 2

Every leg starts at the branch's ``entry_x`` and all legs rejoin at
``merge_x = entry_x + max(leg widths)``, so horizontal extents are computed
bottom-up before the merge connectors are drawn. Nested branches recurse
with their leg's y as the main y.

Nothing here mutates shared state: each layout call takes a starting x,
y and instruction index and returns a :class:`_Span` carrying the
primitives drawn, the next x and index, and the vertical extent reached.
The caller folds spans together.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from pyrsistent import pmap

from ladderview.core.catalog import Glyph, label_operands, lookup
from ladderview.core.elements import Branch, Instruction, RungElement
from ladderview.layout.config import DEFAULT_CONFIG, LayoutConfig
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

# ---------------------------------------------------------------------------
# Accumulator
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Span:
    x: float
    index: int
    min_y: float
    max_y: float
    primitives: tuple[Primitive, ...] = ()
    regions: tuple[HitRegion, ...] = ()
    branches: tuple[BranchGeometry, ...] = ()

    def then(self, other: _Span) -> _Span:
        """Append ``other``, which was laid out starting where this span ended."""
        return _Span(
            x=other.x,
            index=other.index,
            min_y=min(self.min_y, other.min_y),
            max_y=max(self.max_y, other.max_y),
            primitives=self.primitives + other.primitives,
            regions=self.regions + other.regions,
            branches=self.branches + other.branches,
        )


@dataclass(frozen=True)
class _Context:
    config: LayoutConfig
    rung_number: int
    branch_path: tuple[int, ...] = field(default=())

    def into_leg(self, leg_index: int) -> _Context:
        return replace(self, branch_path=self.branch_path + (leg_index,))

    @property
    def depth(self) -> int:
        return len(self.branch_path)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def layout_rung(
    elements: Iterable[RungElement],
    *,
    rung_number: int = 0,
    config: LayoutConfig | None = None,
) -> Diagram:
    """Lay out one rung's parse tree.

    Never fails: unknown mnemonics draw as generic boxes and a branch without
    legs is a zero-width pass-through.
    """
    config = config or DEFAULT_CONFIG
    ctx = _Context(config, rung_number)
    y = config.rail_y
    body = _layout_sequence(tuple(elements), config.start_x, y, 0, ctx)

    width = body.x + config.right_margin
    top = min(0.0, body.min_y - config.rail_inset)
    bottom = max(body.max_y + config.bottom_margin, config.min_height)
    right_rail_x = width - config.left_rail_x
    rail_top = top + config.rail_inset
    rail_bottom = bottom - config.rail_inset

    frame: tuple[Primitive, ...] = (
        Line(config.left_rail_x, rail_top, config.left_rail_x, rail_bottom, "rail", 3),
        Line(right_rail_x, rail_top, right_rail_x, rail_bottom, "rail", 3),
        Line(config.left_rail_x, y, config.start_x, y),
        Line(body.x, y, right_rail_x, y),
    )
    return Diagram(
        rung_number=rung_number,
        primitives=frame + body.primitives,
        hit_regions=body.regions,
        branches=body.branches,
        width=width,
        height=bottom - top,
        top=top,
        rail_end_x=body.x,
    )


def cell_width(instruction: Instruction, config: LayoutConfig | None = None) -> float:
    """Horizontal space one instruction occupies on its rail."""
    config = config or DEFAULT_CONFIG
    glyph = lookup(instruction.type).glyph
    if glyph.is_contact or glyph.is_coil:
        return config.contact_cell
    if glyph is Glyph.BOX:
        return config.box_cell
    return config.generic_cell


def sequence_width(elements: Iterable[RungElement], config: LayoutConfig | None = None) -> float:
    """Width of a sequence laid out on one rail."""
    config = config or DEFAULT_CONFIG
    span = _layout_sequence(tuple(elements), 0, config.rail_y, 0, _Context(config, 0))
    return span.x


# ---------------------------------------------------------------------------
# Sequences and branches
# ---------------------------------------------------------------------------


def _layout_sequence(
    elements: tuple[RungElement, ...], x: float, y: float, index: int, ctx: _Context
) -> _Span:
    span = _Span(x=x, index=index, min_y=y, max_y=y)
    for element in elements:
        if isinstance(element, Branch):
            span = span.then(_layout_branch(element, span.x, y, span.index, ctx))
        else:
            span = span.then(_layout_instruction(element, span.x, y, span.index, ctx))
    return span


def _layout_branch(branch: Branch, x: float, y: float, index: int, ctx: _Context) -> _Span:
    legs = branch.branches
    if not legs:
        return _Span(x=x, index=index, min_y=y, max_y=y)

    config = ctx.config
    spacing = config.leg_spacing
    band = len(legs) * spacing
    leg_ys = tuple(y - band / 2 + i * spacing + spacing / 2 for i in range(len(legs)))
    entry_x = x + config.fan_width

    # Legs first: the merge point depends on the widest one.
    leg_spans: list[_Span] = []
    next_index = index
    for leg_index, (leg, leg_y) in enumerate(zip(legs, leg_ys, strict=True)):
        leg_span = _layout_sequence(leg, entry_x, leg_y, next_index, ctx.into_leg(leg_index))
        leg_spans.append(leg_span)
        next_index = leg_span.index

    merge_x = entry_x + max(s.x - entry_x for s in leg_spans)
    end_x = merge_x + config.fan_width

    connectors: list[Primitive] = [Line(x, y, entry_x, y, "branch")]
    for leg_span, leg_y in zip(leg_spans, leg_ys, strict=True):
        connectors.append(Line(entry_x, y, entry_x, leg_y, "branch"))
        if leg_span.x < merge_x:
            connectors.append(Line(leg_span.x, leg_y, merge_x, leg_y, "branch"))
        connectors.append(Line(merge_x, leg_y, merge_x, y, "branch"))
    connectors.append(Line(merge_x, y, end_x, y, "branch"))

    geometry = BranchGeometry(
        start_x=x,
        entry_x=entry_x,
        merge_x=merge_x,
        end_x=end_x,
        main_y=y,
        leg_ys=leg_ys,
        leg_end_xs=tuple(s.x for s in leg_spans),
        depth=ctx.depth,
    )
    span = _Span(
        x=x,
        index=index,
        min_y=y - band / 2,
        max_y=y + band / 2,
        primitives=tuple(connectors),
        branches=(geometry,),
    )
    for leg_span in leg_spans:
        span = span.then(leg_span)
    return replace(span, x=end_x, index=next_index)


# ---------------------------------------------------------------------------
# Instruction glyphs
# ---------------------------------------------------------------------------


def _layout_instruction(
    instruction: Instruction, x: float, y: float, index: int, ctx: _Context
) -> _Span:
    glyph = lookup(instruction.type).glyph
    cell = cell_width(instruction, ctx.config)
    if glyph.is_contact:
        primitives, bounds, rail_out = _contact(instruction, glyph, x, y)
    elif glyph.is_coil:
        primitives, bounds, rail_out = _coil(instruction, glyph, x, y)
    elif glyph is Glyph.BOX:
        primitives, bounds, rail_out = _box(instruction, x, y, cell)
    else:
        primitives, bounds, rail_out = _generic(instruction, x, y)

    region = HitRegion(
        rung_number=ctx.rung_number,
        index=index,
        type=instruction.type,
        values=instruction.values,
        fields=pmap(label_operands(instruction)),
        bounds=bounds,
        branch_path=ctx.branch_path,
        instruction=instruction,
    )
    tail = Line(rail_out, y, x + cell, y)
    return _Span(
        x=x + cell,
        index=index + 1,
        min_y=min(bounds.y, y),
        max_y=max(bounds.bottom, y),
        primitives=primitives + (tail,),
        regions=(region,),
    )


_Glyph = tuple[tuple[Primitive, ...], Rect, float]


def _operand_label(instruction: Instruction) -> str:
    return ",".join(instruction.values)


def _contact(instruction: Instruction, glyph: Glyph, x: float, y: float) -> _Glyph:
    left, right = x + 30, x + 45
    primitives: list[Primitive] = [
        Line(x, y, left, y),
        Line(left, y - 15, left, y + 15, "glyph"),
        Line(right, y - 15, right, y + 15, "glyph"),
    ]
    if glyph is Glyph.CONTACT_NC:
        primitives.append(Line(left, y + 15, right, y - 15, "glyph"))
    primitives.append(Text(x + 37.5, y - 25, _operand_label(instruction)))
    return tuple(primitives), Rect(x + 25, y - 35, 25, 55), right


def _coil(instruction: Instruction, glyph: Glyph, x: float, y: float) -> _Glyph:
    left, right, center = x + 30, x + 45, x + 37.5
    primitives: list[Primitive] = [
        Line(x, y, left, y),
        Line(left, y - 15, left, y - 10, "glyph"),
        Line(left, y + 10, left, y + 15, "glyph"),
        Line(right, y - 15, right, y - 10, "glyph"),
        Line(right, y + 10, right, y + 15, "glyph"),
        Circle(center, y, 10),
    ]
    letter = {Glyph.COIL_LATCH: "L", Glyph.COIL_UNLATCH: "U"}.get(glyph)
    if letter:
        primitives.append(Text(center, y + 4, letter, bold=True, mono=False))
    primitives.append(Text(center, y - 25, _operand_label(instruction)))
    return tuple(primitives), Rect(x + 25, y - 35, 25, 55), right


def _box(instruction: Instruction, x: float, y: float, cell: float) -> _Glyph:
    left = x + 20
    width = cell - 40
    lines = instruction.values
    height = max(50.0, 22.0 + 13.0 * len(lines))
    top = y - height / 2
    center = left + width / 2
    primitives: list[Primitive] = [
        Line(x, y, left, y),
        Rect(left, top, width, height),
        Text(center, top + 15, instruction.type, size=12, bold=True, mono=False),
    ]
    for i, text in enumerate(lines):
        primitives.append(Text(center, top + 29 + 13 * i, text))
    bounds = Rect(left, top, width, height)
    return tuple(primitives), bounds, left + width


def _generic(instruction: Instruction, x: float, y: float) -> _Glyph:
    left, width = x + 20, 70.0
    primitives: list[Primitive] = [
        Line(x, y, left, y),
        Rect(left, y - 15, width, 30),
        Text(left + width / 2, y + 5, instruction.type, bold=True, mono=False),
    ]
    if instruction.values:
        primitives.append(Text(left + width / 2, y - 25, _operand_label(instruction), size=10))
    return tuple(primitives), Rect(left, y - 35, width, 50), left + width
