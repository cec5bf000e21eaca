"""Draw primitives and the :class:`Diagram` they make up.

Coordinates are in abstract units with y growing downward. A rendering
collaborator (SVG, canvas, terminal) draws the primitives; an input handler
uses the hit regions to route a click back to ``(rung_number, index)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pyrsistent import PMap

from ladderview.core.elements import Instruction

Role = Literal["rail", "wire", "branch", "glyph"]
Anchor = Literal["start", "middle", "end"]

# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    role: Role = "wire"
    stroke_width: float = 2


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    role: Role = "glyph"

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    role: Role = "glyph"


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    size: float = 11
    anchor: Anchor = "middle"
    bold: bool = False
    mono: bool = True


Primitive = Line | Rect | Circle | Text

# ---------------------------------------------------------------------------
# Derived records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HitRegion:
    """Maps a drawn instruction back to its identity in the rung.

    Attributes:
        rung_number: Owning rung.
        index: Pre-order instruction index within the rung.
        type: Instruction mnemonic.
        values: Operand values in source order.
        fields: Operand values keyed by catalog field name.
        bounds: Clickable area.
        branch_path: Leg indexes of enclosing branches, outermost first.
    """

    rung_number: int
    index: int
    type: str
    values: tuple[str, ...]
    fields: PMap
    bounds: Rect
    branch_path: tuple[int, ...] = ()
    instruction: Instruction | None = field(default=None, compare=False, repr=False)

    def contains(self, x: float, y: float) -> bool:
        return self.bounds.contains(x, y)


@dataclass(frozen=True)
class BranchGeometry:
    """Fan-out/merge coordinates of one laid-out branch.

    Attributes:
        start_x: Where the branch leaves the enclosing rail.
        entry_x: X of the split connectors; every leg starts here.
        merge_x: X of the merge connectors; every leg ends here.
        end_x: Where the enclosing rail resumes.
        main_y: Y of the enclosing rail.
        leg_ys: Y of each leg's rail.
        leg_end_xs: X reached by each leg's own elements.
        depth: Nesting depth (0 for a branch on the main rail).
    """

    start_x: float
    entry_x: float
    merge_x: float
    end_x: float
    main_y: float
    leg_ys: tuple[float, ...]
    leg_end_xs: tuple[float, ...]
    depth: int = 0

    @property
    def leg_widths(self) -> tuple[float, ...]:
        return tuple(end - self.entry_x for end in self.leg_end_xs)

    @property
    def width(self) -> float:
        return self.end_x - self.start_x


@dataclass(frozen=True)
class Diagram:
    """Layout result for one rung.

    ``top`` is the smallest y drawn (0 unless upper branch legs rise above
    the rail); the drawing spans ``top`` to ``top + height``.
    """

    rung_number: int
    primitives: tuple[Primitive, ...]
    hit_regions: tuple[HitRegion, ...]
    branches: tuple[BranchGeometry, ...]
    width: float
    height: float
    top: float = 0
    rail_end_x: float = 0

    @property
    def is_empty(self) -> bool:
        return not self.hit_regions and not self.branches

    def hit_test(self, x: float, y: float) -> HitRegion | None:
        """Return the instruction drawn at ``(x, y)``, if any."""
        for region in self.hit_regions:
            if region.contains(x, y):
                return region
        return None

    def region(self, index: int) -> HitRegion:
        for region in self.hit_regions:
            if region.index == index:
                return region
        raise IndexError(f"Rung {self.rung_number} has no instruction {index}")

    def lines(self, role: Role | None = None) -> tuple[Line, ...]:
        return tuple(
            p for p in self.primitives if isinstance(p, Line) and (role is None or p.role == role)
        )
