"""Tests for pre-order instruction numbering."""

from __future__ import annotations

from ladderview.core.elements import Instruction
from ladderview.core.parser import parse_rung_text
from ladderview.core.walker import locate, walk_instructions


def test_indexes_are_preorder_across_legs() -> None:
    elements = parse_rung_text("XIC(A)[XIC(B),XIC(C)[XIO(D),XIO(E)]]OTE(F)")
    tags = [loc.instruction.tag for loc in walk_instructions(elements)]
    assert tags == ["A", "B", "C", "D", "E", "F"]
    assert [loc.index for loc in walk_instructions(elements)] == list(range(6))


def test_location_paths() -> None:
    elements = parse_rung_text("[XIC(A),XIC(B)[XIO(C),XIO(D)]]OTE(E)")
    locations = {loc.instruction.tag: loc for loc in walk_instructions(elements)}

    assert locations["A"].path == ((0, 0),)
    assert locations["B"].path == ((0, 1),)
    assert locations["B"].position == 0
    assert locations["D"].path == ((0, 1), (1, 1))
    assert locations["D"].branch_path == (1, 1)
    assert locations["D"].depth == 2
    assert locations["E"].path == ()
    assert locations["E"].position == 1


def test_locate() -> None:
    elements = parse_rung_text("XIC(A)[XIC(B),XIC(C)]")
    location = locate(elements, 2)
    assert location is not None
    assert location.instruction == Instruction.of("XIC", "C")
    assert locate(elements, 3) is None
    assert locate(elements, -1) is None
    assert locate((), 0) is None
