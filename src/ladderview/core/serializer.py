"""Render a parse tree back to canonical rung text.

Elements on a rail are written back to back, branch legs are separated by
``,`` and zero-operand instructions are written as ``TYPE()``. Parsing the
output yields a structurally equal tree.
"""

from __future__ import annotations

from collections.abc import Iterable

from ladderview.core.elements import Branch, Instruction, RungElement


def instruction_text(instruction: Instruction) -> str:
    return f"{instruction.type}({','.join(instruction.values)})"


def branch_text(branch: Branch) -> str:
    legs = ",".join(serialize_rung_elements(leg) for leg in branch.branches)
    return f"[{legs}]"


def serialize_rung_elements(elements: Iterable[RungElement]) -> str:
    """Canonical text for a sequence of elements, without the trailing ``;``."""
    parts: list[str] = []
    for element in elements:
        if isinstance(element, Branch):
            parts.append(branch_text(element))
        else:
            parts.append(instruction_text(element))
    return "".join(parts)


def rung_text(elements: Iterable[RungElement]) -> str:
    """Canonical text terminated with ``;`` as stored in L5X files."""
    return serialize_rung_elements(elements) + ";"
