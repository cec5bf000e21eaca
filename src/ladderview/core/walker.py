"""Deterministic instruction walk over a rung's parse tree.

Instructions are numbered depth-first in pre-order with one counter shared
across every branch leg. That number is the instruction's identity within a
rung for hit regions and edits.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ladderview.core.elements import Branch, Instruction, RungElement


@dataclass(frozen=True)
class InstructionLocation:
    """Where an instruction sits in the tree.

    Attributes:
        index: Pre-order instruction number within the rung.
        path: Positions leading to the instruction. Each step is
            ``(element_position, leg_index)`` for an enclosing branch; the
            final element position is ``position``.
        position: Index of the instruction within its own sequence.
        instruction: The instruction itself.
    """

    index: int
    path: tuple[tuple[int, int], ...]
    position: int
    instruction: Instruction

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def branch_path(self) -> tuple[int, ...]:
        """Leg indexes only, outermost first."""
        return tuple(leg for _, leg in self.path)


def walk_instructions(elements: Iterable[RungElement]) -> Iterator[InstructionLocation]:
    for index, (path, position, instruction) in enumerate(_walk(tuple(elements), ())):
        yield InstructionLocation(index, path, position, instruction)


def _walk(
    elements: tuple[RungElement, ...],
    path: tuple[tuple[int, int], ...],
) -> Iterator[tuple[tuple[tuple[int, int], ...], int, Instruction]]:
    for position, element in enumerate(elements):
        if isinstance(element, Branch):
            for leg_index, leg in enumerate(element.branches):
                yield from _walk(leg, path + ((position, leg_index),))
        else:
            yield path, position, element


def locate(elements: Iterable[RungElement], index: int) -> InstructionLocation | None:
    """Return the location of instruction ``index`` or ``None`` if absent."""
    if index < 0:
        return None
    for location in walk_instructions(elements):
        if location.index == index:
            return location
    return None
