"""Find instructions across routines by mnemonic or operand text."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ladderview.core.elements import Instruction
from ladderview.core.rung import Routine
from ladderview.core.walker import InstructionLocation, walk_instructions


@dataclass(frozen=True)
class InstructionMatch:
    """One instruction that matched a search.

    ``(routine, rung_number, index)`` is enough to select the rung and the
    instruction in an editor.
    """

    routine: str
    rung_number: int
    location: InstructionLocation

    @property
    def index(self) -> int:
        return self.location.index

    @property
    def instruction(self) -> Instruction:
        return self.location.instruction


def _matches(instruction: Instruction, needle: str) -> bool:
    if needle in instruction.type.lower():
        return True
    return any(needle in value.lower() for value in instruction.values)


def iter_matches(routines: Iterable[Routine], query: str) -> Iterator[InstructionMatch]:
    needle = query.strip().lower()
    if not needle:
        return
    for routine in routines:
        for rung in routine.rungs:
            for location in walk_instructions(rung.parsed):
                if _matches(location.instruction, needle):
                    yield InstructionMatch(routine.name, rung.number, location)


def find_instructions(routines: Iterable[Routine], query: str) -> list[InstructionMatch]:
    """Return instructions whose mnemonic or any operand contains ``query``.

    Matching is case-insensitive substring matching, in routine, rung and
    pre-order instruction order. A blank query matches nothing.
    """
    return list(iter_matches(routines, query))
