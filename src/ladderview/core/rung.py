"""Immutable rung and routine records.

A :class:`Rung` owns its parse tree. Edits never mutate a rung: each one
returns a new record whose ``parsed`` tree is patched copy-on-write and whose
``text`` is regenerated from it. Instructions are addressed by their pre-order
index (see :mod:`ladderview.core.walker`).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import cast

from pyrsistent import PRecord, PVector, field, pvector

from ladderview.core.elements import Branch, Instruction, RungElement, count_instructions
from ladderview.core.parser import ParseResult, parse_rung_text, parse_rung_text_with_diagnostics
from ladderview.core.serializer import rung_text
from ladderview.core.walker import InstructionLocation, locate

Elements = tuple[RungElement, ...]
Path = tuple[tuple[int, int], ...]


class InstructionIndexError(IndexError):
    """Raised when an edit names an instruction index the rung does not have."""

    def __init__(self, index: int, count: int, rung_number: int | None = None) -> None:
        where = f" in rung {rung_number}" if rung_number is not None else ""
        super().__init__(f"Instruction index {index} out of range{where} (rung has {count})")
        self.index = index
        self.count = count
        self.rung_number = rung_number


def _non_negative(value: int) -> tuple[bool, str]:
    return value >= 0, "rung number must be >= 0"


class Rung(PRecord):
    """One numbered rung.

    Attributes:
        number: Caller-assigned identifier (not an array index).
        text: Raw or regenerated rung text.
        parsed: Parse tree of ``text``.
        comment: Optional rung comment.
    """

    number = field(type=int, mandatory=True, invariant=_non_negative)
    text = field(type=str, initial="")
    parsed = field(type=PVector, initial=pvector(), factory=pvector)
    comment = field(type=(str, type(None)), initial=None)

    @classmethod
    def from_text(cls, number: int, text: str, comment: str | None = None) -> Rung:
        return cls(number=number, text=text, parsed=parse_rung_text(text), comment=comment)

    @classmethod
    def from_elements(cls, number: int, elements: Iterable[RungElement]) -> Rung:
        elements = tuple(elements)
        return cls(number=number, text=rung_text(elements), parsed=elements)

    @property
    def elements(self) -> Elements:
        return tuple(self.parsed)

    @property
    def is_empty(self) -> bool:
        return not self.parsed

    @property
    def instruction_count(self) -> int:
        return count_instructions(self.parsed)

    def diagnostics(self) -> ParseResult:
        """Re-parse ``text`` and report what the parser tolerated."""
        return parse_rung_text_with_diagnostics(self.text)

    # -- edits (all return a new Rung) ---------------------------------------

    def with_text(self, text: str) -> Rung:
        return cast(Rung, self.set(text=text, parsed=parse_rung_text(text)))

    def with_elements(self, elements: Iterable[RungElement]) -> Rung:
        elements = tuple(elements)
        return cast(Rung, self.set(text=rung_text(elements), parsed=elements))

    def instruction_at(self, index: int) -> Instruction:
        return self._locate(index).instruction

    def with_instruction(self, index: int, instruction: Instruction) -> Rung:
        """Replace instruction ``index``."""
        location = self._locate(index)

        def replace(seq: Elements) -> Elements:
            return seq[: location.position] + (instruction,) + seq[location.position + 1 :]

        return self.with_elements(_edit(self.elements, location.path, replace))

    def without_instruction(self, index: int) -> Rung:
        """Remove instruction ``index``; emptied legs and branches go with it."""
        location = self._locate(index)

        def remove(seq: Elements) -> Elements:
            return seq[: location.position] + seq[location.position + 1 :]

        return self.with_elements(_edit(self.elements, location.path, remove))

    def insert_instruction(self, index: int, instruction: Instruction) -> Rung:
        """Insert before instruction ``index``, or append when ``index`` equals the count."""
        count = self.instruction_count
        if index == count:
            return self.with_elements(self.elements + (instruction,))
        location = self._locate(index)

        def insert(seq: Elements) -> Elements:
            return seq[: location.position] + (instruction,) + seq[location.position :]

        return self.with_elements(_edit(self.elements, location.path, insert))

    def _locate(self, index: int) -> InstructionLocation:
        location = locate(self.parsed, index)
        if location is None:
            raise InstructionIndexError(index, self.instruction_count, self.number)
        return location


def _edit(elements: Elements, path: Path, change: Callable[[Elements], Elements]) -> Elements:
    """Apply ``change`` to the sequence at ``path``, rebuilding enclosing branches."""
    if not path:
        return change(elements)
    (position, leg_index), rest = path[0], path[1:]
    branch = cast(Branch, elements[position])
    legs = list(branch.branches)
    legs[leg_index] = _edit(legs[leg_index], rest, change)
    kept = tuple(leg for leg in legs if leg)
    replacement: Elements = (Branch(kept),) if kept else ()
    return elements[:position] + replacement + elements[position + 1 :]


class Routine(PRecord):
    """An ordered collection of rungs keyed by rung number."""

    name = field(type=str, mandatory=True)
    rungs = field(type=PVector, initial=pvector(), factory=pvector)

    @classmethod
    def from_texts(cls, name: str, texts: Iterable[str]) -> Routine:
        return cls(name=name, rungs=[Rung.from_text(i, text) for i, text in enumerate(texts)])

    @property
    def numbers(self) -> tuple[int, ...]:
        return tuple(rung.number for rung in self.rungs)

    def rung(self, number: int) -> Rung:
        return self.rungs[self._position(number)]

    def next_number(self) -> int:
        return max(self.numbers, default=-1) + 1

    def add_rung(self, text: str = "", *, number: int | None = None, comment: str | None = None) -> Routine:
        """Append a rung parsed from ``text``. Numbers default to one past the highest."""
        if number is None:
            number = self.next_number()
        elif number in self.numbers:
            raise ValueError(f"Routine {self.name!r} already has rung {number}")
        rung = Rung.from_text(number, text, comment)
        return cast(Routine, self.set(rungs=self.rungs.append(rung)))

    def replace_rung(self, rung: Rung) -> Routine:
        position = self._position(rung.number)
        return cast(Routine, self.set(rungs=self.rungs.set(position, rung)))

    def remove_rung(self, number: int) -> Routine:
        position = self._position(number)
        return cast(Routine, self.set(rungs=self.rungs.delete(position)))

    def renumbered(self) -> Routine:
        """Return a routine whose rungs are numbered 0..n-1 in order."""
        rungs = [rung.set(number=i) for i, rung in enumerate(self.rungs)]
        return cast(Routine, self.set(rungs=rungs))

    def _position(self, number: int) -> int:
        for position, rung in enumerate(self.rungs):
            if rung.number == number:
                return position
        raise KeyError(number)
