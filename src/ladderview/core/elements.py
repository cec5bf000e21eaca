"""Parse-tree model for Rockwell rung text.

A rung is a sequence of :data:`RungElement` values. Each element is either an
:class:`Instruction` (a leaf with a mnemonic and operands) or a :class:`Branch`
(parallel legs that rejoin into a single path).

All nodes are frozen and hold tuples, so two trees compare equal exactly when
they have the same instruction types, operands, order and branch nesting.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Operand variants (one per arity class)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Nullary:
    """No operands, e.g. ``NOP()`` or ``RET()``."""

    arity = 0

    def values(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class Unary:
    """One operand: bit instructions, timers, counters, one-shots."""

    tag: str
    arity = 1

    def values(self) -> tuple[str, ...]:
        return (self.tag,)


@dataclass(frozen=True)
class Binary:
    """Two operands, assigned positionally to ``source`` and ``dest``."""

    source: str
    dest: str
    arity = 2

    def values(self) -> tuple[str, ...]:
        return (self.source, self.dest)


@dataclass(frozen=True)
class NAry:
    """Three or more operands kept as an ordered tuple."""

    params: tuple[str, ...]

    @property
    def arity(self) -> int:
        return len(self.params)

    def values(self) -> tuple[str, ...]:
        return self.params


Operands = Nullary | Unary | Binary | NAry

_OPERAND_SLOTS: dict[type, frozenset[str]] = {
    Nullary: frozenset(),
    Unary: frozenset({"tag"}),
    Binary: frozenset({"source", "dest"}),
    NAry: frozenset({"params"}),
}


def operands_from_values(values: Sequence[str]) -> Operands:
    """Build the operand variant matching ``len(values)``."""
    if not values:
        return Nullary()
    if len(values) == 1:
        return Unary(values[0])
    if len(values) == 2:
        return Binary(values[0], values[1])
    return NAry(tuple(values))


# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Instruction:
    """A single ladder instruction.

    Attributes:
        type: Instruction mnemonic (``XIC``, ``MOV``, ``TON`` ...). The
            vocabulary is open; any ``[A-Z_]+`` token is accepted.
        operands: Arity-specific operand record.
    """

    type: str
    operands: Operands = field(default_factory=Nullary)

    def __post_init__(self) -> None:
        if not self.type:
            raise ValueError("Instruction type must be non-empty")

    @classmethod
    def of(cls, type: str, *values: str) -> Instruction:
        """Convenience constructor: ``Instruction.of("MOV", "100", "Dest")``."""
        return cls(type, operands_from_values(values))

    @property
    def values(self) -> tuple[str, ...]:
        """Operand values in source order."""
        return self.operands.values()

    def has_operand(self, name: str) -> bool:
        """True if this instruction's arity class carries the named slot."""
        return name in _OPERAND_SLOTS[type(self.operands)]

    @property
    def tag(self) -> str | None:
        return self.operands.tag if isinstance(self.operands, Unary) else None

    @property
    def source(self) -> str | None:
        return self.operands.source if isinstance(self.operands, Binary) else None

    @property
    def dest(self) -> str | None:
        return self.operands.dest if isinstance(self.operands, Binary) else None

    @property
    def params(self) -> tuple[str, ...]:
        return self.operands.params if isinstance(self.operands, NAry) else ()


@dataclass(frozen=True)
class Branch:
    """Parallel legs that rejoin into a single path (ladder OR)."""

    branches: tuple[tuple[RungElement, ...], ...]

    @classmethod
    def of(cls, *legs: Iterable[RungElement]) -> Branch:
        return cls(tuple(tuple(leg) for leg in legs))

    @property
    def legs(self) -> tuple[tuple[RungElement, ...], ...]:
        return self.branches


RungElement = Instruction | Branch


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------


def iter_instructions(elements: Iterable[RungElement]) -> Iterator[Instruction]:
    """Yield every instruction in depth-first pre-order."""
    for element in elements:
        if isinstance(element, Branch):
            for leg in element.branches:
                yield from iter_instructions(leg)
        else:
            yield element


def count_instructions(elements: Iterable[RungElement]) -> int:
    return sum(1 for _ in iter_instructions(elements))


def max_depth(elements: Iterable[RungElement]) -> int:
    """Deepest branch nesting level (0 for a rung without branches)."""
    depth = 0
    for element in elements:
        if isinstance(element, Branch):
            legs = element.branches or ((),)
            depth = max(depth, 1 + max(max_depth(leg) for leg in legs))
    return depth
