"""Instruction catalog.

Static metadata for the Logix instructions the editor knows how to draw and
label. The parser never consults this table: any ``[A-Z_]+`` mnemonic parses.
Rendering and editing look mnemonics up here and fall back to
:data:`GENERIC` for anything unknown.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from ladderview.core.elements import Instruction


class Glyph(Enum):
    """How an instruction is drawn on the rail."""

    CONTACT = "contact"
    CONTACT_NC = "contact_nc"
    COIL = "coil"
    COIL_LATCH = "coil_latch"
    COIL_UNLATCH = "coil_unlatch"
    BOX = "box"
    GENERIC = "generic"

    @property
    def is_contact(self) -> bool:
        return self in (Glyph.CONTACT, Glyph.CONTACT_NC)

    @property
    def is_coil(self) -> bool:
        return self in (Glyph.COIL, Glyph.COIL_LATCH, Glyph.COIL_UNLATCH)


@dataclass(frozen=True)
class InstructionSpec:
    """Static description of one instruction mnemonic.

    Attributes:
        mnemonic: Instruction type as written in rung text (e.g. ``"TON"``).
        name: Human-readable name.
        description: One-line summary.
        category: Palette group (``bit``, ``timer``, ``compare`` ...).
        glyph: Drawing style.
        operand_names: Field name for each positional operand.
    """

    mnemonic: str
    name: str
    description: str
    category: str
    glyph: Glyph
    operand_names: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Helper factories
# ---------------------------------------------------------------------------


def _bit(mnemonic: str, name: str, description: str, glyph: Glyph, *operands: str) -> InstructionSpec:
    return InstructionSpec(mnemonic, name, description, "bit", glyph, operands or ("tag",))


def _timer(mnemonic: str, name: str, description: str, structure: str) -> InstructionSpec:
    return InstructionSpec(
        mnemonic, name, description, "timer", Glyph.BOX, (structure, "preset", "accum")
    )


def _compare(mnemonic: str, name: str, description: str) -> InstructionSpec:
    return InstructionSpec(mnemonic, name, description, "compare", Glyph.BOX, ("source_a", "source_b"))


def _math3(mnemonic: str, name: str, description: str, category: str = "math") -> InstructionSpec:
    return InstructionSpec(
        mnemonic, name, description, category, Glyph.BOX, ("source_a", "source_b", "dest")
    )


def _move2(mnemonic: str, name: str, description: str, category: str = "move") -> InstructionSpec:
    return InstructionSpec(mnemonic, name, description, category, Glyph.BOX, ("source", "dest"))


def _control(mnemonic: str, name: str, description: str, *operands: str) -> InstructionSpec:
    return InstructionSpec(mnemonic, name, description, "program", Glyph.GENERIC, operands)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

_SPECS: tuple[InstructionSpec, ...] = (
    # Bit
    _bit("XIC", "Examine If Closed", "Checks if bit is ON (1)", Glyph.CONTACT),
    _bit("XIO", "Examine If Open", "Checks if bit is OFF (0)", Glyph.CONTACT_NC),
    _bit("OTE", "Output Energize", "Sets bit ON when rung is true", Glyph.COIL),
    _bit("OTL", "Output Latch", "Latches bit ON (retentive)", Glyph.COIL_LATCH),
    _bit("OTU", "Output Unlatch", "Unlatches bit OFF", Glyph.COIL_UNLATCH),
    _bit("ONS", "One Shot", "Executes once per false-to-true transition", Glyph.GENERIC, "storage"),
    _bit("OSR", "One Shot Rising", "One shot on rising edge", Glyph.BOX, "storage", "output"),
    _bit("OSF", "One Shot Falling", "One shot on falling edge", Glyph.BOX, "storage", "output"),
    # Timer / counter
    _timer("TON", "Timer On Delay", "Delays turning ON", "timer"),
    _timer("TOF", "Timer Off Delay", "Delays turning OFF", "timer"),
    _timer("RTO", "Retentive Timer On", "Retentive on-delay timer", "timer"),
    _timer("CTU", "Count Up", "Increments counter", "counter"),
    _timer("CTD", "Count Down", "Decrements counter", "counter"),
    InstructionSpec("RES", "Reset", "Resets timer or counter", "timer", Glyph.GENERIC, ("structure",)),
    # Compare
    _compare("EQU", "Equal", "Tests if A equals B"),
    _compare("NEQ", "Not Equal", "Tests if A not equal to B"),
    _compare("LES", "Less Than", "Tests if A less than B"),
    _compare("LEQ", "Less Than or Equal", "Tests if A <= B"),
    _compare("GRT", "Greater Than", "Tests if A greater than B"),
    _compare("GEQ", "Greater Than or Equal", "Tests if A >= B"),
    InstructionSpec(
        "LIM", "Limit Test", "Tests if value within limits", "compare", Glyph.BOX,
        ("low_limit", "test", "high_limit"),
    ),
    # Math
    _math3("ADD", "Add", "Adds two values"),
    _math3("SUB", "Subtract", "Subtracts B from A"),
    _math3("MUL", "Multiply", "Multiplies two values"),
    _math3("DIV", "Divide", "Divides A by B"),
    _math3("MOD", "Modulo", "Returns remainder"),
    _move2("NEG", "Negate", "Changes sign of value", "math"),
    _move2("ABS", "Absolute Value", "Returns absolute value", "math"),
    _move2("SQR", "Square Root", "Calculates square root", "math"),
    # Move / logical
    _move2("MOV", "Move", "Copies value to destination"),
    InstructionSpec("MVM", "Masked Move", "Moves with mask", "move", Glyph.BOX, ("source", "mask", "dest")),
    InstructionSpec("CLR", "Clear", "Sets value to zero", "move", Glyph.BOX, ("dest",)),
    InstructionSpec(
        "BTD", "Bit Field Distribute", "Moves bits within words", "move", Glyph.BOX,
        ("source", "source_bit", "dest", "dest_bit", "length"),
    ),
    _math3("AND", "Bitwise AND", "Logical AND operation", "move"),
    _math3("OR", "Bitwise OR", "Logical OR operation", "move"),
    _math3("XOR", "Bitwise XOR", "Logical XOR operation", "move"),
    _move2("NOT", "Bitwise NOT", "Logical NOT operation"),
    # Program control
    _control("JSR", "Jump to Subroutine", "Calls another routine", "routine_name"),
    _control("RET", "Return", "Returns from subroutine"),
    _control("JMP", "Jump to Label", "Jumps to label", "label"),
    _control("LBL", "Label", "Defines jump target", "label"),
    _control("MCR", "Master Control Reset", "Zone control start/end"),
    _control("AFI", "Always False", "Always evaluates false"),
    _control("NOP", "No Operation", "Placeholder instruction"),
)

CATALOG: Final[dict[str, InstructionSpec]] = {spec.mnemonic: spec for spec in _SPECS}

GENERIC: Final = InstructionSpec("", "Instruction", "Unknown instruction", "other", Glyph.GENERIC)

CATEGORIES: Final[tuple[str, ...]] = ("bit", "timer", "compare", "math", "move", "program")


def lookup(mnemonic: str) -> InstructionSpec:
    """Return the catalog entry for ``mnemonic`` or :data:`GENERIC`."""
    return CATALOG.get(mnemonic, GENERIC)


def is_known(mnemonic: str) -> bool:
    return mnemonic in CATALOG


def by_category(category: str) -> tuple[InstructionSpec, ...]:
    return tuple(spec for spec in _SPECS if spec.category == category)


def _fallback_names(count: int) -> tuple[str, ...]:
    if count == 1:
        return ("tag",)
    if count == 2:
        return ("source", "dest")
    return tuple(f"param{i}" for i in range(count))


def label_operands(instruction: Instruction) -> dict[str, str]:
    """Map an instruction's operand values to catalog field names.

    Known mnemonics name operands positionally from the catalog; surplus
    values are named ``param{i}`` by position. Unknown mnemonics use the
    arity convention: ``tag`` / ``source``, ``dest`` / ``param{i}``.
    """
    values = instruction.values
    spec = CATALOG.get(instruction.type)
    names = spec.operand_names if spec is not None else _fallback_names(len(values))
    labeled: dict[str, str] = {}
    for i, value in enumerate(values):
        labeled[names[i] if i < len(names) else f"param{i}"] = value
    return labeled
