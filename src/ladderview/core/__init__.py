"""Rung text model.

Parse Rockwell Logix rung text into an immutable tree, walk and edit it, and
write it back out::

    parse_rung_text(text) -> tuple[RungElement, ...]
    serialize_rung_elements(elements) -> str

The parser is permissive and never raises; the serializer's output parses
back to an equal tree.
"""

from ladderview.core.catalog import (
    CATALOG,
    CATEGORIES,
    GENERIC,
    Glyph,
    InstructionSpec,
    by_category,
    is_known,
    label_operands,
    lookup,
)
from ladderview.core.elements import (
    Binary,
    Branch,
    Instruction,
    NAry,
    Nullary,
    Operands,
    RungElement,
    Unary,
    count_instructions,
    iter_instructions,
    max_depth,
    operands_from_values,
)
from ladderview.core.parser import (
    ParseDiagnostic,
    ParseResult,
    parse_rung_text,
    parse_rung_text_with_diagnostics,
)
from ladderview.core.rung import InstructionIndexError, Routine, Rung
from ladderview.core.search import InstructionMatch, find_instructions, iter_matches
from ladderview.core.serializer import (
    branch_text,
    instruction_text,
    rung_text,
    serialize_rung_elements,
)
from ladderview.core.walker import InstructionLocation, locate, walk_instructions

__all__ = [
    # Tree
    "Instruction",
    "Branch",
    "RungElement",
    "Operands",
    "Nullary",
    "Unary",
    "Binary",
    "NAry",
    "operands_from_values",
    "iter_instructions",
    "count_instructions",
    "max_depth",
    # Text
    "parse_rung_text",
    "parse_rung_text_with_diagnostics",
    "ParseResult",
    "ParseDiagnostic",
    "serialize_rung_elements",
    "rung_text",
    "instruction_text",
    "branch_text",
    # Walking
    "InstructionLocation",
    "walk_instructions",
    "locate",
    # Search
    "InstructionMatch",
    "find_instructions",
    "iter_matches",
    # Records
    "Rung",
    "Routine",
    "InstructionIndexError",
    # Catalog
    "CATALOG",
    "CATEGORIES",
    "GENERIC",
    "Glyph",
    "InstructionSpec",
    "lookup",
    "is_known",
    "by_category",
    "label_operands",
]
