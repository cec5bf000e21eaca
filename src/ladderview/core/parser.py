"""Recursive-descent parser for Rockwell rung text.

Grammar::

    Rung        := Element*
    Element     := Branch | Instruction
    Branch      := '[' Leg (',' Leg)* ']'
    Leg         := Element*
    Instruction := NAME '(' ParamList ')' | NAME
    NAME        := [A-Z_]+
    ParamList   := Param (',' Param)* | <empty>

Parameters may contain balanced ``(...)`` groups; only top-level commas split
them. Tokenizing and parsing happen in one pass over a cursor.

The parser never raises on malformed text. Characters that cannot start an
element are skipped one at a time, and a missing ``]`` or ``)`` consumes the
rest of the input. This keeps every recognizable instruction in a partly
garbled rung. What was dropped is reported through
:func:`parse_rung_text_with_diagnostics` without changing the parse result.

Branches nest at most :data:`MAX_BRANCH_DEPTH` deep; a ``[`` past that depth is
skipped and reported as ``too_deep``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from ladderview.core.elements import Branch, Instruction, RungElement, operands_from_values

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public types
# ---------------------------------------------------------------------------

DiagnosticKind = Literal[
    "skipped",
    "unterminated_branch",
    "unterminated_instruction",
    "empty_leg",
    "empty_branch",
    "too_deep",
]


@dataclass(frozen=True)
class ParseDiagnostic:
    """Something the parser tolerated instead of rejecting.

    ``start``/``end`` index into the string passed by the caller.
    """

    kind: DiagnosticKind
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class ParseResult:
    elements: tuple[RungElement, ...]
    diagnostics: tuple[ParseDiagnostic, ...] = ()

    @property
    def clean(self) -> bool:
        return not self.diagnostics


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_rung_text(text: str) -> tuple[RungElement, ...]:
    """Parse one rung's instruction text into a tree of elements.

    >>> parse_rung_text("XIC(Start)OTE(Motor);")
    (Instruction(type='XIC', operands=Unary(tag='Start')), Instruction(type='OTE', operands=Unary(tag='Motor')))
    """
    return parse_rung_text_with_diagnostics(text).elements


def parse_rung_text_with_diagnostics(text: str) -> ParseResult:
    """Parse rung text and also report skipped or unterminated fragments."""
    body, offset = _normalize(text)
    result = _Parser(body, offset).parse()
    for diag in result.diagnostics:
        logger.debug(
            "Rung text %s at %d-%d: %r", diag.kind.replace("_", " "), diag.start, diag.end, diag.text
        )
    return result


def _normalize(text: str) -> tuple[str, int]:
    """Strip surrounding whitespace and one trailing ``;``.

    Returns the body and the offset of its first character in ``text``.
    """
    stripped = text.strip()
    if stripped.endswith(";"):
        stripped = stripped[:-1].rstrip()
    offset = len(text) - len(text.lstrip()) if stripped else 0
    return stripped, offset


# ---------------------------------------------------------------------------
# Parser implementation
# ---------------------------------------------------------------------------

_NAME = re.compile(r"[A-Z_]+")
MAX_BRANCH_DEPTH = 64
_BARE_TERMINATORS = frozenset(",[]")


def _is_identifier_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class _Parser:
    """Cursor state for one parse call."""

    def __init__(self, source: str, offset: int) -> None:
        self._source = source
        self._offset = offset
        self._pos = 0
        self._diagnostics: list[ParseDiagnostic] = []

    def parse(self) -> ParseResult:
        elements: list[RungElement] = []
        while True:
            self._skip_ws()
            if self._eof():
                break
            if self._peek() == "[":
                branch = self._parse_branch(1)
                if branch is not None:
                    elements.append(branch)
                continue
            instruction = self._parse_instruction()
            if instruction is not None:
                elements.append(instruction)
            else:
                self._skip_char()
        return ParseResult(tuple(elements), tuple(self._diagnostics))

    # -- branches ------------------------------------------------------------

    def _parse_branch(self, depth: int) -> Branch | None:
        open_pos = self._pos
        self._pos += 1  # '['
        legs: list[tuple[RungElement, ...]] = []
        empty_legs: list[int] = []
        current: list[RungElement] = []

        def close_leg() -> None:
            if current:
                legs.append(tuple(current))
            else:
                empty_legs.append(self._pos)
            current.clear()

        while True:
            self._skip_ws()
            if self._eof():
                self._report("unterminated_branch", open_pos, self._pos)
                close_leg()
                break
            ch = self._peek()
            if ch == "]":
                close_leg()
                self._pos += 1
                break
            if ch == ",":
                close_leg()
                self._pos += 1
                continue
            if ch == "[":
                if depth >= MAX_BRANCH_DEPTH:
                    self._skip_char("too_deep")
                    continue
                nested = self._parse_branch(depth + 1)
                if nested is not None:
                    current.append(nested)
                continue
            instruction = self._parse_instruction()
            if instruction is not None:
                current.append(instruction)
            else:
                self._skip_char()

        if not legs:
            self._report("empty_branch", open_pos, self._pos)
            return None
        for pos in empty_legs:
            self._report("empty_leg", pos, pos)
        return Branch(tuple(legs))

    # -- instructions --------------------------------------------------------

    def _parse_instruction(self) -> Instruction | None:
        start = self._pos
        match = _NAME.match(self._source, start)
        if match is None:
            return None
        name = match.group()

        probe = match.end()
        while probe < len(self._source) and self._source[probe].isspace():
            probe += 1
        if probe < len(self._source) and self._source[probe] == "(":
            self._pos = probe + 1
            values = self._parse_params(start)
            return Instruction(name, operands_from_values(values))

        if self._is_bare_word(start, match.end()):
            self._pos = match.end()
            return Instruction(name)
        return None

    def _is_bare_word(self, start: int, end: int) -> bool:
        if start > 0 and _is_identifier_char(self._source[start - 1]):
            return False
        if end >= len(self._source):
            return True
        follower = self._source[end]
        return follower.isspace() or follower in _BARE_TERMINATORS

    def _parse_params(self, instruction_start: int) -> list[str]:
        """Consume parameters up to the matching ``)``; cursor is after ``(``."""
        parts: list[str] = []
        depth = 0
        segment_start = self._pos
        while not self._eof():
            ch = self._peek()
            if ch == "(":
                depth += 1
            elif ch == ")":
                if depth == 0:
                    parts.append(self._source[segment_start : self._pos])
                    self._pos += 1
                    return _clean_params(parts)
                depth -= 1
            elif ch == "," and depth == 0:
                parts.append(self._source[segment_start : self._pos])
                segment_start = self._pos + 1
            self._pos += 1

        # Close open groups so the captured operand re-parses to itself.
        parts.append(self._source[segment_start : self._pos] + ")" * depth)
        self._report("unterminated_instruction", instruction_start, self._pos)
        return _clean_params(parts)

    # -- cursor helpers ------------------------------------------------------

    def _skip_char(self, kind: DiagnosticKind = "skipped") -> None:
        """Drop one unusable character, merging runs of the same kind into one diagnostic."""
        pos = self._pos
        self._pos += 1
        last = self._diagnostics[-1] if self._diagnostics else None
        if last is not None and last.kind == kind and last.end == pos + self._offset:
            self._diagnostics[-1] = ParseDiagnostic(
                kind, last.start, pos + 1 + self._offset, last.text + self._source[pos]
            )
            return
        self._report(kind, pos, pos + 1)

    def _report(self, kind: DiagnosticKind, start: int, end: int) -> None:
        self._diagnostics.append(
            ParseDiagnostic(
                kind,
                start + self._offset,
                end + self._offset,
                self._source[start:end],
            )
        )

    def _skip_ws(self) -> None:
        while not self._eof() and self._source[self._pos].isspace():
            self._pos += 1

    def _peek(self) -> str:
        return self._source[self._pos]

    def _eof(self) -> bool:
        return self._pos >= len(self._source)


def _clean_params(parts: list[str]) -> list[str]:
    values = [part.strip() for part in parts]
    if values == [""]:
        return []
    return values
