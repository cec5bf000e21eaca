"""Tests for instruction catalog lookups and operand labels."""

from __future__ import annotations

from ladderview.core.catalog import (
    CATALOG,
    CATEGORIES,
    GENERIC,
    Glyph,
    by_category,
    is_known,
    label_operands,
    lookup,
)
from ladderview.core.elements import Instruction


def test_lookup_known_and_unknown() -> None:
    assert lookup("XIC").glyph is Glyph.CONTACT
    assert lookup("XIO").glyph is Glyph.CONTACT_NC
    assert lookup("OTL").glyph is Glyph.COIL_LATCH
    assert lookup("TON").glyph is Glyph.BOX
    assert lookup("ZZZ") is GENERIC
    assert is_known("MOV")
    assert not is_known("ZZZ")


def test_glyph_groups() -> None:
    assert Glyph.CONTACT_NC.is_contact
    assert Glyph.COIL_UNLATCH.is_coil
    assert not Glyph.BOX.is_contact
    assert not Glyph.GENERIC.is_coil


def test_every_entry_has_a_known_category() -> None:
    for mnemonic, spec in CATALOG.items():
        assert spec.mnemonic == mnemonic
        assert spec.category in CATEGORIES


def test_by_category() -> None:
    compares = {spec.mnemonic for spec in by_category("compare")}
    assert {"EQU", "NEQ", "LES", "LEQ", "GRT", "GEQ", "LIM"} == compares


def test_label_operands_uses_catalog_names() -> None:
    assert label_operands(Instruction.of("TON", "T1", "5000", "0")) == {
        "timer": "T1",
        "preset": "5000",
        "accum": "0",
    }
    assert label_operands(Instruction.of("MOV", "100", "Dest")) == {
        "source": "100",
        "dest": "Dest",
    }
    assert label_operands(Instruction.of("XIC", "Start")) == {"tag": "Start"}


def test_label_operands_surplus_values_are_positional() -> None:
    assert label_operands(Instruction.of("XIC", "A", "B")) == {"tag": "A", "param1": "B"}


def test_label_operands_for_unknown_mnemonics() -> None:
    assert label_operands(Instruction("FOO")) == {}
    assert label_operands(Instruction.of("FOO", "A")) == {"tag": "A"}
    assert label_operands(Instruction.of("FOO", "A", "B")) == {"source": "A", "dest": "B"}
    assert label_operands(Instruction.of("FOO", "A", "B", "C")) == {
        "param0": "A",
        "param1": "B",
        "param2": "C",
    }
