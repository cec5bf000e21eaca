"""Tests for Rung and Routine records.

Edits return new records; the original is never touched.
"""

from __future__ import annotations

import pytest
from pyrsistent import InvariantException

from ladderview.core.elements import Instruction
from ladderview.core.parser import parse_rung_text
from ladderview.core.rung import InstructionIndexError, Routine, Rung

SEAL_IN = "XIC(Start)[XIC(Motor),XIO(Stop)]OTE(Motor);"


class TestRung:
    def test_from_text_parses(self):
        rung = Rung.from_text(3, SEAL_IN, "Seal-in")
        assert rung.number == 3
        assert rung.text == SEAL_IN
        assert rung.comment == "Seal-in"
        assert rung.elements == parse_rung_text(SEAL_IN)
        assert rung.instruction_count == 4
        assert not rung.is_empty

    def test_from_elements_writes_canonical_text(self, seal_in):
        rung = Rung.from_elements(0, seal_in)
        assert rung.text == SEAL_IN
        assert rung.elements == seal_in

    def test_empty_rung(self):
        rung = Rung(number=0)
        assert rung.is_empty
        assert rung.instruction_count == 0
        assert rung.comment is None

    def test_negative_number_rejected(self):
        with pytest.raises(InvariantException):
            Rung(number=-1)

    def test_with_text_reparses(self):
        rung = Rung.from_text(0, "XIC(A)").with_text("XIO(B)OTE(C)")
        assert rung.elements == (Instruction.of("XIO", "B"), Instruction.of("OTE", "C"))

    def test_diagnostics(self):
        rung = Rung.from_text(0, "XIC(A) ? OTE(B)")
        assert [d.kind for d in rung.diagnostics().diagnostics] == ["skipped"]
        assert rung.instruction_count == 2


class TestRungEdits:
    def test_instruction_at(self):
        rung = Rung.from_text(0, SEAL_IN)
        assert rung.instruction_at(2) == Instruction.of("XIO", "Stop")

    def test_replace_instruction_inside_branch(self):
        rung = Rung.from_text(0, SEAL_IN)
        edited = rung.with_instruction(1, Instruction.of("XIC", "Aux"))
        assert edited.text == "XIC(Start)[XIC(Aux),XIO(Stop)]OTE(Motor);"
        assert rung.text == SEAL_IN

    def test_remove_drops_emptied_leg(self):
        rung = Rung.from_text(0, SEAL_IN).without_instruction(2)
        assert rung.text == "XIC(Start)[XIC(Motor)]OTE(Motor);"

    def test_remove_drops_emptied_branch(self):
        rung = Rung.from_text(0, SEAL_IN).without_instruction(1).without_instruction(1)
        assert rung.text == "XIC(Start)OTE(Motor);"
        assert rung.instruction_count == 2

    def test_insert_before_index(self):
        rung = Rung.from_text(0, SEAL_IN).insert_instruction(2, Instruction.of("XIC", "Auto"))
        assert rung.text == "XIC(Start)[XIC(Motor),XIC(Auto)XIO(Stop)]OTE(Motor);"

    def test_insert_at_count_appends(self):
        rung = Rung.from_text(0, "XIC(A)")
        edited = rung.insert_instruction(1, Instruction.of("OTE", "B"))
        assert edited.text == "XIC(A)OTE(B);"

    def test_insert_into_empty_rung(self):
        rung = Rung(number=0).insert_instruction(0, Instruction("NOP"))
        assert rung.text == "NOP();"

    @pytest.mark.parametrize("index", [-1, 4, 10])
    def test_out_of_range_index(self, index):
        rung = Rung.from_text(7, SEAL_IN)
        with pytest.raises(InstructionIndexError) as exc_info:
            rung.with_instruction(index, Instruction("NOP"))
        assert exc_info.value.rung_number == 7
        assert exc_info.value.count == 4
        assert isinstance(exc_info.value, IndexError)

    def test_edited_tree_matches_reparsed_text(self):
        rung = Rung.from_text(0, SEAL_IN).without_instruction(0)
        assert parse_rung_text(rung.text) == rung.elements


class TestRoutine:
    def test_from_texts_numbers_in_order(self):
        routine = Routine.from_texts("Main", ["XIC(A)OTE(B);", "NOP();"])
        assert routine.numbers == (0, 1)
        assert routine.rung(1).elements == (Instruction("NOP"),)

    def test_add_rung_uses_next_number(self):
        routine = Routine.from_texts("Main", ["XIC(A);"]).add_rung("OTE(B);", comment="out")
        assert routine.numbers == (0, 1)
        assert routine.rung(1).comment == "out"

    def test_add_rung_with_explicit_number(self):
        routine = Routine(name="Main").add_rung("XIC(A);", number=5)
        assert routine.next_number() == 6

    def test_duplicate_number_rejected(self):
        routine = Routine.from_texts("Main", ["XIC(A);"])
        with pytest.raises(ValueError, match="already has rung 0"):
            routine.add_rung("XIC(B);", number=0)

    def test_replace_and_remove(self):
        routine = Routine.from_texts("Main", ["XIC(A);", "XIC(B);", "XIC(C);"])
        edited = routine.rung(1).with_instruction(0, Instruction.of("XIO", "B"))
        routine = routine.replace_rung(edited)
        assert routine.rung(1).text == "XIO(B);"

        routine = routine.remove_rung(0)
        assert routine.numbers == (1, 2)
        assert routine.renumbered().numbers == (0, 1)

    def test_missing_rung(self):
        routine = Routine.from_texts("Main", ["XIC(A);"])
        with pytest.raises(KeyError):
            routine.rung(9)
        with pytest.raises(KeyError):
            routine.remove_rung(9)
