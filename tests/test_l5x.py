"""Tests for reading and writing L5X rung content."""

from __future__ import annotations

import pytest
from lxml import etree

from ladderview.core.rung import Routine, Rung
from ladderview.l5x import (
    L5XFormatError,
    find_routine,
    read_routines,
    read_rungs,
    routine_to_xml,
    rung_element,
)


def test_read_routines_from_file(l5x_file) -> None:
    routines = read_routines(l5x_file)
    assert [r.name for r in routines] == ["MainProgram/MainRoutine", "MainProgram/Faults"]

    main = routines[0]
    assert main.numbers == (0, 1)
    first = main.rung(0)
    assert first.comment == "Start/stop seal-in"
    assert first.text == "XIC(Start)[XIC(Motor),XIO(Stop)]OTE(Motor);"
    assert first.instruction_count == 4
    assert main.rung(1).comment is None


def test_read_routines_from_bytes_with_bom(l5x_file) -> None:
    raw = b"\xef\xbb\xbf" + l5x_file.read_bytes()
    assert len(read_routines(raw)) == 2


def test_read_routines_from_string(l5x_file) -> None:
    routines = read_routines(l5x_file.read_text(encoding="utf-8"))
    assert routines[1].rung(0).text == "XIC(Fault)OTL(Alarm);"


def test_wrong_root_element() -> None:
    with pytest.raises(L5XFormatError, match="RSLogix5000Content"):
        read_routines("<Project/>")


def test_malformed_xml() -> None:
    with pytest.raises(L5XFormatError, match="Invalid L5X XML"):
        read_routines("<RSLogix5000Content><Controller>")


def test_find_routine(l5x_file) -> None:
    routines = read_routines(l5x_file)
    assert find_routine(routines, "Faults").name == "MainProgram/Faults"
    assert find_routine(routines, "MainProgram/MainRoutine") is routines[0]
    with pytest.raises(KeyError):
        find_routine(routines, "Missing")


def test_rung_number_falls_back_to_position() -> None:
    content = etree.fromstring(
        "<RLLContent><Rung><Text><![CDATA[XIC(A);]]></Text></Rung>"
        "<Rung Number='x'><Text><![CDATA[XIC(B);]]></Text></Rung></RLLContent>"
    )
    assert [rung.number for rung in read_rungs(content)] == [0, 1]


def test_rung_element_uses_cdata() -> None:
    rung = Rung.from_text(4, "XIC(A)OTE(B)", "Run")
    xml = etree.tostring(rung_element(rung), encoding="unicode")
    assert 'Number="4"' in xml
    assert "<Comment><![CDATA[Run]]></Comment>" in xml
    assert "<Text><![CDATA[XIC(A)OTE(B);]]></Text>" in xml


def test_rung_element_can_regenerate_text() -> None:
    rung = Rung.from_text(0, " XIC( A )  OTE(B) ")
    xml = etree.tostring(rung_element(rung, regenerate=True), encoding="unicode")
    assert "<![CDATA[XIC(A)OTE(B);]]>" in xml


def test_routine_xml_reads_back() -> None:
    routine = Routine.from_texts("Main/Logic", ["XIC(A)OTE(B);", "[XIC(C),XIO(D)]OTL(E);"])
    routine = routine.replace_rung(routine.rung(0).set(comment="first"))
    element = etree.fromstring(routine_to_xml(routine))
    assert element.get("Name") == "Logic"
    assert element.get("Type") == "RLL"

    rungs = read_rungs(element.find("RLLContent"))
    assert [r.text for r in rungs] == [r.text for r in routine.rungs]
    assert rungs[0].comment == "first"
