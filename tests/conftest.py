"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from ladderview.core.elements import Branch, Instruction

SAMPLE_L5X = """\
<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<RSLogix5000Content SchemaRevision="1.0" TargetName="Demo" TargetType="Controller">
  <Controller Use="Target" Name="Demo">
    <Programs>
      <Program Name="MainProgram">
        <Routines>
          <Routine Name="MainRoutine" Type="RLL">
            <RLLContent>
              <Rung Number="0" Type="N">
                <Comment><![CDATA[Start/stop seal-in]]></Comment>
                <Text><![CDATA[XIC(Start)[XIC(Motor),XIO(Stop)]OTE(Motor);]]></Text>
              </Rung>
              <Rung Number="1" Type="N">
                <Text><![CDATA[TON(DelayTimer,5000,0);]]></Text>
              </Rung>
            </RLLContent>
          </Routine>
          <Routine Name="Faults" Type="RLL">
            <RLLContent>
              <Rung Number="0" Type="N">
                <Text><![CDATA[XIC(Fault)OTL(Alarm);]]></Text>
              </Rung>
            </RLLContent>
          </Routine>
          <Routine Name="Calc" Type="ST">
            <STContent/>
          </Routine>
        </Routines>
      </Program>
    </Programs>
  </Controller>
</RSLogix5000Content>
"""


def xic(tag: str) -> Instruction:
    return Instruction.of("XIC", tag)


def ote(tag: str) -> Instruction:
    return Instruction.of("OTE", tag)


@pytest.fixture
def seal_in() -> tuple:
    """``XIC(Start)[XIC(Motor),XIO(Stop)]OTE(Motor)`` as a tree."""
    return (
        xic("Start"),
        Branch.of([xic("Motor")], [Instruction.of("XIO", "Stop")]),
        ote("Motor"),
    )


@pytest.fixture
def l5x_file(tmp_path: Path) -> Path:
    path = tmp_path / "demo.L5X"
    path.write_text(SAMPLE_L5X, encoding="utf-8")
    return path
