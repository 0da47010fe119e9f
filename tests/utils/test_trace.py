from types import SimpleNamespace

import pytest

from pychip8.system import MachineConfig, create_machine
from pychip8.utils.trace import TraceRecorder


def _state(pc=0x200, i=0x000, v=None, depth=0):
    return SimpleNamespace(pc=pc, i=i, v=bytearray(v or bytes(16)), stack_depth=depth)


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record(0x200, 0x6005, "LD V0, 0x05", _state())
    recorder.record(0x202, 0x610A, "LD V1, 0x0A", _state(v=bytes([5] + [0] * 15)))
    recorder.record(0x204, 0x8014, "ADD V0, V1", _state(i=0x300, depth=1), note="fault")

    lines = list(recorder.format_entries())
    assert len(recorder) == 2
    assert len(lines) == 2
    assert "pc=202" in lines[0]
    assert "V=[05 00" in lines[0]
    assert "pc=204" in lines[1]
    assert "I=300 SP=1" in lines[1]
    assert lines[1].endswith("(fault)")


def test_trace_recorder_limit_and_last_entry():
    recorder = TraceRecorder(4)
    assert recorder.last_entry() is None
    for offset in range(3):
        recorder.record(0x200 + offset * 2, 0x00E0, "CLS", _state())
    assert [entry.pc for entry in recorder.entries(limit=2)] == [0x202, 0x204]
    assert recorder.last_entry().pc == 0x204
    recorder.clear()
    assert list(recorder.entries()) == []


def test_trace_recorder_rejects_bad_capacity():
    with pytest.raises(ValueError):
        TraceRecorder(0)


def test_machine_reports_each_instruction_to_sink():
    recorder = TraceRecorder(8)
    machine = create_machine(MachineConfig(trace_sink=recorder))
    machine.load_program(b"\x60\x05\x61\x0a\xf1\xff")

    for _ in range(3):
        machine.execute_cycle()

    mnemonics = [entry.mnemonic for entry in recorder.entries()]
    assert mnemonics == ["LD V0, 0x05", "LD V1, 0x0A", "DW 0xF1FF"]
    assert recorder.last_entry().registers[:2] == (5, 10)
