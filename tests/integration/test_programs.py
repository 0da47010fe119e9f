"""Small end-to-end programs run through the full machine."""

from __future__ import annotations

from pychip8.cpu import CycleStatus
from pychip8.system import MachineConfig, create_machine


def assemble(*words: int) -> bytes:
    return b"".join(word.to_bytes(2, "big") for word in words)


def test_add_two_registers() -> None:
    machine = create_machine(MachineConfig(program=assemble(0x6005, 0x610A, 0x8014)))
    for _ in range(3):
        assert machine.execute_cycle().ok

    state = machine.cpu.state
    assert state.v[0] == 15
    assert state.v[0xF] == 0
    assert state.pc == 0x200 + 6


def test_count_down_loop_with_subroutine() -> None:
    # 0x200 LD V0, 3
    # 0x202 CALL 0x20A
    # 0x204 SE V0, 0
    # 0x206 JP 0x202
    # 0x208 JP 0x208
    # 0x20A ADD V1, 2 ; LD V2, 1 ; SUB V0, V2 ; RET
    program = assemble(0x6003, 0x220A, 0x3000, 0x1202, 0x1208, 0x7102, 0x6201, 0x8025, 0x00EE)
    machine = create_machine(MachineConfig(program=program))
    for _ in range(64):
        machine.execute_cycle()
    state = machine.cpu.state
    assert state.pc == 0x208
    assert state.v[0] == 0
    assert state.v[1] == 6
    assert len(machine.stack) == 0


def test_draw_digit_from_bcd() -> None:
    # Store BCD of 0x7B (123) at 0x300, load the hundreds digit, draw its glyph.
    program = assemble(0x607B, 0xA300, 0xF033, 0xF065, 0xF029, 0x6A00, 0x6B00, 0xDAB5)
    machine = create_machine(MachineConfig(program=program))
    redraws = [machine.execute_cycle().redraw for _ in range(8)]
    assert redraws[-1]
    assert machine.memory.read_block(0x300, 3) == bytes([1, 2, 3])
    rows = machine.display.rows()
    assert rows[0][:4] == "..#."
    assert rows[1][:4] == ".##."
    assert rows[4][:4] == ".###"


def test_wait_key_then_display() -> None:
    program = assemble(0xF30A, 0xF329, 0xD005)
    machine = create_machine(MachineConfig(program=program))
    for _ in range(5):
        assert machine.execute_cycle().status is CycleStatus.WAITING
    machine.press(0x1)
    assert machine.execute_cycle().status is CycleStatus.EXECUTED
    machine.release(0x1)
    machine.execute_cycle()
    machine.execute_cycle()
    assert machine.cpu.state.v[3] == 0x1
    assert machine.display.pixel(2, 0)
