"""Tests for instruction decoding and the opcode table."""

from __future__ import annotations

import pytest

from pychip8.cpu import decode, disassemble
from pychip8.cpu.opcodes import (
    DEFAULT_INSTRUCTIONS,
    OPCODE_TABLE,
    Instruction,
    OpcodeTable,
    Operands,
)


def test_decode_extracts_all_fields() -> None:
    op = decode(0xD12F)
    assert op.word == 0xD12F
    assert op.family == 0xD
    assert op.x == 0x1
    assert op.y == 0x2
    assert op.n == 0xF
    assert op.kk == 0x2F
    assert op.nnn == 0x12F


def test_decode_masks_to_sixteen_bits() -> None:
    assert decode(0x1_8ABC).word == 0x8ABC


@pytest.mark.parametrize("word", [0x0000, 0xFFFF, 0x8A5E, 0x00E0])
def test_decode_is_total(word: int) -> None:
    op = decode(word)
    assert (op.family << 12) | op.nnn == word
    assert (op.x << 8) | op.kk == op.nnn
    assert (op.y << 4) | op.n == op.kk


def test_table_holds_all_instructions() -> None:
    assert len(OPCODE_TABLE) == len(DEFAULT_INSTRUCTIONS) == 34
    handlers = {instruction.handler for instruction in OPCODE_TABLE}
    assert len(handlers) == 34


@pytest.mark.parametrize(
    ("word", "handler"),
    [
        (0x00E0, "op_cls"),
        (0x00EE, "op_ret"),
        (0x8AB4, "op_add_reg"),
        (0x8ABE, "op_shl"),
        (0xE39E, "op_skp"),
        (0xE3A1, "op_sknp"),
        (0xF50A, "op_wait_key"),
        (0xF565, "op_load_registers"),
        (0x7123, "op_add_byte"),
    ],
)
def test_lookup_two_level(word: int, handler: str) -> None:
    instruction = OPCODE_TABLE.lookup(decode(word))
    assert instruction is not None
    assert instruction.handler == handler


@pytest.mark.parametrize("word", [0x0000, 0x00E1, 0x8AB8, 0xE300, 0xF5FF])
def test_lookup_unknown(word: int) -> None:
    assert OPCODE_TABLE.lookup(decode(word)) is None


def test_register_rejects_duplicates_and_bad_selectors() -> None:
    table = OpcodeTable()
    table.register(Instruction(0x1, None, "JP", Operands.ADDR, "op_jp"))
    with pytest.raises(ValueError):
        table.register(Instruction(0x1, None, "JP", Operands.ADDR, "op_jp"))
    with pytest.raises(ValueError):
        table.register(Instruction(0xF, None, "LD", Operands.X, "op_bad"))
    with pytest.raises(ValueError):
        table.register(Instruction(0x6, 0x01, "LD", Operands.X_BYTE, "op_bad"))


@pytest.mark.parametrize(
    ("word", "text"),
    [
        (0x00E0, "CLS"),
        (0x1234, "JP 0x234"),
        (0x610A, "LD V1, 0x0A"),
        (0x8AB5, "SUB VA, VB"),
        (0xD015, "DRW V0, V1, 5"),
        (0xB300, "JP V0, 0x300"),
        (0xF329, "LD F, V3"),
        (0xF455, "LD [I], V4"),
        (0xF465, "LD V4, [I]"),
        (0xF10A, "LD V1, K"),
        (0xF1FF, "DW 0xF1FF"),
    ],
)
def test_disassemble(word: int, text: str) -> None:
    assert disassemble(word) == text
