"""Instruction decoding and opcode metadata for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Final, Iterable, Mapping, Sequence, Tuple


@dataclass(frozen=True)
class DecodedInstruction:
    """Fields extracted from a raw 16-bit instruction word."""

    word: int
    family: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int


def decode(word: int) -> DecodedInstruction:
    """Split ``word`` into its fields. Every 16-bit pattern decodes."""

    word &= 0xFFFF
    return DecodedInstruction(
        word=word,
        family=(word >> 12) & 0xF,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        kk=word & 0xFF,
        nnn=word & 0xFFF,
    )


class Operands(Enum):
    """Operand layout, used to render mnemonics."""

    NONE = auto()
    ADDR = auto()
    X_BYTE = auto()
    X_Y = auto()
    X = auto()
    X_Y_N = auto()
    V0_ADDR = auto()
    I_ADDR = auto()
    X_DT = auto()
    X_K = auto()
    DT_X = auto()
    ST_X = auto()
    I_X = auto()
    F_X = auto()
    B_X = auto()
    MEM_X = auto()
    X_MEM = auto()


@dataclass(frozen=True)
class Instruction:
    """Metadata describing one CHIP-8 opcode.

    ``selector`` is the secondary code (low byte or low nibble, depending on
    the family) or ``None`` when the family alone identifies the instruction.
    """

    family: int
    selector: int | None
    mnemonic: str
    operands: Operands
    handler: str

    def __post_init__(self) -> None:
        if not 0 <= self.family <= 0xF:
            raise ValueError(f"family out of range: {self.family}")
        if self.selector is not None and not 0 <= self.selector <= 0xFF:
            raise ValueError(f"selector out of range: {self.selector}")


# Families that overload their primary code, and the field that selects within them.
SECONDARY_FIELD: Final[Mapping[int, str]] = {
    0x0: "kk",
    0x8: "n",
    0xE: "kk",
    0xF: "kk",
}


class OpcodeTable:
    """Two-level lookup keyed on (family, selector)."""

    def __init__(self) -> None:
        self._table: Dict[Tuple[int, int | None], Instruction] = {}

    def register(self, instruction: Instruction) -> None:
        overloaded = instruction.family in SECONDARY_FIELD
        if overloaded != (instruction.selector is not None):
            raise ValueError(
                f"{instruction.mnemonic}: family {instruction.family:X} "
                f"{'requires' if overloaded else 'takes no'} selector"
            )
        key = (instruction.family, instruction.selector)
        existing = self._table.get(key)
        if existing is not None:
            raise ValueError(f"opcode {key!r} already registered as {existing.mnemonic}")
        self._table[key] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def lookup(self, decoded: DecodedInstruction) -> Instruction | None:
        field_name = SECONDARY_FIELD.get(decoded.family)
        selector = None if field_name is None else getattr(decoded, field_name)
        return self._table.get((decoded.family, selector))

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self):
        return iter(self._table.values())


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0x0, 0xE0, "CLS", Operands.NONE, "op_cls"),
    Instruction(0x0, 0xEE, "RET", Operands.NONE, "op_ret"),
    Instruction(0x1, None, "JP", Operands.ADDR, "op_jp"),
    Instruction(0x2, None, "CALL", Operands.ADDR, "op_call"),
    Instruction(0x3, None, "SE", Operands.X_BYTE, "op_se_byte"),
    Instruction(0x4, None, "SNE", Operands.X_BYTE, "op_sne_byte"),
    Instruction(0x5, None, "SE", Operands.X_Y, "op_se_reg"),
    Instruction(0x6, None, "LD", Operands.X_BYTE, "op_ld_byte"),
    Instruction(0x7, None, "ADD", Operands.X_BYTE, "op_add_byte"),
    # ALU
    Instruction(0x8, 0x0, "LD", Operands.X_Y, "op_ld_reg"),
    Instruction(0x8, 0x1, "OR", Operands.X_Y, "op_or"),
    Instruction(0x8, 0x2, "AND", Operands.X_Y, "op_and"),
    Instruction(0x8, 0x3, "XOR", Operands.X_Y, "op_xor"),
    Instruction(0x8, 0x4, "ADD", Operands.X_Y, "op_add_reg"),
    Instruction(0x8, 0x5, "SUB", Operands.X_Y, "op_sub"),
    Instruction(0x8, 0x6, "SHR", Operands.X, "op_shr"),
    Instruction(0x8, 0x7, "SUBN", Operands.X_Y, "op_subn"),
    Instruction(0x8, 0xE, "SHL", Operands.X, "op_shl"),
    Instruction(0x9, None, "SNE", Operands.X_Y, "op_sne_reg"),
    Instruction(0xA, None, "LD", Operands.I_ADDR, "op_ld_index"),
    Instruction(0xB, None, "JP", Operands.V0_ADDR, "op_jp_offset"),
    Instruction(0xC, None, "RND", Operands.X_BYTE, "op_rnd"),
    Instruction(0xD, None, "DRW", Operands.X_Y_N, "op_drw"),
    # Keypad
    Instruction(0xE, 0x9E, "SKP", Operands.X, "op_skp"),
    Instruction(0xE, 0xA1, "SKNP", Operands.X, "op_sknp"),
    # Timers, index and block transfers
    Instruction(0xF, 0x07, "LD", Operands.X_DT, "op_ld_from_delay"),
    Instruction(0xF, 0x0A, "LD", Operands.X_K, "op_wait_key"),
    Instruction(0xF, 0x15, "LD", Operands.DT_X, "op_ld_delay"),
    Instruction(0xF, 0x18, "LD", Operands.ST_X, "op_ld_sound"),
    Instruction(0xF, 0x1E, "ADD", Operands.I_X, "op_add_index"),
    Instruction(0xF, 0x29, "LD", Operands.F_X, "op_ld_font"),
    Instruction(0xF, 0x33, "LD", Operands.B_X, "op_ld_bcd"),
    Instruction(0xF, 0x55, "LD", Operands.MEM_X, "op_store_registers"),
    Instruction(0xF, 0x65, "LD", Operands.X_MEM, "op_load_registers"),
)


def build_opcode_table(instructions: Iterable[Instruction]) -> OpcodeTable:
    table = OpcodeTable()
    table.register_all(instructions)
    return table


OPCODE_TABLE: OpcodeTable = build_opcode_table(DEFAULT_INSTRUCTIONS)


def format_operands(operands: Operands, decoded: DecodedInstruction) -> str:
    x, y = decoded.x, decoded.y
    templates = {
        Operands.NONE: "",
        Operands.ADDR: f"0x{decoded.nnn:03X}",
        Operands.X_BYTE: f"V{x:X}, 0x{decoded.kk:02X}",
        Operands.X_Y: f"V{x:X}, V{y:X}",
        Operands.X: f"V{x:X}",
        Operands.X_Y_N: f"V{x:X}, V{y:X}, {decoded.n}",
        Operands.V0_ADDR: f"V0, 0x{decoded.nnn:03X}",
        Operands.I_ADDR: f"I, 0x{decoded.nnn:03X}",
        Operands.X_DT: f"V{x:X}, DT",
        Operands.X_K: f"V{x:X}, K",
        Operands.DT_X: f"DT, V{x:X}",
        Operands.ST_X: f"ST, V{x:X}",
        Operands.I_X: f"I, V{x:X}",
        Operands.F_X: f"F, V{x:X}",
        Operands.B_X: f"B, V{x:X}",
        Operands.MEM_X: f"[I], V{x:X}",
        Operands.X_MEM: f"V{x:X}, [I]",
    }
    return templates[operands]


def disassemble(word: int, table: OpcodeTable = OPCODE_TABLE) -> str:
    """Render ``word`` as assembly text; unknown words become ``DW``."""

    decoded = decode(word)
    instruction = table.lookup(decoded)
    if instruction is None:
        return f"DW 0x{decoded.word:04X}"
    operands = format_operands(instruction.operands, decoded)
    return f"{instruction.mnemonic} {operands}" if operands else instruction.mnemonic
