"""Error taxonomy shared by the CHIP-8 core components."""

from __future__ import annotations

from enum import Enum, auto


class FaultKind(Enum):
    """Classification of failures that end a run."""

    LOAD_FAILED = auto()
    UNKNOWN_INSTRUCTION = auto()
    STACK_OVERFLOW = auto()
    STACK_UNDERFLOW = auto()
    MEMORY_ACCESS = auto()


class Chip8Error(Exception):
    """Base error for interpreter failures."""

    kind: FaultKind = FaultKind.UNKNOWN_INSTRUCTION


class ProgramLoadError(Chip8Error):
    """Raised when a program image is missing, unreadable or malformed."""

    kind = FaultKind.LOAD_FAILED


class UnknownInstructionError(Chip8Error):
    """Raised when a fetched word matches no defined opcode."""

    kind = FaultKind.UNKNOWN_INSTRUCTION

    def __init__(self, word: int, pc: int) -> None:
        super().__init__(f"unknown instruction {word:04X} at {pc:03X}")
        self.word = word & 0xFFFF
        self.pc = pc


class StackOverflowError(Chip8Error):
    """Raised when a subroutine call exceeds the stack capacity."""

    kind = FaultKind.STACK_OVERFLOW


class StackUnderflowError(Chip8Error):
    """Raised when returning with an empty call stack."""

    kind = FaultKind.STACK_UNDERFLOW


class MemoryAccessError(Chip8Error):
    """Raised for accesses outside memory or writes to the reserved area."""

    kind = FaultKind.MEMORY_ACCESS


__all__ = [
    "FaultKind",
    "Chip8Error",
    "ProgramLoadError",
    "UnknownInstructionError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
]
