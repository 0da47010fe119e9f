"""CPU package for the CHIP-8 interpreter."""

from .core import Chip8CPU, CPUState, CycleResult, CycleStatus
from .opcodes import DecodedInstruction, Instruction, decode, disassemble
from .timers import TIMER_HZ, TimerPacer, Timers
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CycleResult",
    "CycleStatus",
    "DecodedInstruction",
    "Instruction",
    "decode",
    "disassemble",
    "Timers",
    "TimerPacer",
    "TIMER_HZ",
    "opcodes",
]
