"""Memory and call stack for the CHIP-8 interpreter."""

from .memory import MAX_PROGRAM_SIZE, MEMORY_SIZE, PROGRAM_START, Memory
from .stack import STACK_DEPTH, CallStack

__all__ = [
    "Memory",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "CallStack",
    "STACK_DEPTH",
]
