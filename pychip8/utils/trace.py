"""Execution trace sink and ring buffer for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Protocol, Sequence

from .debug import debug_log


class TraceSink(Protocol):
    """Receives every instruction the executor decodes."""

    def record(self, pc: int, word: int, mnemonic: str, state, *, note: str = "") -> None:
        ...


@dataclass
class TraceEntry:
    pc: int
    word: int
    mnemonic: str
    i: int
    registers: tuple[int, ...]
    stack_depth: int
    note: str = ""


class TraceRecorder:
    """Ring buffer that stores recent instructions with the register file."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: List[TraceEntry | None] = [None] * capacity
        self._index = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def record(self, pc: int, word: int, mnemonic: str, state, *, note: str = "") -> None:
        entry = TraceEntry(
            pc=pc & 0xFFFF,
            word=word & 0xFFFF,
            mnemonic=mnemonic,
            i=state.i & 0xFFFF,
            registers=tuple(value & 0xFF for value in state.v),
            stack_depth=getattr(state, "stack_depth", 0),
            note=note,
        )
        self._append(entry)

    def entries(self, limit: int | None = None) -> Iterable[TraceEntry]:
        count = self._size if limit is None else min(self._size, max(limit, 0))
        for offset in range(count):
            index = (self._index - count + offset) % self._capacity
            entry = self._entries[index]
            if entry is not None:
                yield entry

    def last_entry(self) -> TraceEntry | None:
        if self._size == 0:
            return None
        return self._entries[(self._index - 1) % self._capacity]

    def clear(self) -> None:
        self._entries = [None] * self._capacity
        self._index = 0
        self._size = 0

    def format_entries(self, limit: int | None = None) -> Sequence[str]:
        lines: list[str] = []
        for entry in self.entries(limit):
            registers = " ".join(f"{value:02X}" for value in entry.registers)
            note = f" ({entry.note})" if entry.note else ""
            lines.append(
                f"pc={entry.pc:03X} op={entry.word:04X} {entry.mnemonic:<16} "
                f"I={entry.i:03X} SP={entry.stack_depth:X} V=[{registers}]{note}"
            )
        return lines

    def dump(self, category: str, limit: int | None = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, line)

    def _append(self, entry: TraceEntry) -> None:
        self._entries[self._index] = entry
        self._index = (self._index + 1) % self._capacity
        if self._size < self._capacity:
            self._size += 1
