"""Bounded subroutine return stack."""

from __future__ import annotations

from typing import List

from pychip8.errors import StackOverflowError, StackUnderflowError

STACK_DEPTH = 16


class CallStack:
    """Fixed-capacity stack of 16-bit return addresses."""

    def __init__(self, capacity: int = STACK_DEPTH) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._frames: List[int] = []

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, address: int) -> None:
        if len(self._frames) >= self._capacity:
            raise StackOverflowError(f"call stack overflow (depth {self._capacity})")
        self._frames.append(address & 0xFFFF)

    def pop(self) -> int:
        if not self._frames:
            raise StackUnderflowError("return with empty call stack")
        return self._frames.pop()

    def peek(self) -> int | None:
        return self._frames[-1] if self._frames else None

    def clear(self) -> None:
        self._frames.clear()

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._frames)
