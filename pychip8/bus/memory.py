"""Flat 4 KiB memory for the CHIP-8 interpreter.

The address space is a single byte array. The first 512 bytes are reserved for
the interpreter (the built-in font lives at the bottom of that area) and are
read-only once the font has been installed; programs are loaded at 0x200.
Every access is bounds checked and raises :class:`MemoryAccessError` instead
of touching anything outside the array.
"""

from __future__ import annotations

from pychip8.errors import MemoryAccessError

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


class Memory:
    """Byte-addressable memory with a write-protected interpreter area."""

    def __init__(self, size: int = MEMORY_SIZE, *, reserved_end: int = PROGRAM_START) -> None:
        if size <= 0:
            raise ValueError("memory size must be positive")
        if not 0 <= reserved_end <= size:
            raise ValueError("reserved area must lie inside memory")
        self._data = bytearray(size)
        self._reserved_end = reserved_end

    def __len__(self) -> int:
        return len(self._data)

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def reserved_end(self) -> int:
        return self._reserved_end

    def load8(self, address: int) -> int:
        self._check_range(address, 1)
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self._check_writable(address, 1)
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        self._check_range(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_block(self, address: int, length: int) -> bytes:
        self._check_range(address, length)
        return bytes(self._data[address : address + length])

    def write_block(self, address: int, data: bytes) -> None:
        """Write ``data`` at ``address``; nothing is written if any byte is out of range."""

        self._check_writable(address, len(data))
        self._data[address : address + len(data)] = data

    def install_reserved(self, address: int, data: bytes) -> None:
        """Populate the reserved area (font data) bypassing write protection."""

        self._check_range(address, len(data))
        if address + len(data) > self._reserved_end:
            raise MemoryAccessError(
                f"reserved data {address:03X}+{len(data)} extends past {self._reserved_end:03X}"
            )
        self._data[address : address + len(data)] = data

    def clear(self) -> None:
        """Zero everything above the reserved area."""

        self._data[self._reserved_end :] = bytes(len(self._data) - self._reserved_end)

    def snapshot(self) -> bytes:
        return bytes(self._data)

    def _check_range(self, address: int, length: int) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        if address < 0 or address + length > len(self._data):
            raise MemoryAccessError(
                f"access {address:#05x}+{length} outside 0x000-{len(self._data) - 1:#05x}"
            )

    def _check_writable(self, address: int, length: int) -> None:
        self._check_range(address, length)
        if length and address < self._reserved_end:
            raise MemoryAccessError(f"write to reserved address {address:#05x}")
