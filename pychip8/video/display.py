"""64x32 monochrome frame buffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Iterable

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
PIXEL_OFF = 0x00
PIXEL_ON = 0xFF


class Display:
    """One byte per cell, row-major; tracks whether a redraw is pending."""

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("display dimensions must be positive")
        self.width = width
        self.height = height
        self._cells = bytearray(width * height)
        self._redraw_pending = False

    @property
    def buffer(self) -> memoryview:
        """Read-only view of the cells."""

        return memoryview(self._cells).toreadonly()

    @property
    def redraw_pending(self) -> bool:
        return self._redraw_pending

    def clear(self) -> None:
        self._cells[:] = bytes(len(self._cells))
        self._redraw_pending = True

    def pixel(self, column: int, row: int) -> bool:
        return self._cells[(row % self.height) * self.width + (column % self.width)] != PIXEL_OFF

    def draw_sprite(self, column: int, row: int, sprite: Iterable[int]) -> bool:
        """XOR ``sprite`` rows at (column, row), wrapping both axes.

        Returns True if any lit cell was turned dark.
        """

        collision = False
        for line, bits in enumerate(sprite):
            y = (row + line) % self.height
            base = y * self.width
            for bit in range(8):
                if not (bits >> (7 - bit)) & 0x1:
                    continue
                offset = base + (column + bit) % self.width
                if self._cells[offset] != PIXEL_OFF:
                    collision = True
                self._cells[offset] ^= PIXEL_ON
        self._redraw_pending = True
        return collision

    def consume_redraw(self) -> bool:
        """Report and clear the redraw-pending flag."""

        pending = self._redraw_pending
        self._redraw_pending = False
        return pending

    def snapshot(self) -> bytes:
        return bytes(self._cells)

    def rows(self) -> list[str]:
        """Text rendering used by debug dumps."""

        return [
            "".join("#" if self._cells[y * self.width + x] else "." for x in range(self.width))
            for y in range(self.height)
        ]
