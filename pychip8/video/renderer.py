"""Convert the display buffer into scaled RGB frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from .display import DISPLAY_HEIGHT, DISPLAY_WIDTH, PIXEL_OFF
from .palette import MONOCHROME, RGBColor, validate_palette


class Presenter(Protocol):
    """Anything that can show a display buffer to the user."""

    def present(self, buffer: Sequence[int]) -> None:
        ...


@dataclass
class RenderResult:
    """Packed RGB888 frame."""

    width: int
    height: int
    pixels: bytearray

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(bytes(self.pixels), (self.width, self.height), "RGB")


class Renderer:
    """Expand each display cell into a ``scale``-sized block of colour."""

    def __init__(
        self,
        palette: Sequence[RGBColor] = MONOCHROME,
        *,
        width: int = DISPLAY_WIDTH,
        height: int = DISPLAY_HEIGHT,
    ) -> None:
        self._background, self._foreground = validate_palette(palette)
        self._width = width
        self._height = height

    def render(self, buffer: Sequence[int], scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        if len(buffer) != self._width * self._height:
            raise ValueError(
                f"buffer holds {len(buffer)} cells, expected {self._width * self._height}"
            )

        off = bytes(self._background) * scale
        on = bytes(self._foreground) * scale
        out_width = self._width * scale
        pixels = bytearray()
        for row in range(self._height):
            start = row * self._width
            line = b"".join(
                on if cell != PIXEL_OFF else off for cell in buffer[start : start + self._width]
            )
            pixels += line * scale
        return RenderResult(out_width, self._height * scale, pixels)
