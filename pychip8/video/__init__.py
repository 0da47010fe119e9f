"""Display buffer and rendering helpers."""

from __future__ import annotations

from .display import DISPLAY_HEIGHT, DISPLAY_WIDTH, PIXEL_OFF, PIXEL_ON, Display
from .font import FONT_DATA, FONT_START, GLYPH_BYTES, glyph_address
from .palette import MONOCHROME, PALETTES, palette_by_name, validate_palette
from .renderer import Presenter, RenderResult, Renderer

__all__ = [
    "Display",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "PIXEL_ON",
    "PIXEL_OFF",
    "FONT_DATA",
    "FONT_START",
    "GLYPH_BYTES",
    "glyph_address",
    "MONOCHROME",
    "PALETTES",
    "palette_by_name",
    "validate_palette",
    "Presenter",
    "Renderer",
    "RenderResult",
]
