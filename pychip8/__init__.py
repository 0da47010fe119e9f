"""Python CHIP-8 interpreter.

The core (``cpu``, ``bus``, ``io``, ``video``) is pure Python; ``ui`` and
``audio`` drive it through pygame.
"""

from __future__ import annotations

from . import audio, bus, cpu, errors, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
    "errors",
]
