"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from pychip8.errors import ProgramLoadError

from .program import (
    ProgramImage,
    ProgramSource,
    load_program,
    load_program_from_path,
    load_program_source,
)

__all__ = [
    "ProgramImage",
    "ProgramSource",
    "ProgramLoadError",
    "load_program",
    "load_program_from_path",
    "load_program_source",
]
