"""Raw CHIP-8 program images."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from pychip8.bus import MAX_PROGRAM_SIZE, PROGRAM_START
from pychip8.errors import ProgramLoadError
from pychip8.utils import debug_enabled, debug_log

ProgramSource = Union[str, Path, bytes, bytearray, memoryview]


@dataclass(frozen=True)
class ProgramImage:
    """Bytecode to be copied verbatim into memory at ``start``."""

    data: bytes
    name: str = ""
    start: int = PROGRAM_START

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        """Last address occupied by the image."""

        return self.start + len(self.data) - 1

    def words(self) -> list[int]:
        """Big-endian instruction words; a trailing odd byte is padded with zero."""

        data = self.data if len(self.data) % 2 == 0 else self.data + b"\x00"
        return [(data[offset] << 8) | data[offset + 1] for offset in range(0, len(data), 2)]


def load_program(data: bytes | bytearray | memoryview, name: str = "") -> ProgramImage:
    """Validate raw bytes as a program image."""

    payload = bytes(data)
    if not payload:
        raise ProgramLoadError(f"program {name or '<bytes>'} is empty")
    if len(payload) > MAX_PROGRAM_SIZE:
        raise ProgramLoadError(
            f"program {name or '<bytes>'} is {len(payload)} bytes; limit is {MAX_PROGRAM_SIZE}"
        )
    return ProgramImage(payload, name)


def load_program_from_path(path: str | Path) -> ProgramImage:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        if debug_enabled("loader"):
            debug_log("loader", "read_failed path=%s error=%s", path, exc)
        raise ProgramLoadError(f"could not open file '{path}': {exc}") from exc
    image = load_program(data, path.name)
    if debug_enabled("loader"):
        debug_log("loader", "loaded path=%s bytes=%d", path, image.length)
    return image


def load_program_source(source: ProgramSource) -> ProgramImage:
    """Accept either a filesystem path or the image bytes themselves."""

    if isinstance(source, (bytes, bytearray, memoryview)):
        return load_program(source)
    return load_program_from_path(source)
