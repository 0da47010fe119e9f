"""Hexadecimal keypad state and host key layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Host key name (as reported by pygame.key.name) -> keypad index.
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEYPAD_LAYOUT: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


def key_for_name(name: str, layout: Mapping[str, int] = KEYPAD_LAYOUT) -> int | None:
    """Map a host key name to a keypad index, or ``None`` when unmapped."""

    return layout.get(name.strip().lower())


@dataclass
class Keypad:
    """Sixteen pressed/released flags, one per keypad symbol."""

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    _listeners: list[Callable[[int, bool], None]] = field(default_factory=list)

    def press(self, key: int) -> None:
        self._set(key, True)

    def release(self, key: int) -> None:
        self._set(key, False)

    def is_pressed(self, key: int) -> bool:
        return self._keys[self._check(key)]

    def first_pressed(self) -> int | None:
        """Return the lowest-numbered key currently down."""

        for index, pressed in enumerate(self._keys):
            if pressed:
                return index
        return None

    def any_pressed(self) -> bool:
        return any(self._keys)

    def reset(self) -> None:
        self._keys = [False] * KEY_COUNT

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def add_listener(self, listener: Callable[[int, bool], None]) -> None:
        self._listeners.append(listener)

    def _set(self, key: int, pressed: bool) -> None:
        index = self._check(key)
        before = self._keys[index]
        self._keys[index] = pressed
        if debug_enabled("input"):
            debug_log("input", "key=%X pressed=%s", index, pressed)
        if before != pressed:
            for listener in list(self._listeners):
                listener(index, pressed)

    @staticmethod
    def _check(key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key index out of range: {key}")
        return key
