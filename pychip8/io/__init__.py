"""Input handling for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, KEYPAD_LAYOUT, Keypad, key_for_name

__all__ = ["Keypad", "KEY_COUNT", "KEYPAD_LAYOUT", "key_for_name"]
