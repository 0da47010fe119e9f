"""Lightweight debug logging helpers for the CHIP-8 interpreter."""

from __future__ import annotations

import os
from typing import Iterable

ENV_VARIABLE = "CHIP8_DEBUG"

_CATEGORIES: set[str] | None = None


def _parse(value: str) -> set[str]:
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    return {part for part in parts if part}


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is not None:
        return _CATEGORIES
    _CATEGORIES = _parse(os.environ.get(ENV_VARIABLE, ""))
    return _CATEGORIES


def set_debug_categories(categories: Iterable[str] | str | None) -> None:
    """Override the categories taken from ``CHIP8_DEBUG``.

    ``None`` drops the override so the environment is consulted again.
    """

    global _CATEGORIES
    if categories is None:
        _CATEGORIES = None
    elif isinstance(categories, str):
        _CATEGORIES = _parse(categories)
    else:
        _CATEGORIES = {category.strip().lower() for category in categories if category.strip()}


def debug_enabled(category: str | None = None) -> bool:
    categories = _load_categories()
    if not categories:
        return False
    if "all" in categories:
        return True
    if category is None:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    prefix = f"[CHIP8][{category}]"
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"{prefix} {message}")
