"""Utility helpers for the CHIP-8 interpreter."""

from .debug import debug_enabled, debug_log, set_debug_categories
from .trace import TraceEntry, TraceRecorder, TraceSink

__all__ = [
    "debug_enabled",
    "debug_log",
    "set_debug_categories",
    "TraceEntry",
    "TraceRecorder",
    "TraceSink",
]
