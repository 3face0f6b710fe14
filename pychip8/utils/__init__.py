"""Utility helpers for the CHIP-8 interpreter."""

from .debug import debug_enabled, debug_log, enable_categories, reload_categories
from .trace import TraceRecorder

__all__ = [
    "debug_enabled",
    "debug_log",
    "enable_categories",
    "reload_categories",
    "TraceRecorder",
]
