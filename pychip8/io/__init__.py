"""Input helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .keypad import KEY_COUNT, KEYPAD_LAYOUT, Keypad

__all__ = ["Keypad", "KEYPAD_LAYOUT", "KEY_COUNT"]
