"""16-key hexadecimal keypad latch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# COSMAC VIP layout mapped onto the left side of a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
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


@dataclass
class Keypad:
    """Current pressed state of keys 0x0-0xF.

    The host writes the latch between steps; the CPU only reads it.
    """

    layout: Mapping[str, int] = field(default_factory=lambda: dict(KEYPAD_LAYOUT))
    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT, init=False, repr=False)

    def set_key(self, key: int, pressed: bool) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key {key} outside 0x0-0xF")
        self._keys[key] = pressed

    def is_pressed(self, key: int) -> bool:
        return self._keys[key & 0xF]

    def first_pressed(self) -> int | None:
        """Return the lowest pressed key identifier, or None."""

        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def press(self, key_name: str) -> bool:
        """Latch the keypad key bound to a host key name; False if unbound."""

        return self._update(key_name, True)

    def release(self, key_name: str) -> bool:
        return self._update(key_name, False)

    def reset(self) -> None:
        self._keys = [False] * KEY_COUNT

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def _update(self, key_name: str, pressed: bool) -> bool:
        key = self.layout.get(key_name.lower())
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped key=%s pressed=%s", key_name, pressed)
            return False
        self._keys[key] = pressed
        if debug_enabled("input"):
            debug_log("input", "keypad key=%X pressed=%s", key, pressed)
        return True
