"""4 KiB address space for the CHIP-8 interpreter.

The interpreter reserves the low 512 bytes; the built-in font sits at the very
start of that block and programs are loaded from ``PROGRAM_START`` upwards.
Every address is reduced to 12 bits before it reaches the backing store, so
index arithmetic that runs past the top of memory wraps to the bottom instead
of faulting.
"""

from __future__ import annotations

from pychip8.utils import debug_enabled, debug_log

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


def _mask12(value: int) -> int:
    """Clamp ``value`` to the 12-bit address space used by CHIP-8."""

    return value & 0xFFF


class Memory:
    """Byte-addressable RAM with a write-protected font region."""

    def __init__(self) -> None:
        self._data = bytearray(MEMORY_SIZE)
        self._protected_end = 0

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def protected_end(self) -> int:
        """First address past the read-only font region."""

        return self._protected_end

    def load8(self, address: int) -> int:
        return self._data[_mask12(address)]

    def store8(self, address: int, value: int) -> None:
        addr = _mask12(address)
        if addr < self._protected_end:
            if debug_enabled("memory"):
                debug_log("memory", "dropped store to font region addr=%03x val=%02x", addr, value & 0xFF)
            return
        self._data[addr] = value & 0xFF

    def load16(self, address: int) -> int:
        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def load_block(self, address: int, length: int) -> bytes:
        return bytes(self.load8(address + offset) for offset in range(length))

    def install_font(self, font: bytes) -> None:
        """Copy ``font`` to address 0 and make that region read-only."""

        if len(font) > PROGRAM_START:
            raise ValueError("font does not fit below the program area")
        self._data[: len(font)] = font
        self._protected_end = len(font)

    def load_program(self, data: bytes, start: int = PROGRAM_START) -> None:
        if start + len(data) > self.size:
            raise ValueError(
                f"program of {len(data)} bytes does not fit at {start:#05x}"
            )
        self._data[start:start + len(data)] = data

    def clear(self) -> None:
        self._data[:] = bytes(self.size)
        self._protected_end = 0

    def snapshot(self) -> bytes:
        return bytes(self._data)
