"""Program image loading for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus.memory import MAX_PROGRAM_SIZE
from pychip8.utils import debug_enabled, debug_log


class LoadFault(Exception):
    """Raised when a program image is missing, empty, or too large."""


@dataclass(frozen=True)
class RomImage:
    """Raw program bytes together with the name they were loaded from."""

    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def validate_program_image(data: bytes, *, name: str = "<memory>") -> bytes:
    """Return ``data`` as bytes if it fits the program area, else raise."""

    payload = bytes(data)
    if not payload:
        raise LoadFault(f"program image {name} is empty")
    if len(payload) > MAX_PROGRAM_SIZE:
        raise LoadFault(
            f"program image {name} is too large. Size: {len(payload)}, Maximum: {MAX_PROGRAM_SIZE}"
        )
    return payload


def load_rom(stream: BinaryIO, name: str = "<stream>") -> RomImage:
    """Read a raw program image from ``stream``."""

    # Read one byte past the limit so oversize images are detected without
    # pulling arbitrarily large files into memory.
    data = stream.read(MAX_PROGRAM_SIZE + 1)
    payload = validate_program_image(data, name=name)
    if debug_enabled("loader"):
        debug_log("loader", "loaded name=%s size=%d", name, len(payload))
    return RomImage(name=name, data=payload)


def load_rom_from_path(path: str | Path) -> RomImage:
    rom_path = Path(path)
    try:
        with rom_path.open("rb") as stream:
            return load_rom(stream, name=rom_path.name)
    except OSError as exc:
        raise LoadFault(f"unable to open ROM file: {rom_path}") from exc
