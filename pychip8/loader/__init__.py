"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .rom import LoadFault, RomImage, load_rom, load_rom_from_path, validate_program_image

__all__ = [
    "LoadFault",
    "RomImage",
    "load_rom",
    "load_rom_from_path",
    "validate_program_image",
]
