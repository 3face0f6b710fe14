"""Tests for the CHIP-8 address space."""

from __future__ import annotations

import pytest

from pychip8.bus import MEMORY_SIZE, PROGRAM_START, Memory
from pychip8.video import FONT_SET


def test_memory_size_and_initial_contents() -> None:
    memory = Memory()
    assert memory.size == MEMORY_SIZE == 4096
    assert memory.snapshot() == bytes(MEMORY_SIZE)


def test_addresses_wrap_at_12_bits() -> None:
    memory = Memory()
    memory.store8(0x1300, 0xAB)
    assert memory.load8(0x300) == 0xAB
    memory.store8(0xFFF, 0x12)
    memory.store8(0x1000 + 0x400, 0x34)
    assert memory.load16(0xFFF) == 0x1200


def test_load16_is_big_endian() -> None:
    memory = Memory()
    memory.store8(0x300, 0x12)
    memory.store8(0x301, 0x34)
    assert memory.load16(0x300) == 0x1234


def test_font_region_is_read_only() -> None:
    memory = Memory()
    memory.install_font(FONT_SET)

    memory.store8(0x00, 0x00)
    memory.store8(79, 0x00)
    memory.store8(80, 0x55)

    assert memory.load_block(0, len(FONT_SET)) == FONT_SET
    assert memory.load8(80) == 0x55
    assert memory.protected_end == 80


def test_load_program_at_entry_point() -> None:
    memory = Memory()
    memory.load_program(b"\x12\x34\x56")
    assert memory.load_block(PROGRAM_START, 3) == b"\x12\x34\x56"


def test_load_program_rejects_overflow() -> None:
    memory = Memory()
    with pytest.raises(ValueError):
        memory.load_program(bytes(MEMORY_SIZE - PROGRAM_START + 1))


def test_clear_drops_font_protection() -> None:
    memory = Memory()
    memory.install_font(FONT_SET)
    memory.clear()
    memory.store8(0, 0x77)
    assert memory.load8(0) == 0x77
