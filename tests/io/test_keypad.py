"""Tests for the hexadecimal keypad latch."""

from __future__ import annotations

import pytest

from pychip8.io import KEYPAD_LAYOUT, Keypad


def test_press_and_release_by_key_name() -> None:
    keypad = Keypad()

    assert keypad.press("q")
    assert keypad.is_pressed(0x4)

    assert keypad.release("Q")
    assert not keypad.is_pressed(0x4)


def test_unmapped_key_is_ignored() -> None:
    keypad = Keypad()
    assert keypad.press("p") is False
    assert keypad.snapshot() == (False,) * 16


def test_layout_covers_all_sixteen_keys() -> None:
    assert sorted(KEYPAD_LAYOUT.values()) == list(range(16))


def test_first_pressed_returns_lowest_index() -> None:
    keypad = Keypad()
    assert keypad.first_pressed() is None
    keypad.set_key(0xF, True)
    keypad.set_key(0x3, True)
    assert keypad.first_pressed() == 0x3


def test_is_pressed_uses_low_nibble() -> None:
    keypad = Keypad()
    keypad.set_key(0x1, True)
    assert keypad.is_pressed(0x21)


def test_set_key_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        Keypad().set_key(16, True)


def test_reset_clears_latch() -> None:
    keypad = Keypad()
    keypad.press("v")
    keypad.reset()
    assert not any(keypad.snapshot())


def test_latch_is_not_a_constructor_argument() -> None:
    with pytest.raises(TypeError):
        Keypad(_keys=[True] * 16)
    assert "_keys" not in repr(Keypad())
