"""Delay/sound timer behaviour."""

from __future__ import annotations

from pychip8.bus import Timers


def test_tick_decrements_and_clamps_at_zero() -> None:
    timers = Timers()
    timers.set_delay(2)
    timers.set_sound(1)

    assert timers.tick() is True
    assert (timers.delay, timers.sound) == (1, 0)

    assert timers.tick() is False
    assert (timers.delay, timers.sound) == (0, 0)

    timers.tick()
    assert (timers.delay, timers.sound) == (0, 0)


def test_values_are_masked_to_a_byte() -> None:
    timers = Timers()
    timers.set_delay(0x1FF)
    assert timers.delay == 0xFF


def test_sound_active_tracks_nonzero_timer() -> None:
    timers = Timers()
    assert not timers.sound_active
    timers.set_sound(3)
    assert timers.sound_active
    timers.reset()
    assert not timers.sound_active
