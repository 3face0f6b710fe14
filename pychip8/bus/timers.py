"""Delay and sound timers."""

from __future__ import annotations

from dataclasses import dataclass

TIMER_RATE = 60  # Hz


@dataclass
class Timers:
    """Two 8-bit countdown registers decremented by an external tick."""

    delay: int = 0
    sound: int = 0

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def tick(self) -> bool:
        """Decrement both timers once; return True if the tone should play.

        The tone plays for every tick in which the sound timer was non-zero
        before decrementing.
        """

        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
            return True
        return False

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
