"""Compose the instruction cadence with the fixed timer cadence."""

from __future__ import annotations

from pychip8.bus.timers import TIMER_RATE

DEFAULT_CLOCK_SPEED = 700  # instructions per second


class FrameScheduler:
    """Split an instruction rate into per-timer-tick step budgets.

    The fractional remainder is carried over, so e.g. 700 Hz at 60 Hz yields
    budgets of 11 and 12 steps that average exactly 700 per second.
    """

    def __init__(self, clock_speed: int = DEFAULT_CLOCK_SPEED, timer_rate: int = TIMER_RATE) -> None:
        if clock_speed <= 0:
            raise ValueError("clock speed must be positive")
        if timer_rate <= 0:
            raise ValueError("timer rate must be positive")
        self._clock_speed = clock_speed
        self._timer_rate = timer_rate
        self._remainder = 0

    @property
    def clock_speed(self) -> int:
        return self._clock_speed

    @property
    def timer_rate(self) -> int:
        return self._timer_rate

    @property
    def frame_seconds(self) -> float:
        return 1.0 / self._timer_rate

    def steps_for_frame(self) -> int:
        total = self._clock_speed + self._remainder
        steps, self._remainder = divmod(total, self._timer_rate)
        return steps

    def reset(self) -> None:
        self._remainder = 0
