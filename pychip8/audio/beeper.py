"""Square-wave tone driven by the sound timer."""

from __future__ import annotations

from array import array
from typing import Optional


def square_wave_samples(frequency: float, sample_rate: int, amplitude: int) -> array:
    """Return one period of a signed 16-bit square wave."""

    if frequency <= 0.0:
        raise ValueError("frequency must be positive")
    period = max(2, int(round(sample_rate / frequency)))
    half = period // 2
    amplitude = max(0, min(0x7FFF, amplitude))
    buffer = array("h")
    for index in range(period):
        buffer.append(amplitude if index < half else -amplitude)
    return buffer


class SquareWaveBeeper:
    """Manage a looping square-wave tone using pygame's mixer."""

    def __init__(
        self,
        *,
        frequency: float = 440.0,
        sample_rate: int = 44_100,
        volume: float = 0.1,
        amplitude: int = 12_000,
        min_play_ms: int = 35,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._volume = max(0.0, min(1.0, volume))
        self._min_play_ms = max(0, min_play_ms)
        self._channel: Optional[pygame.mixer.Channel] = None
        samples = square_wave_samples(frequency, max(1, sample_rate), amplitude)
        self._sound = pygame.mixer.Sound(buffer=samples.tobytes())
        self._playing = False
        self._last_start_ms: int = 0

    @property
    def playing(self) -> bool:
        return self._playing

    # ------------------------------------------------------------------
    # Public API

    def set_state(self, enabled: bool) -> None:
        """Start or stop the tone; repeated calls with the same state are cheap."""

        if not enabled:
            if self._playing:
                self._stop()
            return
        if self._playing:
            return

        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel

        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)
        self._playing = True
        self._last_start_ms = self._pygame.time.get_ticks()

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self._stop()
        self._channel = None

    # ------------------------------------------------------------------
    # Internals

    def _stop(self) -> None:
        if self._channel is not None:
            elapsed = self._pygame.time.get_ticks() - self._last_start_ms
            remaining = self._min_play_ms - elapsed
            if remaining > 0:
                self._channel.fadeout(int(max(10, remaining)))
            else:
                self._channel.stop()
        self._playing = False


__all__ = ["SquareWaveBeeper", "square_wave_samples"]
