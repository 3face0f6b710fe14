"""Audio helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .beeper import SquareWaveBeeper, square_wave_samples

__all__ = ["SquareWaveBeeper", "square_wave_samples"]
