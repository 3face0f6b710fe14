"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .clock import DEFAULT_CLOCK_SPEED, FrameScheduler
from .machine import Machine, MachineConfig, create_machine

__all__ = [
    "MachineConfig",
    "Machine",
    "create_machine",
    "FrameScheduler",
    "DEFAULT_CLOCK_SPEED",
]
