"""Memory and timer devices for the CHIP-8 interpreter."""

from .memory import MAX_PROGRAM_SIZE, MEMORY_SIZE, PROGRAM_START, Memory
from .timers import TIMER_RATE, Timers

__all__ = [
    "Memory",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "Timers",
    "TIMER_RATE",
]
