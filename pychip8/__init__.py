"""CHIP-8 virtual machine interpreter.

The core (``bus``, ``cpu``, ``video``, ``io``, ``system``) is plain Python and
has no presentation dependencies; ``ui`` and ``audio`` wrap it with pygame.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
