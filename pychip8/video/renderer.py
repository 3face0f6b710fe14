"""Convert the framebuffer into RGB frames for the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .display import DisplayBuffer
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB frame produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale the 1-bit display into an RGB frame using a two-colour palette."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        background, foreground = validate_palette(palette)
        self._background = bytes(background)
        self._foreground = bytes(foreground)

    def render(self, display: DisplayBuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")

        width = display.width * scale
        height = display.height * scale
        frame = bytearray()
        on_pixel = self._foreground * scale
        off_pixel = self._background * scale

        for row in display.rows():
            line = b"".join(on_pixel if cell else off_pixel for cell in row)
            frame.extend(line * scale)

        return RenderResult(width=width, height=height, pixels=bytes(frame))
