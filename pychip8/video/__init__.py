"""Framebuffer, font and rendering helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .display import DISPLAY_HEIGHT, DISPLAY_WIDTH, DisplayBuffer
from .font import FONT_SET, GLYPH_BYTES, glyph_address
from .palette import MONOCHROME, parse_color, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "DisplayBuffer",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "FONT_SET",
    "GLYPH_BYTES",
    "glyph_address",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "parse_color",
    "validate_palette",
]
