"""Monochrome framebuffer and sprite composition."""

from __future__ import annotations

from typing import Iterable

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32


class DisplayBuffer:
    """Row-major grid of on/off pixels mutated only by XOR sprite draws.

    Sprite start positions wrap around the screen, but the sprite itself is
    clipped at the right and bottom edges rather than wrapping.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("display dimensions must be positive")
        self._width = width
        self._height = height
        self._cells = [False] * (width * height)
        self._revision = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def revision(self) -> int:
        """Counter bumped on every change, used to skip redundant redraws."""

        return self._revision

    def clear(self) -> None:
        self._cells = [False] * (self._width * self._height)
        self._revision += 1

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} display")
        return self._cells[y * self._width + x]

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR ``rows`` onto the display at (``x``, ``y``).

        Returns True when any lit pixel was switched off.
        """

        width = self._width
        cells = self._cells
        collision = False
        row_y = y % self._height
        start_x = x % width

        for sprite_byte in rows:
            base = row_y * width
            col = start_x
            for bit in range(7, -1, -1):
                pixel = bool(sprite_byte & (1 << bit))
                index = base + col
                if pixel and cells[index]:
                    collision = True
                cells[index] ^= pixel
                col += 1
                if col >= width:
                    break
            row_y += 1
            if row_y >= self._height:
                break

        self._revision += 1
        return collision

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._cells)

    def rows(self) -> list[tuple[bool, ...]]:
        width = self._width
        return [tuple(self._cells[row * width:(row + 1) * width]) for row in range(self._height)]

    def lit_count(self) -> int:
        return sum(self._cells)

    def render_text(self, on: str = "#", off: str = ".") -> str:
        """ASCII dump used by the debug shell."""

        return "\n".join("".join(on if cell else off for cell in row) for row in self.rows())
