"""Monochrome pixel grid with XOR sprite compositing."""

from typing import Sequence, Tuple

from .constants import DISPLAY_HEIGHT, DISPLAY_WIDTH, SPRITE_WIDTH


class Framebuffer:
    """
    Row-major grid of on/off pixels.

    `dirty` is raised by every mutation; whoever redraws the screen clears it.
    Coordinates passed to indexing wrap around both edges.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = [False] * (width * height)
        self.dirty = False

    def __getitem__(self, pos: Tuple[int, int]) -> bool:
        x, y = pos
        return self.pixels[(y % self.height) * self.width + (x % self.width)]

    def __setitem__(self, pos: Tuple[int, int], value: bool):
        x, y = pos
        self.pixels[(y % self.height) * self.width + (x % self.width)] = value
        self.dirty = True

    def clear(self):
        """Unset all pixels"""
        self.pixels = [False] * (self.width * self.height)
        self.dirty = True

    def draw(self, x: int, y: int, height: int, sprite: Sequence[int], wrap: bool = False) -> bool:
        """
        XOR an 8-pixel wide, `height` rows tall sprite onto the grid.

        The origin is taken modulo the screen size. With `wrap` off, rows and
        columns past the right or bottom edge are clipped; with it on they
        reappear on the opposite edge. Returns True if any set pixel was
        turned off (a collision).
        """
        if len(sprite) != height:
            raise ValueError(f"sprite has {len(sprite)} rows, expected {height}")

        x %= self.width
        y %= self.height
        max_x = x + SPRITE_WIDTH if wrap else min(x + SPRITE_WIDTH, self.width)
        max_y = y + height if wrap else min(y + height, self.height)
        collision = False

        for py in range(y, max_y):
            sprite_byte = sprite[py - y]
            if not sprite_byte:
                continue
            for px in range(x, max_x):
                if not sprite_byte & (0x80 >> (px - x)):
                    continue
                if self[px, py]:
                    self[px, py] = False
                    collision = True
                else:
                    self[px, py] = True

        return collision

    def to_color_model(self, fg: bytes, bg: bytes) -> bytes:
        """
        Flatten the grid into a pixel format such as RGB888 or RGBA8888.

        Set pixels become `fg`, unset pixels `bg`. The grid is not modified.
        """
        fg = bytes(fg)
        bg = bytes(bg)
        return b"".join(fg if pixel else bg for pixel in self.pixels)
