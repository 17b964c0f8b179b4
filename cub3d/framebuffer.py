"""An in-memory RGBA frame and the primitive drawing operations on it."""

from __future__ import annotations

import math
from dataclasses import dataclass

BLOCK = 64
WIDTH = 1280
HEIGHT = 720
MINIMAP_SCALE = 4
WALL_COLOR = 0x0000FFFF
DOOR_COLOR = 0x0FF0FFFF
SPRITE_ZOOM = 0.5


def pack_rgba(r: int, g: int, b: int, a: int) -> int:
    """Pack four channel values into one ``0xRRGGBBAA`` integer."""
    return ((r << 24) | (g << 16) | (b << 8) | a) & 0xFFFFFFFF


@dataclass(frozen=True)
class Texture:
    """A decoded image: ``width * height`` pixels of four RGBA bytes each."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture dimensions must be positive")
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError("pixel data does not match texture dimensions")

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the ``(r, g, b, a)`` channels of the texel at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"texel ({x}, {y}) outside texture")
        start = (y * self.width + x) * 4
        r, g, b, a = self.pixels[start:start + 4]
        return r, g, b, a


class Framebuffer:
    """A grid of packed ``0xRRGGBBAA`` colours, row by row from the top left."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.pixels = [0] * (width * height)

    def put_pixel(self, x: float, y: float, color: int) -> None:
        """Set one pixel; coordinates outside the frame are silently ignored."""
        ix, iy = int(x), int(y)
        if ix < 0 or iy < 0 or ix >= self.width or iy >= self.height:
            return
        self.pixels[iy * self.width + ix] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y); raise IndexError outside the frame."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside frame")
        return self.pixels[y * self.width + x]

    def fill_half(self, start: int, color: int) -> None:
        """Paint half the frame's height, full width, beginning at row ``start``."""
        color &= 0xFFFFFFFF
        for row in range(start, start + self.height // 2):
            if 0 <= row < self.height:
                begin = row * self.width
                self.pixels[begin:begin + self.width] = [color] * self.width

    def draw_square(self, x: float, y: float, size: int, color: int) -> None:
        """Draw the outline of a ``size`` square whose top-left corner is (x, y)."""
        for i in range(size):
            self.put_pixel(x + i, y, color)
        for i in range(size):
            self.put_pixel(x, y + i, color)
        for i in range(size):
            self.put_pixel(x + size, y + i, color)
        for i in range(size):
            self.put_pixel(x + i, y + size, color)

    def draw_sprite(self, texture: Texture, x: float, y: float) -> None:
        """Draw a texture scaled down, skipping fully transparent black texels."""
        repeat = math.ceil(SPRITE_ZOOM)
        for ty in range(texture.height):
            for tx in range(texture.width):
                r, g, b, a = texture.pixel(tx, ty)
                color = (a << 24) | (r << 16) | (g << 8) | b
                if not color:
                    continue
                for dy in range(repeat):
                    for dx in range(repeat):
                        self.put_pixel(
                            tx * SPRITE_ZOOM + dx + x,
                            ty * SPRITE_ZOOM + dy + y,
                            color,
                        )

    def draw_minimap(self, rows: list[str]) -> None:
        """Outline walls and doors of the map at a quarter of world scale."""
        cell = BLOCK // MINIMAP_SCALE
        for i, row in enumerate(rows):
            for j, char in enumerate(row):
                if char == "1":
                    self.draw_square(j * cell, i * cell, cell, WALL_COLOR)
                elif char in ("D", "O"):
                    self.draw_square(j * cell, i * cell, cell, DOOR_COLOR)