from __future__ import annotations

"""
In-memory drawing surface.

ArraySurface implements the paint primitive over a (H, W, 4) uint8 canvas.
Cleared pixels are transparent black; painted pixels are opaque.
"""

from typing import Tuple

import numpy as np

from .core_types import RGBTuple, U8Image


class ArraySurface:
    def __init__(
        self, width: int, height: int, background: Tuple[int, int, int, int] = (0, 0, 0, 0)
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface size must be positive")
        self.width = int(width)
        self.height = int(height)
        self.background = np.array(background, dtype=np.uint8)
        self.pixels: U8Image = np.empty((self.height, self.width, 4), dtype=np.uint8)
        self.pixels[...] = self.background

    def paint(self, x: int, y: int, rgb: RGBTuple) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x, :3] = rgb
            self.pixels[y, x, 3] = 255

    def clear(self) -> None:
        self.pixels[...] = self.background

    def rgb(self) -> U8Image:
        return self.pixels[..., :3]


__all__ = ["ArraySurface"]
