from typing import List, Sequence, Tuple

import numpy as np
import pytest

from pixel_print.core_types import PixelBuffer


class RecordingSurface:
    """Paint target that keeps every call in order."""

    def __init__(self) -> None:
        self.events: List[Tuple] = []

    def paint(self, x, y, rgb) -> None:
        self.events.append(("paint", x, y, tuple(rgb)))

    def clear(self) -> None:
        self.events.append(("clear",))

    @property
    def paints(self) -> List[Tuple]:
        return [e for e in self.events if e[0] == "paint"]

    @property
    def clears(self) -> int:
        return sum(1 for e in self.events if e[0] == "clear")

    def reset(self) -> None:
        self.events.clear()


def make_buffer(colours: Sequence[Tuple[int, int, int]], width: int) -> PixelBuffer:
    rows = np.array([tuple(c) + (255,) for c in colours], dtype=np.uint8)
    return PixelBuffer(width, len(colours) // width, rows)


def random_buffer(width: int, height: int, seed: int = 0) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    img = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return PixelBuffer.from_array(img)


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()
