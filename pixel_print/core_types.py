from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import List, Protocol, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]

U8Image = NDArray[np.uint8]  # (H, W, 3|4)
U8Rows = NDArray[np.uint8]  # (N, 3|4)
IndexArray = NDArray[np.int64]  # (N,) pixel indices

# Value objects


@dataclass(frozen=True)
class PixelBuffer:
    """
    Decoded RGBA pixels, row-major, 4 bytes per pixel.

    `rgba` is a read-only (N, 4) uint8 view with N = width * height.
    """

    width: int
    height: int
    rgba: U8Rows

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if self.rgba.dtype != np.uint8 or self.rgba.shape != (
            self.width * self.height,
            4,
        ):
            raise TypeError(
                f"expected uint8 ({self.width * self.height},4) rows, "
                f"got {self.rgba.dtype} {self.rgba.shape}"
            )
        view = self.rgba.view()
        view.setflags(write=False)
        object.__setattr__(self, "rgba", view)

    @property
    def total(self) -> int:
        return self.width * self.height

    @property
    def rgb(self) -> U8Rows:
        """(N, 3) view without alpha."""
        return self.rgba[:, :3]

    @classmethod
    def from_bytes(
        cls, width: int, height: int, data: Union[bytes, bytearray, memoryview]
    ) -> "PixelBuffer":
        """Wrap a raw RGBA byte sequence (as produced by a canvas readback)."""
        arr = np.frombuffer(bytes(data), dtype=np.uint8)
        if arr.size != width * height * 4:
            raise ValueError(
                f"expected {width * height * 4} bytes for {width}x{height}, got {arr.size}"
            )
        return cls(width, height, arr.reshape(-1, 4).copy())

    @classmethod
    def from_array(cls, image: np.ndarray) -> "PixelBuffer":
        """Wrap a uint8 (H,W,3) or (H,W,4) array; missing alpha becomes 255."""
        if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] not in (3, 4):
            raise TypeError("expected uint8 (H,W,3/4) image")
        h, w, c = image.shape
        rows = np.empty((h * w, 4), dtype=np.uint8)
        rows[:, :3] = image[..., :3].reshape(-1, 3)
        rows[:, 3] = image[..., 3].reshape(-1) if c == 4 else 255
        return cls(w, h, rows)


@dataclass(frozen=True)
class DominantGroups:
    """Pixel indices grouped by their strongest channel, each in scan order."""

    red: IndexArray
    green: IndexArray
    blue: IndexArray

    def by_channel(self, channel: int) -> IndexArray:
        return (self.red, self.green, self.blue)[channel]

    @property
    def sizes(self) -> Tuple[int, int, int]:
        return (int(self.red.size), int(self.green.size), int(self.blue.size))


@dataclass(frozen=True)
class ClusterModel:
    """k RGB centers and the scan-ordered member indices of each cluster."""

    centers: U8Rows  # (k, 3)
    members: List[IndexArray]
    rounds: int = 0
    converged: bool = False
    reseeded: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def k(self) -> int:
        return int(self.centers.shape[0])

    @property
    def sizes(self) -> List[int]:
        return [int(m.size) for m in self.members]

    def center(self, cluster: int) -> RGBTuple:
        r, g, b = self.centers[cluster].tolist()
        return (r, g, b)


@dataclass(frozen=True)
class FrameReport:
    """Outcome of one scheduler step."""

    drawn: int = 0
    painted: int = 0
    total: int = 0
    complete: bool = False

    @property
    def fraction(self) -> float:
        return (self.painted / self.total) if self.total else 0.0

    @property
    def percent(self) -> int:
        """Whole percent, half rounded up; 100 only once every pixel is painted."""
        if not self.total:
            return 0
        value = (self.painted * 200 + self.total) // (self.total * 2)
        if self.painted < self.total:
            return min(value, 99)
        return value

    def describe(self) -> str:
        return f"printed {self.painted}/{self.total} ({self.percent}%)"


# Paint primitive


class Surface(Protocol):
    """Drawing target supplied by the host."""

    def paint(self, x: int, y: int, rgb: RGBTuple) -> None: ...

    def clear(self) -> None: ...


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> str:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


__all__ = [
    # aliases / types
    "RGBTuple",
    "U8Image",
    "U8Rows",
    "IndexArray",
    # value objects
    "PixelBuffer",
    "DominantGroups",
    "ClusterModel",
    "FrameReport",
    "Surface",
    # helpers
    "rgb_to_hex",
]
