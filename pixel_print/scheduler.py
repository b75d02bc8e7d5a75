from __future__ import annotations

"""
Incremental draw steppers.

Each stepper owns the cursor of one draw mode and exposes the same surface:
  step(surface, budget, clear_between=False) -> pixels painted this call
  progress() -> (painted, total)
  complete   -> bool
  reset()    -> cursor back to the start

LinearStepper walks one pixel order (full/red/green/blue).
PassStepper walks a list of index groups as sequential passes (dominant/palette),
optionally painting every pixel of a pass with a fixed colour.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .core_types import IndexArray, PixelBuffer, RGBTuple, Surface


@dataclass
class LinearCursor:
    offset: int = 0


@dataclass
class PassCursor:
    pass_index: int = 0
    position: int = 0


def _paint_rows(
    surface: Surface, width: int, indices: np.ndarray, colours: np.ndarray
) -> None:
    xs = (indices % width).tolist()
    ys = (indices // width).tolist()
    for x, y, (r, g, b) in zip(xs, ys, colours.tolist()):
        surface.paint(x, y, (r, g, b))


class LinearStepper:
    """One pass over every pixel, in scan order or through a permutation."""

    def __init__(
        self,
        buffer: PixelBuffer,
        order: Optional[IndexArray] = None,
        mask: Tuple[int, int, int] = (1, 1, 1),
    ) -> None:
        self.buffer = buffer
        self.order = order
        self.mask = np.array(mask, dtype=np.uint8)
        self.cursor = LinearCursor()

    @property
    def total(self) -> int:
        return self.buffer.total

    @property
    def complete(self) -> bool:
        return self.cursor.offset >= self.total

    def reset(self) -> None:
        self.cursor = LinearCursor()

    def progress(self) -> Tuple[int, int]:
        return min(self.cursor.offset, self.total), self.total

    def step(self, surface: Surface, budget: int, clear_between: bool = False) -> int:
        start = self.cursor.offset
        end = min(start + max(0, int(budget)), self.total)
        if end <= start:
            return 0
        if self.order is None:
            indices = np.arange(start, end, dtype=np.int64)
        else:
            indices = self.order[start:end]
        colours = self.buffer.rgb[indices] * self.mask
        _paint_rows(surface, self.buffer.width, indices, colours)
        self.cursor.offset = end
        return end - start


class PassStepper:
    """
    Sequential passes over index groups.

    `passes` are already in pass order. When `colours` is given, every pixel of
    pass p is painted with colours[p] instead of its own colour. Crossing from a
    pass that painted pixels into the next non-empty pass clears the surface
    first when clear_between is set.
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        passes: Sequence[IndexArray],
        colours: Optional[Sequence[RGBTuple]] = None,
        labels: Optional[Sequence[int]] = None,
    ) -> None:
        self.buffer = buffer
        self.passes: List[IndexArray] = list(passes)
        self.colours = (
            None if colours is None else np.array(colours, dtype=np.uint8).reshape(-1, 3)
        )
        # Source group/cluster id of each pass, for logging.
        self.labels = list(labels) if labels is not None else list(range(len(self.passes)))
        self.sizes = [int(p.size) for p in self.passes]
        self.cursor = PassCursor()
        self.pending_clear = False
        self._settle()

    @property
    def total(self) -> int:
        return sum(self.sizes)

    @property
    def pass_count(self) -> int:
        return len(self.passes)

    @property
    def complete(self) -> bool:
        return self.cursor.pass_index >= self.pass_count

    @property
    def current_label(self) -> Optional[int]:
        if self.complete:
            return None
        return self.labels[self.cursor.pass_index]

    def reset(self) -> None:
        self.cursor = PassCursor()
        self.pending_clear = False
        self._settle()

    def progress(self) -> Tuple[int, int]:
        done = sum(self.sizes[: self.cursor.pass_index])
        if not self.complete:
            done += self.cursor.position
        return done, self.total

    def _settle(self) -> None:
        """Move past finished and empty passes."""
        cur = self.cursor
        while cur.pass_index < self.pass_count and cur.position >= self.sizes[cur.pass_index]:
            if cur.position > 0:
                self.pending_clear = True
            cur.pass_index += 1
            cur.position = 0

    def advance_pass(self) -> bool:
        """End the current pass now. Returns False when already complete."""
        if self.complete:
            return False
        cur = self.cursor
        cur.position = 0
        cur.pass_index += 1
        self.pending_clear = True
        self._settle()
        return True

    def step(self, surface: Surface, budget: int, clear_between: bool = False) -> int:
        remaining = max(0, int(budget))
        drawn = 0
        while remaining > 0 and not self.complete:
            cur = self.cursor
            if self.pending_clear:
                if clear_between:
                    surface.clear()
                self.pending_clear = False
            group = self.passes[cur.pass_index]
            end = min(cur.position + remaining, self.sizes[cur.pass_index])
            indices = group[cur.position : end]
            if self.colours is None:
                colours = self.buffer.rgb[indices]
            else:
                colours = np.broadcast_to(
                    self.colours[cur.pass_index], (indices.size, 3)
                )
            _paint_rows(surface, self.buffer.width, indices, colours)
            count = end - cur.position
            cur.position = end
            drawn += count
            remaining -= count
            self._settle()
        if self.complete:
            self.pending_clear = False
        return drawn


Stepper = Union[LinearStepper, PassStepper]


__all__ = ["LinearCursor", "PassCursor", "LinearStepper", "PassStepper", "Stepper"]
