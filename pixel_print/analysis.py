from __future__ import annotations

from typing import List, Tuple

import numpy as np

from .constants import CHANNEL_NAMES
from .core_types import DominantGroups, PixelBuffer, RGBTuple

# ================
# Dominant channel
# ================
def dominant_channels(rgb: np.ndarray) -> np.ndarray:
    """
    Strongest channel per row: 0=red, 1=green, 2=blue.
    Ties resolve toward the earlier channel (red over green over blue).
    """
    r = rgb[:, 0]
    g = rgb[:, 1]
    b = rgb[:, 2]
    red = (r >= g) & (r >= b)
    green = ~red & (g >= b)
    out = np.full(rgb.shape[0], 2, dtype=np.int8)
    out[green] = 1
    out[red] = 0
    return out


def dominant_groups(buffer: PixelBuffer) -> DominantGroups:
    """Partition all pixel indices by dominant channel, scan order kept."""
    chan = dominant_channels(buffer.rgb)
    red, green, blue = (
        np.flatnonzero(chan == c).astype(np.int64, copy=False) for c in range(3)
    )
    return DominantGroups(red=red, green=green, blue=blue)


def dominant_summary(groups: DominantGroups) -> List[Tuple[str, int]]:
    """(channel name, size) pairs for logging."""
    return list(zip(CHANNEL_NAMES, groups.sizes))


# =============
# Colour counts
# =============
def unique_colours_and_counts(buffer: PixelBuffer) -> List[Tuple[RGBTuple, int]]:
    """Distinct RGB colours with pixel counts, most frequent first."""
    uniques, counts = np.unique(buffer.rgb, axis=0, return_counts=True)
    order = np.argsort(-counts, kind="stable")
    return [
        ((int(uniques[i, 0]), int(uniques[i, 1]), int(uniques[i, 2])), int(counts[i]))
        for i in order
    ]


__all__ = [
    "dominant_channels",
    "dominant_groups",
    "dominant_summary",
    "unique_colours_and_counts",
]
