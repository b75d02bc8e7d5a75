from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

"""
Draw mode selection.

Exports:
- ColorMode: full | red | green | blue | dominant | palette
- parse_color_mode(value) -> Optional[ColorMode]
- channel_mask(mode) -> (r, g, b) multipliers for linear modes

Notes:
- full/red/green/blue walk every pixel once (linear modes).
- dominant/palette walk groups of pixels as sequential passes.
"""


class ColorMode(str, Enum):
    FULL = "full"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    DOMINANT = "dominant"
    PALETTE = "palette"

    @property
    def is_linear(self) -> bool:
        return self not in (ColorMode.DOMINANT, ColorMode.PALETTE)


LINEAR_MODES: Tuple[ColorMode, ...] = (
    ColorMode.FULL,
    ColorMode.RED,
    ColorMode.GREEN,
    ColorMode.BLUE,
)

_MASKS = {
    ColorMode.FULL: (1, 1, 1),
    ColorMode.RED: (1, 0, 0),
    ColorMode.GREEN: (0, 1, 0),
    ColorMode.BLUE: (0, 0, 1),
}


def parse_color_mode(value: object) -> Optional[ColorMode]:
    """ColorMode from an enum member or a case-insensitive name; None if unknown."""
    if isinstance(value, ColorMode):
        return value
    if isinstance(value, str):
        try:
            return ColorMode(value.strip().lower())
        except ValueError:
            return None
    return None


def channel_mask(mode: ColorMode) -> Tuple[int, int, int]:
    """Per-channel keep mask of a linear mode; non-selected channels become 0."""
    if mode not in _MASKS:
        raise ValueError(f"{mode.value} is not a linear mode")
    return _MASKS[mode]


__all__ = ["ColorMode", "LINEAR_MODES", "parse_color_mode", "channel_mask"]
