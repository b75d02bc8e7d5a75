from __future__ import annotations

"""
Live run configuration.

PrintSettings holds the values a host UI exposes. Every setter coerces raw
input (ints, floats, numeric strings, blanks, None) and clamps invalid values
to a safe fallback instead of raising, so the scheduler can read them on every
frame without checks.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .constants import (
    DEFAULT_FRAME_DELAY_MS,
    DEFAULT_PALETTE_COUNT,
    DEFAULT_PIXELS_PER_FRAME,
    FALLBACK_FRAME_DELAY_MS,
    FALLBACK_PALETTE_COUNT,
    FALLBACK_PIXELS_PER_FRAME,
)
from .mode import ColorMode, parse_color_mode
from .utils import warn


def _parse_int(value: Any) -> Optional[int]:
    """Leading-integer parse; None for blanks and non-numeric input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else None
    text = str(value).strip()
    digits = ""
    for i, ch in enumerate(text):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return None


def coerce_positive(
    value: Any, default: int, fallback: int, name: str = "value"
) -> int:
    """
    Blank/None -> default; non-numeric or <= 0 -> fallback; else the int.
    Emits a [warn] line whenever the fallback is used.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    parsed = _parse_int(value)
    if parsed is None or parsed <= 0:
        warn(f"invalid {name} {value!r}; using {fallback}")
        return fallback
    return parsed


@dataclass
class PrintSettings:
    """Configuration read live by the scheduler."""

    pixels_per_frame: int = DEFAULT_PIXELS_PER_FRAME
    frame_delay: int = DEFAULT_FRAME_DELAY_MS
    color_mode: ColorMode = ColorMode.FULL
    palette_count: int = DEFAULT_PALETTE_COUNT
    random_order: bool = False
    clear_between: bool = False
    _ready: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self._ready = True
        # Run the constructor arguments through the setters.
        for name in (
            "pixels_per_frame",
            "frame_delay",
            "color_mode",
            "palette_count",
            "random_order",
            "clear_between",
        ):
            setattr(self, name, getattr(self, name))

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "_ready" or not getattr(self, "_ready", False):
            object.__setattr__(self, name, value)
            return
        if name == "pixels_per_frame":
            value = coerce_positive(
                value,
                DEFAULT_PIXELS_PER_FRAME,
                FALLBACK_PIXELS_PER_FRAME,
                "pixels per frame",
            )
        elif name == "frame_delay":
            value = coerce_positive(
                value, DEFAULT_FRAME_DELAY_MS, FALLBACK_FRAME_DELAY_MS, "frame delay"
            )
        elif name == "palette_count":
            value = coerce_positive(
                value, DEFAULT_PALETTE_COUNT, FALLBACK_PALETTE_COUNT, "palette count"
            )
        elif name == "color_mode":
            mode = parse_color_mode(value)
            if mode is None:
                warn(f"unknown colour mode {value!r}; using {ColorMode.FULL.value}")
                mode = ColorMode.FULL
            value = mode
        elif name in ("random_order", "clear_between"):
            value = bool(value)
        object.__setattr__(self, name, value)

    def summary(self) -> List[Tuple[str, Any]]:
        """(label, value) pairs for print_config_line."""
        return [
            ("Mode", self.color_mode.value),
            ("Pixels/frame", self.pixels_per_frame),
            ("Delay ms", self.frame_delay),
            ("Palette", self.palette_count),
            ("Random", self.random_order),
            ("Clear between", self.clear_between),
        ]


__all__ = ["PrintSettings", "coerce_positive"]
