"""
Defaults and tunables used across the project.

- Frame defaults (DEFAULT_*)
- Palette clustering knobs (KMEANS_*)
- Dominant pass order
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Frame / run defaults
# =========================
DEFAULT_PIXELS_PER_FRAME: int = 10
DEFAULT_FRAME_DELAY_MS: int = 50
DEFAULT_PALETTE_COUNT: int = 20
DEFAULT_COLOR_MODE: str = "full"

# Fallbacks when a configured value is non-numeric or non-positive.
FALLBACK_PIXELS_PER_FRAME: int = 1
FALLBACK_FRAME_DELAY_MS: int = 50
FALLBACK_PALETTE_COUNT: int = 20

# =========================
# Palette clustering (k-means in RGB)
# =========================
KMEANS_SAMPLE_MAX: int = 50_000
KMEANS_MAX_ROUNDS: int = 12
KMEANS_INIT_STRIDE: int = 997
KMEANS_RESEED_STRIDE: int = 811
# Rows per distance block during assignment; bounds the (rows, k) matrix.
KMEANS_ASSIGN_CHUNK: int = 65_536

# =========================
# Dominant mode
# =========================
# Channel of each pass in identity order: green, red, blue (descending luma weight).
DOMINANT_PASS_CHANNELS: Tuple[int, int, int] = (1, 0, 2)
CHANNEL_NAMES: Tuple[str, str, str] = ("red", "green", "blue")

# =========================
# Host
# =========================
OUTPUT_SUFFIX: str = "_printed"
