#!/usr/bin/env python3
"""
pixel_print.cli
Animate an image onto a canvas pixel by pixel and write the finished canvas.

Usage:
  pixel-print INPUT [--out OUTPUT] --mode [full|red|green|blue|dominant|palette]
              --pixels-per-frame N --frame-delay MS --palette-count K
              [--random] [--clear-between] [--seed S] [--no-delay] [--debug]

Modes:
  full     : every pixel in scan order (or random order with --random).
  red/green/blue : as full, keeping only one channel.
  dominant : pixels grouped by their strongest channel, one pass per group.
  palette  : pixels grouped by k-means colour cluster, each painted in its
             cluster colour.

Output:
  PNG. If --out is omitted, writes <stem>_printed.png next to INPUT.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from .analysis import unique_colours_and_counts
from .constants import (
    DEFAULT_COLOR_MODE,
    DEFAULT_FRAME_DELAY_MS,
    DEFAULT_PALETTE_COUNT,
    DEFAULT_PIXELS_PER_FRAME,
    OUTPUT_SUFFIX,
)
from .core_types import rgb_to_hex
from .driver import progress_printer, run_print
from .image_io import is_image_file, load_pixel_buffer, save_surface_png
from .mode import ColorMode
from .session import PrintSession
from .settings import PrintSettings
from .surface import ArraySurface
from .utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
)

# CLI args


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for an animated print.

    Returns:
      argparse.Namespace with:
        src: Path to the image
        out: optional Path for the finished canvas
        mode: draw mode name
        pixels_per_frame, frame_delay, palette_count: raw values (clamped later)
        random, clear_between: bool
        seed: optional int for shuffles
        no_delay: skip sleeping between frames
        max_frames: optional frame cap
        debug: bool for verbose scheduler details
    """
    parser = argparse.ArgumentParser(
        prog="pixel-print",
        description="Paint an image onto a canvas pixel by pixel in a chosen order.",
    )
    parser.add_argument("src", type=Path, help="Input image")
    parser.add_argument("--out", type=Path, default=None, help="Output PNG (optional)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ColorMode],
        default=DEFAULT_COLOR_MODE,
        help="Draw order.",
    )
    parser.add_argument(
        "--pixels-per-frame",
        default=str(DEFAULT_PIXELS_PER_FRAME),
        help="Pixels painted per frame (non-positive falls back to 1).",
    )
    parser.add_argument(
        "--frame-delay",
        default=str(DEFAULT_FRAME_DELAY_MS),
        help="Milliseconds between frames.",
    )
    parser.add_argument(
        "--palette-count",
        default=str(DEFAULT_PALETTE_COUNT),
        help="Cluster count for palette mode.",
    )
    parser.add_argument("--random", action="store_true", help="Randomize draw order")
    parser.add_argument(
        "--clear-between",
        action="store_true",
        help="Palette mode: clear the canvas between clusters",
    )
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    parser.add_argument(
        "--no-delay", action="store_true", help="Do not sleep between frames"
    )
    parser.add_argument(
        "--max-frames", type=int, default=None, help="Stop after this many frames"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose scheduler details")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> PrintSettings:
    return PrintSettings(
        pixels_per_frame=args.pixels_per_frame,
        frame_delay=args.frame_delay,
        color_mode=args.mode,
        palette_count=args.palette_count,
        random_order=args.random,
        clear_between=args.clear_between,
    )


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src: Path = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2
    if not is_image_file(src):
        error(f"failed to load image: {src}")
        return 2

    t_start = time.perf_counter()
    print_banner(src.name)
    settings = settings_from_args(args)
    print_config_line("run", settings.summary(), debug=False)

    buffer = load_pixel_buffer(src)
    surface = ArraySurface(buffer.width, buffer.height)
    session = PrintSession(settings, surface, seed=args.seed, debug=args.debug)
    session.load_pixels(buffer)
    log(f"Image loaded: {buffer.width}x{buffer.height}")

    if args.debug:
        uniques = unique_colours_and_counts(buffer)
        debug_log(
            key_value_pairs_to_string(
                [("Unique colours", len(uniques)), ("Pixels", buffer.total)]
            )
        )
        if session.clusters is not None:
            for c in range(session.clusters.k):
                debug_log(
                    f"  cluster {c}: {rgb_to_hex(session.clusters.center(c))}  "
                    f"pixels={session.clusters.sizes[c]:,}"
                )
    t_loaded = time.perf_counter()

    report = run_print(
        session,
        sleep=None if args.no_delay else time.sleep,
        on_frame=progress_printer,
        max_frames=args.max_frames,
    )
    if not report.complete:
        # Progress line was left open mid-run.
        sys.stdout.write("\n")
    t_printed = time.perf_counter()

    out_path = args.out or src.with_name(f"{src.stem}{OUTPUT_SUFFIX}.png")
    out_path = save_surface_png(out_path, surface)

    log(f"Wrote {out_path.name} | size={buffer.width}x{buffer.height} | mode={settings.color_mode.value}")
    log(report.describe())
    if args.debug:
        debug_log(
            f"Total {format_total_duration_compact(t_printed - t_start)}  "
            f"(load={format_total_duration_compact(t_loaded - t_start)}, "
            f"print={format_total_duration_compact(t_printed - t_loaded)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
