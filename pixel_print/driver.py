from __future__ import annotations

"""
Host-side frame loop.

run_print() repeatedly calls PrintSession.frame_tick(), sleeping the live
settings.frame_delay between ticks (and once before the first tick), until the
run completes, stops, or max_frames is reached.
"""

import time
from typing import Callable, Optional

from .core_types import FrameReport
from .session import PrintSession, RunState
from .utils import print_progress_line

FrameCallback = Callable[[int, FrameReport], None]


def progress_printer(frame: int, report: FrameReport) -> None:
    """Default on_frame: overwrite one terminal line with 'printed X/Y (Z%)'."""
    print_progress_line(report.describe(), final=report.complete)


def run_print(
    session: PrintSession,
    *,
    sleep: Optional[Callable[[float], None]] = time.sleep,
    on_frame: Optional[FrameCallback] = None,
    max_frames: Optional[int] = None,
    start: bool = True,
) -> FrameReport:
    """
    Drive a session until it leaves the running state.

    Args:
      sleep      : called with the delay in seconds; None disables waiting
      on_frame   : called after every tick with (frame number, report)
      max_frames : stop after this many ticks even if not complete
      start      : call session.start_run() first

    Returns the last FrameReport (an empty one when nothing is loaded).
    """
    if start:
        session.start_run()
    report = session.report()
    frame = 0
    while session.state is RunState.RUNNING:
        if max_frames is not None and frame >= max_frames:
            break
        if sleep is not None:
            sleep(session.settings.frame_delay / 1000.0)
        report = session.frame_tick()
        frame += 1
        if on_frame is not None:
            on_frame(frame, report)
    return report


__all__ = ["FrameCallback", "progress_printer", "run_print"]
