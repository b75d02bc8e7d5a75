from __future__ import annotations

"""
Print session: the resumable multi-mode draw scheduler.

A PrintSession owns everything one animated print needs: the loaded pixel
buffer, its dominant-channel groups and palette clusters, the draw orders, and
one stepper (cursor) per draw mode. The host calls frame_tick() whenever it
wants the next slice painted; nothing here sleeps or schedules.

Operations before load_pixels() are silent no-ops.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

from .analysis import dominant_groups, dominant_summary
from .cluster import cluster_palette
from .constants import DOMINANT_PASS_CHANNELS
from .core_types import (
    ClusterModel,
    DominantGroups,
    FrameReport,
    PixelBuffer,
    Surface,
)
from .mode import LINEAR_MODES, ColorMode, channel_mask
from .scheduler import LinearStepper, PassStepper, Stepper
from .settings import PrintSettings
from .utils import debug_log, identity_order, key_value_pairs_to_string, shuffled_order


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


class _NullSurface:
    def paint(self, x: int, y: int, rgb: Tuple[int, int, int]) -> None:
        pass

    def clear(self) -> None:
        pass


class PrintSession:
    """
    Scheduler state for one image.

    Args:
      settings : PrintSettings read live on every call (shared with the host UI)
      surface  : paint target; defaults to a sink that discards paints
      seed     : seed for the shuffles used by random order
      debug    : emit [debug] lines for clustering, order rebuilds and passes
    """

    def __init__(
        self,
        settings: Optional[PrintSettings] = None,
        surface: Optional[Surface] = None,
        *,
        seed: Optional[int] = None,
        debug: bool = False,
    ) -> None:
        self.settings = settings if settings is not None else PrintSettings()
        self.surface: Surface = surface if surface is not None else _NullSurface()
        self.rng = np.random.default_rng(seed)
        self.debug = debug

        self.buffer: Optional[PixelBuffer] = None
        self.groups: Optional[DominantGroups] = None
        self.clusters: Optional[ClusterModel] = None
        self.randomized = bool(self.settings.random_order)
        self.steppers: Dict[ColorMode, Stepper] = {}
        self.state = RunState.IDLE
        self.run_mode: Optional[ColorMode] = None

    # Status

    @property
    def ready(self) -> bool:
        return self.buffer is not None and bool(self.steppers)

    @property
    def complete(self) -> bool:
        return self.state is RunState.COMPLETE

    def active_mode(self) -> ColorMode:
        return self.run_mode if self.run_mode is not None else self.settings.color_mode

    def progress(self) -> Tuple[int, int]:
        """(painted, total) of the active mode's cursor; (0, 0) before load."""
        if not self.ready:
            return 0, 0
        return self.steppers[self.active_mode()].progress()

    def report(self, drawn: int = 0) -> FrameReport:
        painted, total = self.progress()
        return FrameReport(
            drawn=drawn, painted=painted, total=total, complete=self.complete
        )

    # Loading and order building

    def load_pixels(self, buffer: PixelBuffer) -> None:
        """Take a new image: regroup, recluster, rebuild orders, back to idle."""
        self.buffer = buffer
        self.groups = dominant_groups(buffer)
        self.clusters = cluster_palette(
            buffer, self.settings.palette_count, debug=self.debug
        )
        self.randomized = bool(self.settings.random_order)
        self.state = RunState.IDLE
        self.run_mode = None
        self._build_orders()
        if self.debug:
            debug_log(
                key_value_pairs_to_string(
                    [("Loaded", f"{buffer.width}x{buffer.height}")]
                    + [(name.title(), n) for name, n in dominant_summary(self.groups)]
                )
            )

    def _ensure_clusters(self) -> None:
        """Recluster only when the requested palette size changed."""
        k = self.settings.palette_count
        if self.buffer is None or (self.clusters is not None and self.clusters.k == k):
            return
        self.clusters = cluster_palette(self.buffer, k, debug=self.debug)

    def _build_orders(self) -> None:
        """Fresh orders and steppers for every mode; all cursors start at zero."""
        buffer = self.buffer
        if buffer is None or self.groups is None or self.clusters is None:
            return
        rng = self.rng if self.randomized else None

        def order(size: int) -> np.ndarray:
            return shuffled_order(size, rng) if rng is not None else identity_order(size)

        def within(group: np.ndarray) -> np.ndarray:
            return rng.permutation(group) if rng is not None else group

        linear = order(buffer.total) if rng is not None else None
        steppers: Dict[ColorMode, Stepper] = {
            mode: LinearStepper(buffer, linear, channel_mask(mode))
            for mode in LINEAR_MODES
        }

        channels = [DOMINANT_PASS_CHANNELS[i] for i in order(3).tolist()]
        steppers[ColorMode.DOMINANT] = PassStepper(
            buffer,
            [within(self.groups.by_channel(c)) for c in channels],
            labels=channels,
        )

        clusters = order(self.clusters.k).tolist()
        steppers[ColorMode.PALETTE] = PassStepper(
            buffer,
            [within(self.clusters.members[c]) for c in clusters],
            colours=[self.clusters.center(c) for c in clusters],
            labels=clusters,
        )
        self.steppers = steppers
        if self.debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Orders", "shuffled" if rng is not None else "scan"),
                        ("Dominant passes", "/".join("rgb"[c] for c in channels)),
                        ("Clusters", self.clusters.k),
                    ]
                )
            )

    # Run control

    def start_run(self) -> None:
        """Blank the surface and start the configured mode from the beginning."""
        if self.buffer is None:
            return
        self._ensure_clusters()
        self.randomized = bool(self.settings.random_order)
        self._build_orders()
        self.surface.clear()
        self.run_mode = self.settings.color_mode
        stepper = self.steppers[self.run_mode]
        self.state = RunState.COMPLETE if stepper.complete else RunState.RUNNING

    def frame_tick(self) -> FrameReport:
        """
        Paint at most settings.pixels_per_frame pixels of the running mode.

        Idle and complete sessions return their current progress without
        painting. Switching settings.color_mode mid-run stops the run; the other
        modes keep their cursors and a new start_run() is needed to draw again.
        """
        if not self.ready or self.state is not RunState.RUNNING:
            return self.report()
        if self.settings.color_mode is not self.run_mode:
            if self.debug:
                debug_log(
                    f"mode switched {self.run_mode.value} -> "
                    f"{self.settings.color_mode.value}; run stopped"
                )
            self.state = RunState.IDLE
            self.run_mode = None
            return self.report()

        stepper = self.steppers[self.run_mode]
        before = stepper.current_label if isinstance(stepper, PassStepper) else None
        drawn = stepper.step(
            self.surface,
            self.settings.pixels_per_frame,
            clear_between=self.settings.clear_between
            and self.run_mode is ColorMode.PALETTE,
        )
        if stepper.complete:
            self.state = RunState.COMPLETE
        if self.debug and isinstance(stepper, PassStepper):
            after = stepper.current_label
            if after != before:
                debug_log(f"{self.run_mode.value} pass -> {after if after is not None else 'done'}")
        return self.report(drawn)

    def advance_cluster(self) -> FrameReport:
        """Palette runs only: finish the current cluster pass immediately."""
        if (
            not self.ready
            or self.state is not RunState.RUNNING
            or self.run_mode is not ColorMode.PALETTE
        ):
            return self.report()
        stepper = self.steppers[ColorMode.PALETTE]
        if isinstance(stepper, PassStepper) and stepper.advance_pass():
            if self.debug:
                debug_log(f"palette pass advanced -> {stepper.current_label}")
            if stepper.complete:
                self.state = RunState.COMPLETE
        return self.report()

    def set_randomized(self, flag: bool) -> None:
        """
        Rebuild every draw order as shuffled or scan order.

        Pixel data, groups and clusters are untouched; all cursors restart. A
        finished run goes back to idle, a running one keeps going on the new order.
        """
        self.settings.random_order = bool(flag)
        self.randomized = bool(flag)
        if self.buffer is None:
            return
        self._build_orders()
        if self.state is RunState.COMPLETE:
            self.state = RunState.IDLE
            self.run_mode = None


__all__ = ["RunState", "PrintSession"]
