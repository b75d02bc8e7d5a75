"""
pixel_print package.

Purpose:
  Animate an image onto a canvas pixel by pixel in a selectable order. See
  pixel_print.cli for the command line host.

Public API:
  PrintSession    : resumable multi-mode draw scheduler (load/start/tick/advance).
  PrintSettings   : live configuration with clamping of invalid values.
  ColorMode       : full | red | green | blue | dominant | palette.
  PixelBuffer     : decoded RGBA pixels handed in by the host.
  cluster_palette : deterministic bounded k-means over pixel colours.
  dominant_groups : pixels grouped by strongest channel.
  ArraySurface    : numpy-backed paint target.
  run_print       : timer loop driving a session to completion.

Quick start:
  from pixel_print import PixelBuffer, PrintSession, PrintSettings, ArraySurface
  session = PrintSession(PrintSettings(color_mode="palette"), ArraySurface(w, h))
  session.load_pixels(PixelBuffer.from_bytes(w, h, rgba))
  session.start_run()
  while not session.frame_tick().complete: ...
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import analysis
from . import cluster
from . import constants
from . import core_types
from . import utils

from .analysis import dominant_groups
from .cluster import cluster_palette
from .core_types import ClusterModel, DominantGroups, FrameReport, PixelBuffer
from .driver import run_print
from .mode import ColorMode
from .session import PrintSession, RunState
from .settings import PrintSettings
from .surface import ArraySurface

__all__ = [
    "__version__",
    "analysis",
    "cluster",
    "constants",
    "core_types",
    "utils",
    "dominant_groups",
    "cluster_palette",
    "ClusterModel",
    "DominantGroups",
    "FrameReport",
    "PixelBuffer",
    "run_print",
    "ColorMode",
    "PrintSession",
    "RunState",
    "PrintSettings",
    "ArraySurface",
]
