from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import PixelBuffer
from .surface import ArraySurface

"""
Image I/O for the host side: decode to an RGBA PixelBuffer, write a surface.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (OSError, ImageCms.PyCMSError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def load_pixel_buffer(path: Path) -> PixelBuffer:
    """Decode any Pillow-readable image into an RGBA PixelBuffer."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
    arr = np.array(im, dtype=np.uint8)
    return PixelBuffer.from_array(arr)


def surface_to_image(surface: ArraySurface) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(surface.pixels))


def save_surface_png(path: Path, surface: ArraySurface) -> Path:
    """Write the canvas as RGBA PNG; other suffixes are replaced with .png."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    surface_to_image(surface).save(path)
    return path


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "load_pixel_buffer",
    "surface_to_image",
    "save_surface_png",
    "is_image_file",
]
