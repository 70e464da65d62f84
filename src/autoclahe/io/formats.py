# -*- coding: utf-8 -*-
"""
formats.py — shared helpers for image I/O: extension dispatch, layout checks.
No file I/O here — only utilities used by both readers and writers.
"""
from __future__ import annotations
import os
import warnings
from dataclasses import dataclass

import numpy as np

__all__ = [
    "ImageInfo",
    "TIFF_EXTS",
    "RASTER_EXTS",
    "image_kind",
    "_to_hwc",
    "_as_rgb_u8",
]

TIFF_EXTS = (".tif", ".tiff")
RASTER_EXTS = (".png", ".jpg", ".jpeg", ".bmp")


@dataclass(frozen=True)
class ImageInfo:
    """Geometry and layout of a decoded 8-bit image."""
    width: int
    height: int
    channels: int
    bit_depth: int = 8

    @property
    def color_type(self) -> str:
        return "rgba" if self.channels == 4 else "rgb"


def image_kind(path: str) -> str:
    """Return 'tiff' or 'raster' from the file extension; ValueError otherwise."""
    ext = os.path.splitext(path)[1].lower()
    if ext in TIFF_EXTS:
        return "tiff"
    if ext in RASTER_EXTS:
        return "raster"
    raise ValueError(f"Unsupported image format: {ext or '<none>'} ({path})")


def _to_hwc(arr: np.ndarray) -> np.ndarray:
    """
    Normalize array to (H, W, C).

    Handles:
      - (H, W)           -> (H, W, 1)
      - (H, W, C)        -> as-is
      - (C, H, W), C<=4  -> (H, W, C)  [planar TIFF]
    """
    a = np.asarray(arr)
    if a.ndim == 2:
        return a[..., None]
    if a.ndim != 3:
        raise ValueError(f"Expected a single 2D image, got shape {a.shape}.")
    if a.shape[-1] > 4 and a.shape[0] <= 4:
        return np.moveaxis(a, 0, -1)
    return a


def _as_rgb_u8(arr: np.ndarray) -> np.ndarray:
    """
    Coerce a decoded image into contiguous (H, W, 3|4) uint8.

    Grayscale (+alpha) is promoted to RGB(A) with a RuntimeWarning; any
    dtype other than uint8 is rejected.
    """
    a = _to_hwc(arr)
    if a.dtype != np.uint8:
        bits = a.dtype.itemsize * 8
        raise ValueError(f"Only 8-bit images are supported, got {a.dtype} ({bits}-bit).")
    c = a.shape[-1]
    if c == 1:
        warnings.warn("Grayscale image promoted to RGB.", RuntimeWarning)
        a = np.repeat(a, 3, axis=-1)
    elif c == 2:
        warnings.warn("Grayscale+alpha image promoted to RGBA.", RuntimeWarning)
        a = np.concatenate([np.repeat(a[..., :1], 3, axis=-1), a[..., 1:]], axis=-1)
    elif c not in (3, 4):
        raise ValueError(f"Unsupported channel count: {c}")
    return np.ascontiguousarray(a)
