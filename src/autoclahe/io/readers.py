# -*- coding: utf-8 -*-
"""
readers.py — decode PNG/JPEG (imageio) and TIFF (tifffile) into (H, W, C) uint8.
"""
from __future__ import annotations
import os
from typing import Tuple

import numpy as np
from imageio import v2 as iio
from tifffile import TiffFile

from .formats import ImageInfo, _as_rgb_u8, image_kind

__all__ = ["read_image", "read_tiff_image", "read_raster_image"]


def read_tiff_image(path: str) -> np.ndarray:
    """First series of a TIFF; multi-frame stacks are rejected."""
    with TiffFile(path) as tif:
        ser = tif.series[0]
        shp = ser.shape
        axes = getattr(ser, "axes", "")
        # (T, Y, X) stacks look like 3D arrays with no small channel axis
        is_stack = len(shp) > 3 or (len(shp) == 3 and shp[0] > 4 and shp[-1] > 4)
        if is_stack:
            raise ValueError(f"Expected a single image, got TIFF series {shp} ({axes}).")
        return ser.asarray()


def read_raster_image(path: str) -> np.ndarray:
    return np.asarray(iio.imread(path))


def read_image(path: str) -> Tuple[np.ndarray, ImageInfo]:
    """
    Read an 8-bit RGB/RGBA image.

    Returns
    -------
    (pixels, info)
        pixels : (H, W, 3|4) uint8, C-contiguous (safe to pass to `enhance`).
        info   : ImageInfo with width/height/channels.

    Raises
    ------
    ValueError
        Unsupported extension, bit depth or channel layout.
    FileNotFoundError
        If `path` does not exist.
    """
    path = os.path.abspath(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    kind = image_kind(path)
    raw = read_tiff_image(path) if kind == "tiff" else read_raster_image(path)
    pixels = _as_rgb_u8(raw)
    h, w, c = pixels.shape
    return pixels, ImageInfo(width=w, height=h, channels=c, bit_depth=8)
