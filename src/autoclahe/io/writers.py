# -*- coding: utf-8 -*-
"""
writers.py — encode (H, W, 3|4) uint8 images as PNG/JPEG (imageio) or TIFF (tifffile).
"""
from __future__ import annotations
import os

import numpy as np
import tifffile as tiff
from imageio import v2 as iio

from .formats import _as_rgb_u8, image_kind

__all__ = ["write_image"]


def write_image(path: str, pixels: np.ndarray, compress: bool = True) -> str:
    """
    Write an 8-bit RGB/RGBA image, creating parent directories.

    TIFFs are written interleaved (photometric RGB, alpha as extra sample),
    optionally DEFLATE-compressed. Returns the absolute output path.
    """
    a = _as_rgb_u8(pixels)
    kind = image_kind(path)
    path = os.path.abspath(path)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

    if kind == "tiff":
        tiff.imwrite(
            path,
            a,
            photometric="rgb",
            planarconfig="contig",
            extrasamples=(2,) if a.shape[-1] == 4 else None,  # unassociated alpha
            compression=("deflate" if compress else None),
        )
        return path

    if a.shape[-1] == 4 and os.path.splitext(path)[1].lower() in (".jpg", ".jpeg"):
        raise ValueError("JPEG cannot store an alpha channel; write PNG or TIFF instead.")
    iio.imwrite(path, a)
    return path
