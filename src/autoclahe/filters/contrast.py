# --- file: autoclahe/filters/contrast.py ---
"""
Automatic CLAHE with dual gamma correction (in-place, 8-bit RGB/RGBA).

Pipeline
--------
1) luminance = max(R, G, B) and whole-image statistics (computed once)
2) per-block lookup tables (clip point + dual gamma)        [parallel by block]
3) bilinear blending of the four surrounding tables per pixel [parallel by row band]
4) hue/saturation kept, value replaced, alpha untouched

Typical usage
-------------
>>> from autoclahe.filters import enhance, enhance_image
>>> enhance(buf, width, 4)                      # bytearray, mutated in place
>>> out = enhance_image(rgb, block_width=64)    # (H, W, 3) uint8 -> new array

Notes
-----
- Input is validated before anything is written; on InvalidInputError the
  buffer is untouched.
- Results do not depend on `workers`.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional, Union

import numpy as np

from ..config import ClaheOptions, InvalidInputError
from .blocks import BlockGrid
from .color import hsv_to_rgb_array, rgb_to_hsv_array
from .enhancer import build_blocks
from .interpolate import interpolate_luminance, stack_luts
from .luminance import global_stats, luminance

__all__ = ["enhance", "enhance_image", "AutomaticClahe", "as_pixel_array"]

BufferLike = Union[bytearray, memoryview, np.ndarray]


def as_pixel_array(buffer: BufferLike, width: int, channels: int) -> np.ndarray:
    """
    Validate `buffer` and return a writable (H, W, C) uint8 view onto it.

    Raises
    ------
    InvalidInputError
        Bad channel count, width, length, dtype, or a read-only buffer.
    """
    if isinstance(channels, bool) or channels not in (3, 4):
        raise InvalidInputError(f"channels must be 3 or 4, got {channels!r}")
    if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width <= 0:
        raise InvalidInputError(f"width must be a positive integer, got {width!r}")

    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise InvalidInputError(f"Expected uint8 pixels, got dtype {buffer.dtype}.")
        if not buffer.flags.c_contiguous:
            raise InvalidInputError("Pixel array must be C-contiguous.")
        flat = buffer.reshape(-1)
    elif isinstance(buffer, (bytearray, memoryview, bytes)):
        if memoryview(buffer).nbytes == 0:
            raise InvalidInputError("Pixel buffer is empty.")
        flat = np.frombuffer(buffer, dtype=np.uint8)
    else:
        raise InvalidInputError(f"Unsupported buffer type: {type(buffer).__name__}")

    if not flat.flags.writeable:
        raise InvalidInputError("Pixel buffer is read-only.")

    n = flat.size
    if n == 0 or n % channels:
        raise InvalidInputError(f"Buffer length {n} is not a positive multiple of {channels}.")
    n_px = n // channels
    if n_px % width:
        raise InvalidInputError(f"Buffer holds {n_px} pixels, not a multiple of width {width}.")
    height = n_px // width
    return flat.reshape(height, int(width), channels)


# Rows blended per pass; bounds the float64/int64 temporaries to one band.
ROW_BAND = 256


def _row_bands(height: int, band_rows: int):
    band_rows = max(1, int(band_rows))
    return [slice(y, min(y + band_rows, height)) for y in range(0, height, band_rows)]


def enhance(
    buffer: BufferLike,
    width: int,
    channels: int,
    options: Optional[ClaheOptions] = None,
    *,
    workers: int = 1,
    progress: bool = False,
) -> None:
    """
    Enhance an interleaved 8-bit RGB/RGBA buffer in place.

    Parameters
    ----------
    buffer : bytearray | memoryview | np.ndarray
        Interleaved pixels, length == width * height * channels.
    width : int
        Image width in pixels (> 0). Height is derived from the length.
    channels : {3, 4}
        3 for RGB, 4 for RGBA (alpha passes through).
    options : ClaheOptions or None
        Filter parameters; defaults when None.
    workers : int
        Threads for block tables and row bands (1 = inline).
    progress : bool
        Show a tqdm bar while building block tables.

    Raises
    ------
    InvalidInputError
        See `as_pixel_array` and `ClaheOptions.validate`.
    """
    opts = (options or ClaheOptions()).validate()
    pixels = as_pixel_array(buffer, width, channels)
    height, w = pixels.shape[:2]

    # derived read-only state
    lum = luminance(pixels)
    gstats = global_stats(lum)
    grid = BlockGrid(w, height, opts.block_width, opts.block_height)

    def _write_band(rows: slice, luts: np.ndarray) -> None:
        new_v = np.rint(interpolate_luminance(lum, grid, luts, rows)).astype(np.int64)
        h, s, _ = rgb_to_hsv_array(pixels[rows])
        pixels[rows, :, :3] = hsv_to_rgb_array(h, s, new_v)

    bands = _row_bands(height, ROW_BAND)
    workers = max(1, int(workers))
    if workers == 1:
        blocks = build_blocks(lum, grid, gstats, opts, progress=progress)
        luts = stack_luts(blocks, grid)
        for rows in bands:
            _write_band(rows, luts)
        return

    with ThreadPoolExecutor(max_workers=workers) as pool:
        blocks = build_blocks(lum, grid, gstats, opts, progress=progress, executor=pool)
        luts = stack_luts(blocks, grid)
        # barrier: every table is finished before any pixel is written
        list(pool.map(lambda rows: _write_band(rows, luts), bands))


def enhance_image(
    pixels: np.ndarray,
    options: Optional[ClaheOptions] = None,
    **overrides: Any,
) -> np.ndarray:
    """
    Return an enhanced copy of an (H, W, 3|4) uint8 image.

    Keyword overrides are applied on top of `options`
    (e.g. ``enhance_image(img, block_width=64)``); `workers` and `progress`
    are forwarded to `enhance`.
    """
    a = np.asarray(pixels)
    if a.ndim != 3 or a.shape[-1] not in (3, 4):
        raise InvalidInputError(f"Expected (H, W, 3|4) image, got shape {a.shape}.")
    if a.dtype != np.uint8:
        raise InvalidInputError(f"Expected uint8 pixels, got dtype {a.dtype}.")
    workers = int(overrides.pop("workers", 1))
    progress = bool(overrides.pop("progress", False))
    opts = options or ClaheOptions()
    if overrides:
        try:
            opts = opts.replace(**overrides)
        except TypeError as e:
            raise InvalidInputError(str(e)) from e
    out = np.array(a, dtype=np.uint8, order="C", copy=True)
    enhance(out, out.shape[1], out.shape[2], opts, workers=workers, progress=progress)
    return out


class AutomaticClahe:
    """Reusable enhancer bound to one set of options."""

    def __init__(self, options: Optional[ClaheOptions] = None, *, workers: int = 1):
        self.options = (options or ClaheOptions()).validate()
        self.workers = workers

    @classmethod
    def with_options(cls, options: ClaheOptions) -> "AutomaticClahe":
        return cls(options)

    def enhance(self, buffer: BufferLike, width: int, channels: int) -> None:
        enhance(buffer, width, channels, self.options, workers=self.workers)

    def enhance_rgba_image(self, buffer: BufferLike, width: int) -> None:
        self.enhance(buffer, width, 4)

    def enhance_rgb_image(self, buffer: BufferLike, width: int) -> None:
        self.enhance(buffer, width, 3)

    def __repr__(self) -> str:
        return f"AutomaticClahe({self.options!r}, workers={self.workers})"
