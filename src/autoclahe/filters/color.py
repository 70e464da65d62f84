# --- file: autoclahe/filters/color.py ---
"""
Integer-only HSV for 8-bit RGB.

Representation
--------------
- v : max(R, G, B), 0..255
- s : 255 * (max - min) / max, 0..255
- h : position on the hue circle in sextant units, 0..HUE_RANGE-1.
      Each of the six sextants spans 255 steps (sextant k covers
      [255*k, 255*(k+1))), so hue keeps the same resolution as a channel.

All divisions round to nearest. `hsv_to_rgb(*rgb_to_hsv(r, g, b))` is within
±2 of (r, g, b) for every 8-bit triple; it is not guaranteed to be exact.

Scalar helpers work on Python ints; the `_array` variants do the same math
on whole images.
"""

from __future__ import annotations
from typing import Tuple

import numpy as np

__all__ = [
    "HUE_SEXTANT",
    "HUE_RANGE",
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_hsv_array",
    "hsv_to_rgb_array",
]

HUE_SEXTANT = 255
HUE_RANGE = 6 * HUE_SEXTANT
_FULL = 255 * 255


def _rdiv(a, b):
    """Round-half-up integer division; works for ints and int arrays."""
    return (2 * a + b) // (2 * b)


def rgb_to_hsv(r: int, g: int, b: int) -> Tuple[int, int, int]:
    r, g, b = int(r), int(g), int(b)
    v = max(r, g, b)
    n = v - min(r, g, b)
    if n == 0:
        return 0, 0, v
    s = _rdiv(n * 255, v)
    if v == r:
        h = _rdiv((g - b) * 255, n)
    elif v == g:
        h = 2 * HUE_SEXTANT + _rdiv((b - r) * 255, n)
    else:
        h = 4 * HUE_SEXTANT + _rdiv((r - g) * 255, n)
    return h % HUE_RANGE, s, v


def hsv_to_rgb(h: int, s: int, v: int) -> Tuple[int, int, int]:
    h, s, v = int(h) % HUE_RANGE, int(s), int(v)
    if s == 0:
        return v, v, v
    sector, f = divmod(h, HUE_SEXTANT)
    lo = _rdiv(v * (255 - s), 255)
    rise = _rdiv(v * (_FULL - s * (255 - f)), _FULL)
    fall = _rdiv(v * (_FULL - s * f), _FULL)
    if sector == 0:
        return v, rise, lo
    if sector == 1:
        return fall, v, lo
    if sector == 2:
        return lo, v, rise
    if sector == 3:
        return lo, fall, v
    if sector == 4:
        return rise, lo, v
    return v, lo, fall


def rgb_to_hsv_array(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorized `rgb_to_hsv`.

    Parameters
    ----------
    rgb : np.ndarray
        (..., 3) or (..., 4) uint8; only the first three channels are used.

    Returns
    -------
    (h, s, v) : int64 arrays of shape rgb.shape[:-1]
    """
    c = np.asarray(rgb)[..., :3].astype(np.int64)
    r, g, b = c[..., 0], c[..., 1], c[..., 2]
    v = c.max(axis=-1)
    n = v - c.min(axis=-1)
    safe_n = np.where(n == 0, 1, n)
    safe_v = np.where(v == 0, 1, v)

    s = np.where(n == 0, 0, _rdiv(n * 255, safe_v))
    h = np.where(
        v == r,
        _rdiv((g - b) * 255, safe_n),
        np.where(
            v == g,
            2 * HUE_SEXTANT + _rdiv((b - r) * 255, safe_n),
            4 * HUE_SEXTANT + _rdiv((r - g) * 255, safe_n),
        ),
    )
    h = np.where(n == 0, 0, h % HUE_RANGE)
    return h, s, v


def hsv_to_rgb_array(h: np.ndarray, s: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Vectorized `hsv_to_rgb`; returns uint8 array of shape h.shape + (3,)."""
    h = np.asarray(h, dtype=np.int64) % HUE_RANGE
    s = np.asarray(s, dtype=np.int64)
    v = np.asarray(v, dtype=np.int64)
    sector, f = np.divmod(h, HUE_SEXTANT)

    lo = _rdiv(v * (255 - s), 255)
    rise = _rdiv(v * (_FULL - s * (255 - f)), _FULL)
    fall = _rdiv(v * (_FULL - s * f), _FULL)

    sectors = [sector == k for k in range(5)]
    r = np.select(sectors, [v, fall, lo, lo, rise], default=v)
    g = np.select(sectors, [rise, v, v, fall, lo], default=lo)
    b = np.select(sectors, [lo, lo, rise, v, v], default=fall)

    out = np.stack([r, g, b], axis=-1)
    gray = (s == 0)[..., None]
    out = np.where(gray, v[..., None], out)
    return np.clip(out, 0, 255).astype(np.uint8)
