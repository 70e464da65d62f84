# --- file: autoclahe/filters/histogram.py ---
"""
256-bin luminance histograms: PDF, CDF, clip-and-redistribute.

All functions are pure and return new float64 arrays of length 256.

Notes
-----
- An empty sample window gives an all-zero PDF. `cdf_from_pdf` returns None
  for a PDF with zero mass; callers treat that as "no enhancement".
- Redistribution is applied once (no iterative re-clipping) and conserves
  total mass exactly up to rounding.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

__all__ = [
    "N_LEVELS",
    "EPSILON",
    "histogram_pdf",
    "cdf_from_pdf",
    "redistribute",
    "weighting_distribution",
]

N_LEVELS = 256
EPSILON = float(np.finfo(np.float32).eps)


def histogram_pdf(samples: np.ndarray) -> np.ndarray:
    """
    Probability of each 8-bit level in `samples`.

    Parameters
    ----------
    samples : np.ndarray
        uint8 array of any shape.

    Returns
    -------
    np.ndarray
        (256,) float64; all zeros when `samples` is empty.
    """
    s = np.asarray(samples, dtype=np.uint8).ravel()
    counts = np.bincount(s, minlength=N_LEVELS).astype(np.float64)
    if s.size == 0:
        return counts
    return counts / float(s.size)


def cdf_from_pdf(pdf: np.ndarray) -> Optional[np.ndarray]:
    """Normalized prefix sum of `pdf`, or None when the PDF carries no mass."""
    c = np.cumsum(np.asarray(pdf, dtype=np.float64))
    total = float(c[-1])
    if not total > 0:
        return None
    return c / total


def redistribute(pdf: np.ndarray, clip_point: float) -> np.ndarray:
    """
    Cap every bin at `clip_point` and spread the excess evenly over all bins.
    """
    a = np.asarray(pdf, dtype=np.float64)
    if not a.any():
        return a.copy()
    capped = np.minimum(a, clip_point)
    excess = float(np.sum(a - capped))
    return capped + excess / N_LEVELS


def weighting_distribution(pdf: np.ndarray) -> np.ndarray:
    """Stretch bin values to [0, max] via max * (x - min) / (max - min + eps)."""
    a = np.asarray(pdf, dtype=np.float64)
    hi = float(a.max())
    lo = float(a.min())
    return hi * ((a - lo) / (hi - lo + EPSILON))
