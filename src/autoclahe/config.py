# --- file: autoclahe/config.py ---
"""
Enhancement options and input validation.

`ClaheOptions` is the single configuration value consumed by the filter.
It is immutable; build a modified copy with `replace()`.

Typical usage
-------------
>>> from autoclahe.config import ClaheOptions
>>> opts = ClaheOptions(block_width=64, block_height=64)
>>> opts = ClaheOptions.from_mapping({"blockWidth": 16, "dThreshold": 40})
"""

from __future__ import annotations
import numbers
from dataclasses import dataclass, fields, replace as _dc_replace
from typing import Any, Mapping, Optional

__all__ = [
    "InvalidInputError",
    "ClaheOptions",
    "DEFAULT_BLOCK_WIDTH",
    "DEFAULT_BLOCK_HEIGHT",
    "DEFAULT_ALPHA",
    "DEFAULT_P",
    "DEFAULT_D_THRESHOLD",
]

DEFAULT_BLOCK_WIDTH = 32
DEFAULT_BLOCK_HEIGHT = 32
DEFAULT_ALPHA = 100.0
DEFAULT_P = 1.5
DEFAULT_D_THRESHOLD = 50

# camelCase spellings used by dynamic (e.g. JS-side) option objects
_KEY_ALIASES = {
    "blockWidth": "block_width",
    "blockHeight": "block_height",
    "dThreshold": "d_threshold",
}


class InvalidInputError(ValueError):
    """Raised when the pixel buffer, its geometry or the options are unusable."""


@dataclass(frozen=True)
class ClaheOptions:
    """
    Parameters of the automatic CLAHE filter.

    Parameters
    ----------
    block_width, block_height : int
        Tile size in pixels. Edge tiles may be smaller.
    alpha : float
        Weight of the local coefficient of variation in the clip point (percent).
    p : float
        Weight of the local maximum luminance in the clip point.
    d_threshold : int
        Luminance range (0..255) above which a block uses dual gamma correction.
    """
    block_width: int = DEFAULT_BLOCK_WIDTH
    block_height: int = DEFAULT_BLOCK_HEIGHT
    alpha: float = DEFAULT_ALPHA
    p: float = DEFAULT_P
    d_threshold: int = DEFAULT_D_THRESHOLD

    def validate(self) -> "ClaheOptions":
        """Return self, or raise InvalidInputError if any field is out of range."""
        for name in ("block_width", "block_height"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, numbers.Integral) or v < 1:
                raise InvalidInputError(f"{name} must be a positive integer, got {v!r}")
        for name in ("alpha", "p", "d_threshold"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, numbers.Real):
                raise InvalidInputError(f"{name} must be a number, got {v!r}")
        if not (self.alpha >= 0):
            raise InvalidInputError(f"alpha must be >= 0, got {self.alpha!r}")
        if not (self.p >= 0):
            raise InvalidInputError(f"p must be >= 0, got {self.p!r}")
        if not (0 <= self.d_threshold <= 255) or self.d_threshold != int(self.d_threshold):
            raise InvalidInputError(f"d_threshold must be an integer in 0..255, got {self.d_threshold!r}")
        return self

    def replace(self, **changes: Any) -> "ClaheOptions":
        return _dc_replace(self, **changes)

    @classmethod
    def from_mapping(cls, obj: Optional[Mapping[str, Any]]) -> "ClaheOptions":
        """
        Build options from a loosely-typed mapping.

        Accepts snake_case or camelCase keys. Missing keys and keys mapped to
        None fall back to the defaults; unknown keys raise InvalidInputError.
        """
        if obj is None:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in obj.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in known:
                raise InvalidInputError(f"Unknown option: {key!r}")
            if value is None:
                continue
            kwargs[name] = value
        try:
            opts = cls(
                block_width=_as_int(kwargs.get("block_width", DEFAULT_BLOCK_WIDTH)),
                block_height=_as_int(kwargs.get("block_height", DEFAULT_BLOCK_HEIGHT)),
                alpha=_as_float(kwargs.get("alpha", DEFAULT_ALPHA)),
                p=_as_float(kwargs.get("p", DEFAULT_P)),
                d_threshold=_as_int(kwargs.get("d_threshold", DEFAULT_D_THRESHOLD)),
            )
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidInputError(f"Bad option value: {e}") from e
        return opts.validate()


def _as_int(value: Any) -> int:
    # no silent truncation: 2.0 and "8" are fine, 2.5 and True are not
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, str):
        return int(value)
    if int(value) != value:
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    return float(value)
