"""
autoclahe.filters
===================

Automatic contrast-limited adaptive histogram equalization with dual gamma
correction for 8-bit RGB/RGBA images.

Modules
-------
histogram   : 256-bin PDF/CDF, clip-and-redistribute, weighting distribution.
luminance   : max(R,G,B) channel and whole-image reference statistics.
blocks      : Tiling of the image into a grid of regions.
enhancer    : Per-block clip point and dual gamma lookup tables.
interpolate : Bilinear blending of the four surrounding block tables.
color       : Integer HSV used to put the new value back into RGB.
contrast    : `enhance` / `enhance_image` entry points.

Design
------
- All derived state (luminance, global stats, block tables) is computed
  before the first pixel is written.
- Block tables are independent of each other and pixel rows only read the
  finished tables, so both phases split cleanly across threads.
- Degenerate inputs (flat blocks, black images) degrade to a near-identity
  transform instead of failing.

Typical defaults
----------------
- block 32×32, alpha = 100, p = 1.5, d_threshold = 50.
"""

# Short imports for public API
from .contrast import enhance, enhance_image, AutomaticClahe
from .blocks import BlockGrid, Region
from .color import rgb_to_hsv, hsv_to_rgb

# Modules export
import importlib as _importlib
histogram = _importlib.import_module(".histogram", __name__)
luminance = _importlib.import_module(".luminance", __name__)
blocks = _importlib.import_module(".blocks", __name__)
enhancer = _importlib.import_module(".enhancer", __name__)
interpolate = _importlib.import_module(".interpolate", __name__)
color = _importlib.import_module(".color", __name__)
contrast = _importlib.import_module(".contrast", __name__)

__all__ = [
    # functions / classes
    "enhance",
    "enhance_image",
    "AutomaticClahe",
    "BlockGrid",
    "Region",
    "rgb_to_hsv",
    "hsv_to_rgb",
    # modules
    "histogram",
    "luminance",
    "blocks",
    "enhancer",
    "interpolate",
    "color",
    "contrast",
]
