# -*- coding: utf-8 -*-
"""Public I/O API for autoclahe.io."""
from .formats import ImageInfo
from .readers import read_image
from .writers import write_image

__all__ = [
    "ImageInfo",
    "read_image",
    "write_image",
]
