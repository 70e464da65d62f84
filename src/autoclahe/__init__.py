# --- file: autoclahe/__init__.py ---
from .config import ClaheOptions, InvalidInputError
from .filters import enhance, enhance_image, AutomaticClahe

__all__ = [
    "cli",
    "config",
    "filters",
    "io",
    "ClaheOptions",
    "InvalidInputError",
    "enhance",
    "enhance_image",
    "AutomaticClahe",
]

__version__ = "0.1.0"
