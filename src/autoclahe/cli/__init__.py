"""
autoclahe.cli
================

Command-line entrypoints:
- Automatic CLAHE enhancement (enhance_cli)

Re-exports
----------
from autoclahe.cli import run_enhance, enhance_main, enhance_cli
"""

# short imports, e.g.:
#   from autoclahe.cli import run_enhance
from .enhance_cli import run_enhance as run_enhance, main as enhance_main

# also expose the submodule itself
import importlib as _importlib
enhance_cli = _importlib.import_module(".enhance_cli", __name__)

__all__ = [
    # functions
    "run_enhance", "enhance_main",
    # modules
    "enhance_cli",
]
