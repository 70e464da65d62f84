# --- file: autoclahe/cli/enhance_cli.py ---
"""
Automatic CLAHE runner: read → enhance (in place) → write.

Features
--------
- 8-bit RGB/RGBA PNG, JPEG and TIFF inputs (grayscale promoted to RGB).
- Glob patterns: several inputs are written into --output as a directory.
- Thread-parallel block tables and row bands (--workers).

Examples
--------
python -m autoclahe.cli.enhance_cli photo.png --output enhanced.png

autoclahe-enhance "D:/shots/*.png" --output "D:/shots/_clahe" ^
  --block-width 64 --block-height 64 --alpha 100 --p 1.5 --d-threshold 50

Outputs
-------
<output>                  - single input
<output>/<name>_clahe.ext - several inputs
"""

from __future__ import annotations
import argparse
import glob
import os
import time
from typing import Iterable, List, Optional

from autoclahe.config import (
    ClaheOptions,
    InvalidInputError,
    DEFAULT_ALPHA,
    DEFAULT_BLOCK_HEIGHT,
    DEFAULT_BLOCK_WIDTH,
    DEFAULT_D_THRESHOLD,
    DEFAULT_P,
)
from autoclahe.filters import enhance
from autoclahe.io import read_image, write_image

DEFAULT_OUTPUT = "enhanced.png"


# ------------------------------- helpers ------------------------------------ #

def _basename_noext(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def _expand_inputs(pattern: str) -> List[str]:
    if glob.has_magic(pattern):
        return sorted(glob.glob(pattern))
    return [pattern]


def _batch_output_path(path: str, outdir: str) -> str:
    ext = os.path.splitext(path)[1]
    return os.path.join(outdir, f"{_basename_noext(path)}_clahe{ext}")


# ------------------------------- core --------------------------------------- #

def run_enhance(
    path: str,
    output: str,
    options: Optional[ClaheOptions] = None,
    *,
    workers: int = 1,
    progress: bool = False,
) -> str:
    """Enhance one image file and write it to `output`. Returns the output path."""
    pixels, info = read_image(path)
    print(f"[read] {path}")
    print(f"  resolution: {info.width}x{info.height}")
    print(f"  bit depth:  {info.bit_depth}")
    print(f"  color type: {info.color_type}")

    opts = options or ClaheOptions()
    start = time.perf_counter()
    enhance(pixels, info.width, info.channels, opts, workers=workers, progress=progress)
    elapsed = time.perf_counter() - start
    print(f"[clahe] block={opts.block_width}x{opts.block_height} alpha={opts.alpha} "
          f"p={opts.p} d_threshold={opts.d_threshold} | {elapsed:.3f}s")

    out = write_image(output, pixels)
    print(f"  -> saved {out}")
    return out


# ------------------------------- CLI ---------------------------------------- #

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="autoclahe-enhance",
        description="Automatic CLAHE with dual gamma correction for 8-bit RGB/RGBA images.",
    )
    ap.add_argument("image", help="Input image path or glob (PNG/JPEG/TIFF)")
    ap.add_argument("--output", default=DEFAULT_OUTPUT,
                    help="Output file (single input) or directory (several inputs)")

    # filter
    ap.add_argument("--block-width", type=int, default=DEFAULT_BLOCK_WIDTH, help="Block width (pixels)")
    ap.add_argument("--block-height", type=int, default=DEFAULT_BLOCK_HEIGHT, help="Block height (pixels)")
    ap.add_argument("--alpha", type=float, default=DEFAULT_ALPHA, help="Weight of local variation in the clip point")
    ap.add_argument("--p", type=float, default=DEFAULT_P, help="Weight of local max luminance in the clip point")
    ap.add_argument("--d-threshold", type=int, default=DEFAULT_D_THRESHOLD,
                    help="Luminance range (0..255) above which dual gamma is used")

    # performance
    ap.add_argument("--workers", type=int, default=1, help="Worker threads (1=inline)")
    ap.add_argument("--progress", action="store_true", help="Show a progress bar over blocks")
    return ap


def main(argv: Iterable[str] | None = None) -> None:
    ap = build_parser()
    args = ap.parse_args(list(argv) if argv is not None else None)

    try:
        options = ClaheOptions(
            block_width=args.block_width,
            block_height=args.block_height,
            alpha=args.alpha,
            p=args.p,
            d_threshold=args.d_threshold,
        ).validate()
    except InvalidInputError as e:
        ap.error(str(e))

    files = _expand_inputs(args.image)
    if not files:
        raise SystemExit(f"No files match: {args.image}")

    batch = len(files) > 1
    if batch:
        print(f"[clahe] files={len(files)} outdir={args.output}")

    for f in files:
        out = _batch_output_path(f, args.output) if batch else args.output
        try:
            run_enhance(f, out, options, workers=args.workers, progress=args.progress)
        except (ValueError, FileNotFoundError) as e:
            raise SystemExit(f"[ERROR] {f}: {e}") from e
        print(f"[OK] {f}")


if __name__ == "__main__":
    main()
