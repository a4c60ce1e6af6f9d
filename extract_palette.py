#!/usr/bin/env python3
"""
extract_palette.py
Extract a small representative palette from image(s) with median-cut quantization.

Usage:
  python extract_palette.py INPUT [--colours N] [--height H] [--outdir DIR] [--swatch] [--remap] [--debug]

Input:
  Any Pillow-readable image, or a folder of them. Only non-zero alpha pixels
  take part in the palette.

Output:
  One line per palette entry (hex and share of pixels). With --swatch writes
  <stem>_palette.png; with --remap writes <stem>_mmcq.png with every visible
  pixel replaced by its palette colour. Alpha is preserved.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from palette_cut import build
from palette_cut.constants import (
    DEFAULT_COLOURS,
    IMAGE_EXTS,
    MAX_COLOURS,
    MIN_COLOURS,
    OUTPUT_SUFFIX,
    SWATCH_CELL_PX,
    SWATCH_SUFFIX,
)
from palette_cut.core_types import rgb_to_hex
from palette_cut.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    load_image_rgba,
    log,
    print_banner,
    print_config_line,
    resize_to_height,
    save_palette_swatch,
    save_png_rgba,
    visible_pixels,
    warn,
)


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        colours: palette size (2..256)
        height: optional int max working height
        outdir: optional Path for outputs
        swatch: bool, write a palette strip
        remap: bool, write the image recoloured to the palette
        debug: bool for verbose quantizer details
    """
    parser = argparse.ArgumentParser(
        prog="extract_palette",
        description="Extract a median-cut colour palette from image(s).",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--colours",
        type=int,
        default=DEFAULT_COLOURS,
        help=f"Maximum palette size ({MIN_COLOURS}-{MAX_COLOURS}).",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Downscale so height<=H before quantizing. Omit for no resize.",
    )
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument("--swatch", action="store_true", help="Write a palette PNG")
    parser.add_argument("--remap", action="store_true", help="Write a recoloured PNG")
    parser.add_argument("--debug", action="store_true", help="Verbose quantizer details")
    args = parser.parse_args(argv)
    if not MIN_COLOURS <= args.colours <= MAX_COLOURS:
        parser.error(
            f"--colours must be in [{MIN_COLOURS}, {MAX_COLOURS}], got {args.colours}"
        )
    if args.height is not None and args.height < 1:
        parser.error(f"--height must be >= 1, got {args.height}")
    return args


def _output_path(src_path: Path, outdir: Optional[Path], suffix: str) -> Path:
    base = outdir if outdir is not None else src_path.parent
    base.mkdir(parents=True, exist_ok=True)
    return base / f"{src_path.stem}{suffix}.png"


def process_image(src_path: Path, args: argparse.Namespace) -> None:
    """
    Process a single image end-to-end:
      load -> optional resize -> quantize -> report -> optional swatch/remap.
    """
    t_start = time.perf_counter()
    print_banner(src_path.name)

    rgb, alpha = load_image_rgba(src_path)
    if args.height is not None:
        rgb, alpha = resize_to_height(rgb, alpha, args.height)
    pixels = visible_pixels(rgb, alpha)
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Size", f"{rgb.shape[1]}x{rgb.shape[0]}"),
                    ("Visible pixels", int(pixels.shape[0])),
                ]
            )
        )
    if pixels.shape[0] == 0:
        warn(f"{src_path.name}: no visible pixels, skipped")
        return

    cmap = build(pixels, args.colours, debug=args.debug)
    palette = cmap.palette()

    log(f"Palette ({cmap.size()} colours):")
    for rgb_entry, share in zip(palette, cmap.shares()):
        log(f"  {rgb_to_hex(rgb_entry)}  {rgb_entry}: share={share:.1%}")

    if args.swatch:
        swatch_path = _output_path(src_path, args.outdir, SWATCH_SUFFIX)
        save_palette_swatch(swatch_path, palette, SWATCH_CELL_PX)
        log(f"Wrote {swatch_path.name}")

    if args.remap:
        out_path = _output_path(src_path, args.outdir, OUTPUT_SUFFIX)
        mapped = rgb.copy()
        visible = alpha > 0
        mapped[visible] = cmap.map_pixels(rgb[visible])
        save_png_rgba(out_path, mapped, alpha)
        log(f"Wrote {out_path.name}")

    log(f"Total time {format_seconds_compact(time.perf_counter() - t_start)}")


def _collect_images(src: Path) -> List[Path]:
    files = [
        p
        for p in src.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.stem.endswith((OUTPUT_SUFFIX, SWATCH_SUFFIX))
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Handles a single file or a folder. In folder mode a failing file is
    reported and the rest are still processed; the exit status is 1 then.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    print_config_line(
        "run",
        [
            ("Colours", args.colours),
            ("Height cap", "-" if args.height is None else args.height),
            ("Swatch", args.swatch),
            ("Remap", args.remap),
        ],
        debug=False,
    )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    if not src.is_dir():
        process_image(src, args)
        return 0

    files = _collect_images(src)
    if args.debug:
        debug_log(key_value_pairs_to_string([("Images", len(files))]))
    failed = 0
    for path in files:
        try:
            process_image(path, args)
        except (OSError, ValueError) as e:
            error(f"{path.name}: {e}")
            failed += 1
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
