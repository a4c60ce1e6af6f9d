# palette_cut/utils.py
from __future__ import annotations

"""
Shared utilities for palette_cut.

Includes time / number formatting, image I/O for the CLI (the quantizer itself
only sees pixel arrays), palette swatch rendering, and tidy logging.
"""

from pathlib import Path
from typing import Any, Iterable, Sequence, Tuple

import numpy as np
from PIL import Image

from .core_types import RGBTuple, U8Image, U8Mask


#  Time / size formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# I/O / image helpers


def load_image_rgba(path: Path) -> Tuple[U8Image, U8Mask]:
    """Load an image with Pillow, convert to RGBA, return (rgb, alpha)."""
    with Image.open(path) as pil_img:
        arr = np.array(pil_img.convert("RGBA"), dtype=np.uint8)
    return arr[..., :3], arr[..., 3]


def resize_to_height(
    rgb: U8Image, alpha: U8Mask, height_cap: int
) -> Tuple[U8Image, U8Mask]:
    """Downscale so height <= height_cap, keeping aspect. No-op when already small."""
    if height_cap < 1:
        raise ValueError(f"height cap must be >= 1, got {height_cap}")
    height, width = rgb.shape[0], rgb.shape[1]
    if height <= height_cap:
        return rgb, alpha
    new_h = int(height_cap)
    new_w = max(1, int(round(width * (new_h / height))))
    # Nearest keeps the source colours intact.
    res = Image.Resampling.NEAREST
    rgb_out = np.array(Image.fromarray(rgb).resize((new_w, new_h), res), dtype=np.uint8)
    alpha_out = np.array(
        Image.fromarray(alpha).resize((new_w, new_h), res), dtype=np.uint8
    )
    return rgb_out, alpha_out


def visible_pixels(image_rgb: U8Image, alpha_mask: U8Mask) -> U8Image:
    """(N, 3) rows of the pixels with alpha > 0."""
    visible_mask = alpha_mask > 0
    if not np.any(visible_mask):
        return np.zeros((0, 3), dtype=np.uint8)
    return image_rgb[visible_mask].reshape(-1, 3)


def save_png_rgba(path: Path, rgb: U8Image, alpha: U8Mask) -> None:
    """Save RGB and alpha arrays as a PNG file."""
    out = np.concatenate([rgb, alpha[..., None]], axis=-1)
    Image.fromarray(out).save(path)


def save_palette_swatch(path: Path, palette: Sequence[RGBTuple], cell: int) -> None:
    """Write a one-row PNG strip with a cell x cell square per palette colour."""
    strip = np.zeros((cell, cell * max(1, len(palette)), 3), dtype=np.uint8)
    for i, rgb in enumerate(palette):
        strip[:, i * cell : (i + 1) * cell] = np.asarray(rgb, dtype=np.uint8)
    Image.fromarray(strip).save(path)


#  CLI / progress logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live printing in terminals that expose .reconfigure().
    """
    import sys

    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (ValueError, OSError):
            pass


# Pretty logging


def _display_value(value: Any) -> str:
    """on/off for bools, 1,234 for ints, up to 3 decimals for floats."""
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Join (name, value) pairs as "Name: value" blocks separated by sep.
    """
    return sep.join(f"{name}{eq}{_display_value(value)}" for name, value in pairs)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [run] Colours: 8  Height cap: -  Swatch: on
    Routes to debug() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    import sys

    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    # formatting
    "format_seconds_compact",
    "key_value_pairs_to_string",
    # I/O helpers
    "load_image_rgba",
    "resize_to_height",
    "visible_pixels",
    "save_png_rgba",
    "save_palette_swatch",
    # logging / progress
    "enable_line_buffered_stdout",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
