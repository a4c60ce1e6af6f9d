# palette_cut/reduce.py
from __future__ import annotations

"""
Reduced colour space helpers.

Exports:
  reduce_channel(value) -> int           8-bit channel -> 5-bit bucket index
  colour_index(r, g, b) -> int           pack three reduced values into one code
  reduce_pixels(pixels) -> (N,3) int64   vectorized reduce_channel
  colour_indices(reduced) -> (N,) int64  vectorized colour_index
"""

import numpy as np

from .constants import RSHIFT, SIGBITS
from .core_types import ReducedPixels


def reduce_channel(value: int) -> int:
    """Drop the low RSHIFT bits of an 8-bit channel."""
    return int(value) >> RSHIFT


def colour_index(r: int, g: int, b: int) -> int:
    """Histogram code for reduced values: r in the high bits, b in the low bits."""
    return (r << (2 * SIGBITS)) | (g << SIGBITS) | b


def reduce_pixels(pixels: np.ndarray) -> ReducedPixels:
    """Reduce every channel of an (..., 3) array of 8-bit values."""
    return np.right_shift(np.asarray(pixels, dtype=np.int64), RSHIFT)


def colour_indices(reduced: ReducedPixels) -> np.ndarray:
    """Pack an (..., 3) array of reduced values into histogram codes."""
    return (
        np.left_shift(reduced[..., 0], 2 * SIGBITS)
        | np.left_shift(reduced[..., 1], SIGBITS)
        | reduced[..., 2]
    )


__all__ = ["reduce_channel", "colour_index", "reduce_pixels", "colour_indices"]
