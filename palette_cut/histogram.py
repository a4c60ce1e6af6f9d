# palette_cut/histogram.py
from __future__ import annotations

"""
Histogram over the reduced colour space and the initial bounding box.

Exports:
  build_histogram(pixels) -> Histogram       counts per reduced colour code
  vbox_from_pixels(pixels, histogram) -> VBox minimal box around the pixels
  count_populated(histogram) -> int          non-empty buckets
"""

import numpy as np

from .constants import HISTO_SIZE
from .core_types import Histogram
from .reduce import colour_indices, reduce_pixels
from .vbox import VBox


def build_histogram(pixels: np.ndarray) -> Histogram:
    """
    Count pixels per reduced colour code.

    pixels: (N, 3) int array of 8-bit values (validated upstream).
    Returns a read-only int64 array of length HISTO_SIZE; boxes share it.
    """
    codes = colour_indices(reduce_pixels(pixels))
    histo = np.bincount(codes.ravel(), minlength=HISTO_SIZE).astype(
        np.int64, copy=False
    )
    histo.flags.writeable = False
    return histo


def vbox_from_pixels(pixels: np.ndarray, histogram: Histogram) -> VBox:
    """Smallest box holding every reduced pixel."""
    reduced = reduce_pixels(pixels).reshape(-1, 3)
    lo = reduced.min(axis=0)
    hi = reduced.max(axis=0)
    return VBox(
        int(lo[0]),
        int(hi[0]),
        int(lo[1]),
        int(hi[1]),
        int(lo[2]),
        int(hi[2]),
        histogram,
    )


def count_populated(histogram: Histogram) -> int:
    return int(np.count_nonzero(histogram))


__all__ = ["build_histogram", "vbox_from_pixels", "count_populated"]
