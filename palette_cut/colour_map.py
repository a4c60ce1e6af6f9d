# palette_cut/colour_map.py
from __future__ import annotations

"""
Palette and nearest-colour queries over the final box set.

Exports:
  build(pixels, max_colours, *, debug=False) -> ColourMap
  ColourMap.palette() / size() / boxes() / shares()
  ColourMap.map(pixel) / nearest(pixel, zero_sentinel=False)
  ColourMap.palette_array() / map_pixels(pixels)
"""

import math
from typing import List, Optional, Sequence

import numpy as np

from .constants import MAX_COLOURS, MIN_COLOURS
from .core_types import (
    InvalidArgument,
    PixelsLike,
    RGBTuple,
    U8Image,
    as_pixel_array,
    coerce_to_rgb_tuple,
)
from .pqueue import PQueue
from .reduce import reduce_pixels
from .refine import quantize
from .vbox import VBox


def build(pixels: PixelsLike, max_colours: int, *, debug: bool = False) -> ColourMap:
    """
    Quantize pixels down to at most max_colours boxes.

    pixels may be a sequence of RGB triples or an array shaped (..., 3).
    Raises InvalidArgument for empty pixels or max_colours outside [2, 256].
    """
    flat = as_pixel_array(pixels)
    if isinstance(max_colours, bool) or not isinstance(max_colours, (int, np.integer)):
        raise InvalidArgument(f"max_colours must be an int, got {max_colours!r}")
    if max_colours < MIN_COLOURS or max_colours > MAX_COLOURS:
        raise InvalidArgument(
            f"max_colours must be in [{MIN_COLOURS}, {MAX_COLOURS}], got {max_colours}"
        )
    return ColourMap(quantize(flat, int(max_colours), debug=debug))


class ColourMap:
    """Final boxes in queue order, with palette and lookup queries."""

    def __init__(self, queue: PQueue[VBox]) -> None:
        self._queue = queue

    def boxes(self) -> List[VBox]:
        return self._queue.contents()

    def palette(self) -> List[RGBTuple]:
        """Average colour per box, in queue order."""
        return [vbox.average for vbox in self._queue]

    def palette_array(self) -> U8Image:
        """Palette as a (P, 3) uint8 array."""
        return np.array(self.palette(), dtype=np.uint8).reshape(-1, 3)

    def size(self) -> int:
        return len(self._queue)

    def shares(self) -> List[float]:
        """Fraction of the input pixels held by each palette entry."""
        counts = [vbox.count for vbox in self._queue]
        total = sum(counts)
        return [c / total if total else 0.0 for c in counts]

    def map(self, pixel: Sequence[int]) -> Optional[RGBTuple]:
        """Average of the first box holding pixel, else the nearest average."""
        for vbox in self._queue:
            if vbox.contains(pixel):
                return vbox.average
        return self.nearest(pixel)

    def nearest(
        self, pixel: Sequence[int], *, zero_sentinel: bool = False
    ) -> Optional[RGBTuple]:
        """
        Average with the smallest Euclidean RGB distance to pixel.
        None when there are no boxes.

        zero_sentinel=True keeps the legacy selection: the running minimum
        starts at 0 and 0 means "unset", so after a zero-distance candidate
        the next candidate always replaces it.
        """
        rgb = coerce_to_rgb_tuple(pixel)
        best: Optional[VBox] = None
        best_dist: Optional[float] = None
        for vbox in self._queue:
            avg = vbox.average
            cur = math.sqrt(
                (rgb[0] - avg[0]) ** 2 + (rgb[1] - avg[1]) ** 2 + (rgb[2] - avg[2]) ** 2
            )
            if zero_sentinel:
                unset = best_dist is None or best_dist == 0
            else:
                unset = best_dist is None
            if unset or cur < best_dist:
                best_dist = cur
                best = vbox
        return None if best is None else best.average

    def map_pixels(self, pixels: PixelsLike) -> U8Image:
        """
        Vectorized map() over an array shaped (..., 3); returns uint8 of the
        same shape. Pixels outside every box take the nearest average.
        """
        arr = np.asarray(pixels)
        flat = as_pixel_array(arr)
        boxes = self.boxes()
        if not boxes:
            raise InvalidArgument("colour map has no boxes")
        reduced = reduce_pixels(flat)
        owner = np.full(flat.shape[0], -1, dtype=np.int64)
        for k, vbox in enumerate(boxes):
            hit = (owner < 0) & vbox.contains_reduced(reduced)
            owner[hit] = k

        pal = self.palette_array()
        missing = owner < 0
        if np.any(missing):
            diff = flat[missing][:, None, :] - pal[None, :, :].astype(np.int64)
            owner[missing] = np.argmin(np.sum(diff * diff, axis=2), axis=1)
        return pal[owner].reshape(arr.shape).astype(np.uint8, copy=False)


__all__ = ["build", "ColourMap"]
