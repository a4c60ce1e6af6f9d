# palette_cut/median_cut.py
from __future__ import annotations

"""
Median-cut split of a single colour box.

Exports:
  split_axis_order(vbox) -> list[str]
  partial_sums(vbox, axis) -> (partial, lookahead)
  cut_plane(partial, lookahead, lo, hi) -> int
  median_cut_apply(vbox) -> (Optional[VBox], Optional[VBox])

Notes:
  - The box is cut along its widest axis, at the plane where the running
    pixel count first passes half the total; the cut then leans into the
    larger remaining span and steps over empty planes.
  - Both children of a split always hold pixels. A box whose pixels sit in
    one plane of every axis (one reduced cell) cannot be split.
"""

import math
from typing import List, Optional, Tuple

import numpy as np

from .constants import AXES
from .vbox import VBox

SplitResult = Tuple[Optional[VBox], Optional[VBox]]


def split_axis_order(vbox: VBox) -> List[str]:
    """Axes by descending extent; equal extents keep r, g, b order."""
    extents = vbox.extents()
    order = sorted(range(3), key=lambda i: -extents[i])
    return [AXES[i] for i in order]


def partial_sums(vbox: VBox, axis: str) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cumulative plane counts along axis (index 0 = lowest plane) and the
    complementary remaining counts. lookahead is 0 wherever partial is 0.
    """
    partial = np.cumsum(vbox.plane_counts(axis)).astype(np.int64, copy=False)
    total = int(partial[-1]) if partial.size else 0
    lookahead = np.where(partial > 0, total - partial, 0).astype(np.int64, copy=False)
    return partial, lookahead


def cut_plane(partial: np.ndarray, lookahead: np.ndarray, lo: int, hi: int) -> int:
    """
    Last plane (absolute index) of the lower child.

    partial / lookahead are indexed relative to lo. Expects the population to
    span at least two planes, which keeps the result in [lo, hi - 1].
    """
    total = int(partial[-1])
    half = total // 2
    i = lo + int(np.argmax(partial > half))

    left = i - lo
    right = hi - i
    if left <= right:
        d2 = min(hi - 1, i + right // 2)
    else:
        d2 = max(lo, math.floor(i - 1 - left / 2))

    # avoid 0-count boxes
    while partial[d2 - lo] == 0:
        d2 += 1
    count2 = int(lookahead[d2 - lo])
    while count2 == 0 and partial[d2 - 1 - lo] > 0:
        d2 -= 1
        count2 = int(lookahead[d2 - lo])
    return d2


def median_cut_apply(vbox: VBox) -> SplitResult:
    """
    Split vbox in two.

    Returns:
      (None, None)         box is empty
      (copy, None)         box cannot be split (one pixel, or one reduced cell)
      (lower, upper)       both non-empty, counts summing to vbox.count
    """
    if vbox.count == 0:
        return None, None
    if vbox.count == 1:
        return vbox.copy(), None

    for axis in split_axis_order(vbox):
        partial, lookahead = partial_sums(vbox, axis)
        if np.count_nonzero(np.diff(partial, prepend=0)) < 2:
            # every pixel sits in one plane of this axis
            continue
        lo, hi = vbox.bounds(axis)
        d2 = cut_plane(partial, lookahead, lo, hi)
        lower = vbox.with_bounds(**{f"{axis}2": d2})
        upper = vbox.with_bounds(**{f"{axis}1": d2 + 1})
        return lower, upper

    return vbox.copy(), None


__all__ = [
    "SplitResult",
    "split_axis_order",
    "partial_sums",
    "cut_plane",
    "median_cut_apply",
]
