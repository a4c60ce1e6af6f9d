# palette_cut/vbox.py
from __future__ import annotations

"""
Colour boxes (vboxes): axis-aligned regions of the reduced colour space.

A VBox holds inclusive bounds per channel and a reference to the shared
histogram. Its statistics (count, volume, average) are computed once when the
box is built; boxes never change afterwards, so there is nothing to invalidate.
Split children are made with with_bounds(), which returns a fresh box.
"""

from dataclasses import dataclass, field, replace
from typing import Sequence, Tuple

import numpy as np

from .constants import AXES, BUCKET_MULT, CHANNEL_LEVELS
from .core_types import Histogram, QuantizerInvariantError, RGBTuple
from .reduce import reduce_channel


def histogram_cube(histogram: Histogram) -> np.ndarray:
    """(32, 32, 32) view of a flat histogram indexed [r, g, b]; no copy."""
    return histogram.reshape(CHANNEL_LEVELS, CHANNEL_LEVELS, CHANNEL_LEVELS)


@dataclass(frozen=True)
class VBox:
    """Inclusive box [r1..r2] x [g1..g2] x [b1..b2] over the shared histogram."""

    r1: int
    r2: int
    g1: int
    g2: int
    b1: int
    b2: int
    histogram: Histogram = field(repr=False, compare=False)

    count: int = field(init=False, compare=False)
    volume: int = field(init=False, compare=False)
    average: RGBTuple = field(init=False, compare=False)

    def __post_init__(self) -> None:
        for axis in AXES:
            lo, hi = self.bounds(axis)
            if not (0 <= lo <= hi < CHANNEL_LEVELS):
                raise QuantizerInvariantError(f"invalid {axis} bounds [{lo}, {hi}]")
        region = self.region()
        object.__setattr__(self, "count", int(region.sum()))
        r_ext, g_ext, b_ext = self.extents()
        object.__setattr__(self, "volume", r_ext * g_ext * b_ext)
        object.__setattr__(self, "average", self._weighted_average(region))

    # Geometry

    def bounds(self, axis: str) -> Tuple[int, int]:
        """(lo, hi) inclusive bounds for axis 'r', 'g' or 'b'."""
        return getattr(self, f"{axis}1"), getattr(self, f"{axis}2")

    def extents(self) -> Tuple[int, int, int]:
        """Per-axis widths (hi - lo + 1) in r, g, b order."""
        return (
            self.r2 - self.r1 + 1,
            self.g2 - self.g1 + 1,
            self.b2 - self.b1 + 1,
        )

    def region(self) -> np.ndarray:
        """Histogram counts inside the box as an (R, G, B) view."""
        return histogram_cube(self.histogram)[
            self.r1 : self.r2 + 1, self.g1 : self.g2 + 1, self.b1 : self.b2 + 1
        ]

    def plane_counts(self, axis: str) -> np.ndarray:
        """Pixel totals per plane along axis, lowest plane first."""
        other = tuple(i for i, a in enumerate(AXES) if a != axis)
        return self.region().sum(axis=other)

    # Derived values

    def _weighted_average(self, region: np.ndarray) -> RGBTuple:
        """
        Histogram-weighted mean of bucket values, expanded back to 8 bits and
        centred in the bucket. Falls back to the box midpoint when empty.
        """
        total = int(region.sum())
        if total == 0:
            return (
                BUCKET_MULT * (self.r1 + self.r2 + 1) // 2,
                BUCKET_MULT * (self.g1 + self.g2 + 1) // 2,
                BUCKET_MULT * (self.b1 + self.b2 + 1) // 2,
            )
        half = BUCKET_MULT // 2
        out = []
        for i, axis in enumerate(AXES):
            lo, hi = self.bounds(axis)
            other = tuple(j for j in range(3) if j != i)
            plane_totals = region.sum(axis=other)
            values = np.arange(lo, hi + 1, dtype=np.int64) * BUCKET_MULT
            weighted = int(np.dot(plane_totals, values))
            out.append(weighted // total + half)
        return (out[0], out[1], out[2])

    # Queries

    def contains(self, pixel: Sequence[int]) -> bool:
        """True when the reduced form of an 8-bit pixel falls inside the box."""
        rval = reduce_channel(pixel[0])
        gval = reduce_channel(pixel[1])
        bval = reduce_channel(pixel[2])
        return (
            self.r1 <= rval <= self.r2
            and self.g1 <= gval <= self.g2
            and self.b1 <= bval <= self.b2
        )

    def contains_reduced(self, reduced: np.ndarray) -> np.ndarray:
        """Boolean mask over an (N, 3) array of already-reduced pixels."""
        return (
            (reduced[:, 0] >= self.r1)
            & (reduced[:, 0] <= self.r2)
            & (reduced[:, 1] >= self.g1)
            & (reduced[:, 1] <= self.g2)
            & (reduced[:, 2] >= self.b1)
            & (reduced[:, 2] <= self.b2)
        )

    # Construction

    def copy(self) -> VBox:
        """Independent box with the same bounds over the same histogram."""
        return replace(self)

    def with_bounds(self, **bounds: int) -> VBox:
        """Copy with some of r1, r2, g1, g2, b1, b2 replaced."""
        return replace(self, **bounds)


__all__ = ["VBox", "histogram_cube"]
