# palette_cut/core_types.py
from __future__ import annotations

"""
Core type aliases, error types, and lightweight helpers.
"""

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3) or (N, 3)
U8Mask = NDArray[np.uint8]  # (H, W)
Histogram = NDArray[np.int64]  # (HISTO_SIZE,) read-only bucket counts
ReducedPixels = NDArray[np.int64]  # (N, 3) values in [0, 31]

PixelsLike = Union[Sequence[Sequence[int]], NDArray[np.generic]]

# Errors


class InvalidArgument(ValueError):
    """Bad input to build(): empty pixels, malformed array, or palette size out of range."""


class QuantizerInvariantError(RuntimeError):
    """Internal invariant broken during quantization (should not happen for valid input)."""


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


def as_pixel_array(pixels: PixelsLike) -> NDArray[np.int64]:
    """
    Validate pixels and return them flattened to an (N, 3) int64 array.

    Accepts a sequence of RGB triples or any array shaped (..., 3), e.g. an
    (H, W, 3) uint8 image. Raises InvalidArgument for empty input, a wrong
    trailing dimension, or channel values outside [0, 255].
    """
    arr = np.asarray(pixels)
    if arr.size == 0:
        raise InvalidArgument("pixels must not be empty")
    if arr.ndim < 2 or arr.shape[-1] != 3:
        raise InvalidArgument(f"expected pixels shaped (..., 3), got {arr.shape}")
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidArgument(f"expected integer pixels, got dtype {arr.dtype}")
    flat = arr.reshape(-1, 3).astype(np.int64, copy=False)
    if int(flat.min()) < 0 or int(flat.max()) > 255:
        raise InvalidArgument("pixel channels must lie in [0, 255]")
    return flat


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "U8Mask",
    "Histogram",
    "ReducedPixels",
    "PixelsLike",
    # errors
    "InvalidArgument",
    "QuantizerInvariantError",
    # helpers
    "rgb_to_hex",
    "coerce_to_rgb_tuple",
    "as_pixel_array",
]
