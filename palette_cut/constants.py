# palette_cut/constants.py
"""
Tunables used across the project.

- Reduced colour space geometry (SIGBITS, RSHIFT, HISTO_SIZE, ...)
- Refinement loop knobs (MAX_ITERATIONS, FRACT_BY_POPULATIONS)
- Accepted palette size range
- CLI defaults
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Reduced colour space
# =========================
SIGBITS: int = 5  # significant bits kept per channel
RSHIFT: int = 8 - SIGBITS  # right shift applied to 8-bit channels
CHANNEL_LEVELS: int = 1 << SIGBITS  # 32 reduced values per channel
HISTO_SIZE: int = 1 << (3 * SIGBITS)  # 32768 buckets
BUCKET_MULT: int = 1 << RSHIFT  # expands a reduced value back to 8-bit range

# Axis order is fixed; ties between equal extents favour earlier axes.
AXES: Tuple[str, str, str] = ("r", "g", "b")

# =========================
# Refinement loop
# =========================
MAX_ITERATIONS: int = 1000  # per phase
FRACT_BY_POPULATIONS: float = 0.75  # share of the target reached in phase 1

# =========================
# Palette size
# =========================
MIN_COLOURS: int = 2
MAX_COLOURS: int = 256

# =========================
# CLI defaults
# =========================
DEFAULT_COLOURS: int = 8
SWATCH_CELL_PX: int = 48
IMAGE_EXTS: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp", ".bmp")
OUTPUT_SUFFIX: str = "_mmcq"
SWATCH_SUFFIX: str = "_palette"
