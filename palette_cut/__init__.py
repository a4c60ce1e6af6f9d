# palette_cut/__init__.py
"""
palette_cut package.

Purpose:
  Median-cut colour quantization (MMCQ): reduce a large set of RGB pixels to a
  small representative palette and map pixels onto it. See extract_palette.py
  for the CLI.

Public API:
  build          : quantize pixels, returns a ColourMap.
  ColourMap      : palette(), size(), map(pixel), nearest(pixel), map_pixels(array).
  VBox           : colour box over the reduced 5-bit-per-channel space.
  InvalidArgument: raised by build() for bad input.
  QuantizerInvariantError: internal invariant failure.
  reduce, histogram, vbox, pqueue, median_cut, refine: building blocks.
  utils          : logging, formatting and image I/O helpers.

Quick start:
  from palette_cut import build
  cmap = build([[190, 197, 190], [202, 204, 200], [207, 214, 210]], 4)
  cmap.palette()
  cmap.map([190, 197, 190])
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import reduce
from . import histogram
from . import vbox
from . import pqueue
from . import median_cut
from . import refine
from . import utils

from .colour_map import ColourMap, build
from .core_types import InvalidArgument, QuantizerInvariantError
from .vbox import VBox

__all__ = [
    "__version__",
    # namespaces
    "constants",
    "core_types",
    "reduce",
    "histogram",
    "vbox",
    "pqueue",
    "median_cut",
    "refine",
    "utils",
    # API
    "build",
    "ColourMap",
    "VBox",
    "InvalidArgument",
    "QuantizerInvariantError",
]
