# palette_cut/refine.py
from __future__ import annotations

"""
Two-phase refinement driver.

Exports:
  Phase                    BUILD_INITIAL -> PHASE1 -> PHASE2 -> DONE
  PhaseConfig              per-phase priority key and target fraction
  PHASES                   the two splitting phases in run order
  iterate(queue, target, max_iterations=MAX_ITERATIONS, debug=False) -> IterStats
  quantize(pixels, max_colours, debug=False) -> PQueue[VBox]

Notes:
  - Phase 1 ranks boxes by population and splits until 75% of the target.
  - Phase 2 re-ranks every box by population x volume in a fresh queue and
    splits to the full target, so large sparse regions get their own colour.
  - Boxes that cannot be split are set aside for the rest of the phase and
    returned to the queue when it ends.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import numpy as np

from .constants import FRACT_BY_POPULATIONS, MAX_ITERATIONS
from .core_types import QuantizerInvariantError
from .histogram import build_histogram, count_populated, vbox_from_pixels
from .median_cut import median_cut_apply
from .pqueue import PQueue, PriorityKey
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string
from .vbox import VBox


class Phase(Enum):
    BUILD_INITIAL = "build_initial"
    PHASE1 = "phase1"
    PHASE2 = "phase2"
    DONE = "done"


def by_population(vbox: VBox) -> int:
    return vbox.count


def by_population_volume(vbox: VBox) -> int:
    return vbox.count * vbox.volume


@dataclass(frozen=True)
class PhaseConfig:
    """Priority key and share of max_colours a splitting phase aims for."""

    phase: Phase
    key: PriorityKey
    fraction: float

    def target(self, max_colours: int) -> float:
        return self.fraction * max_colours


PHASES: Tuple[PhaseConfig, PhaseConfig] = (
    PhaseConfig(Phase.PHASE1, by_population, FRACT_BY_POPULATIONS),
    PhaseConfig(Phase.PHASE2, by_population_volume, 1.0),
)


@dataclass(frozen=True)
class IterStats:
    """What one splitting phase did."""

    iterations: int
    splits: int
    set_aside: int
    boxes: int


def iterate(
    queue: PQueue[VBox],
    target: float,
    max_iterations: int = MAX_ITERATIONS,
    debug: bool = False,
) -> IterStats:
    """
    Split the highest-priority box until the queue holds `target` boxes,
    the iteration cap is hit, or nothing left can be split.

    Raises QuantizerInvariantError if a non-empty box yields no child.
    """
    held: List[VBox] = []
    niters = 0
    splits = 0
    while niters < max_iterations and len(queue) + len(held) < target and queue:
        vbox = queue.pop()
        if vbox.count == 0:
            held.append(vbox)
            niters += 1
            continue

        vbox1, vbox2 = median_cut_apply(vbox)
        if vbox1 is None:
            raise QuantizerInvariantError(
                f"split of non-empty box (count={vbox.count}) produced no child"
            )
        if vbox2 is None:
            held.append(vbox1)
        else:
            queue.push(vbox1)
            queue.push(vbox2)
            splits += 1
        niters += 1

    for vbox in held:
        queue.push(vbox)

    if debug and niters >= max_iterations:
        debug_log(f"iteration cap {max_iterations} reached")
    return IterStats(
        iterations=niters, splits=splits, set_aside=len(held), boxes=len(queue)
    )


def quantize(
    pixels: np.ndarray, max_colours: int, debug: bool = False
) -> PQueue[VBox]:
    """
    Run the whole state machine over validated (N, 3) pixels.

    Returns the final queue, ordered by the phase 2 key.
    """
    phase = Phase.BUILD_INITIAL
    t0 = time.perf_counter()

    histogram = build_histogram(pixels)
    populated = count_populated(histogram)
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixels", int(pixels.shape[0])),
                    ("Populated buckets", populated),
                    ("Max colours", max_colours),
                    ("Phase", phase.value),
                ]
            )
        )
        if populated <= max_colours:
            # No shortcut here: the general path still splits down to these buckets.
            debug_log("populated buckets already within max colours")

    queue: PQueue[VBox] = PQueue(PHASES[0].key)
    queue.push(vbox_from_pixels(pixels, histogram))

    for config in PHASES:
        phase = config.phase
        if queue.key is not config.key:
            reranked: PQueue[VBox] = PQueue(config.key)
            reranked.extend(queue)
            queue = reranked
        stats = iterate(queue, config.target(max_colours), debug=debug)
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Phase", phase.value),
                        ("Target", config.target(max_colours)),
                        ("Iterations", stats.iterations),
                        ("Splits", stats.splits),
                        ("Unsplittable", stats.set_aside),
                        ("Boxes", stats.boxes),
                    ]
                )
            )

    phase = Phase.DONE
    if debug:
        debug_log(
            f"{phase.value}: {len(queue)} boxes in "
            f"{format_seconds_compact(time.perf_counter() - t0)}"
        )
    return queue


__all__ = [
    "Phase",
    "PhaseConfig",
    "PHASES",
    "IterStats",
    "by_population",
    "by_population_volume",
    "iterate",
    "quantize",
]
