import numpy as np
import pytest
from palette_cut.core_types import QuantizerInvariantError
from palette_cut.histogram import build_histogram
from palette_cut.vbox import VBox

PIXELS = np.array([[190, 197, 190], [202, 204, 200], [207, 214, 210], [211, 214, 211], [205, 207, 207]])

def _full_box(px):
    return VBox(0, 31, 0, 31, 0, 31, build_histogram(px))

def test_count_and_volume():
    box = VBox(23, 26, 24, 26, 23, 26, build_histogram(PIXELS))
    assert box.count == 5
    assert box.volume == 4 * 3 * 4
    assert _full_box(PIXELS).volume == 32 ** 3

def test_average_single_bucket_is_bucket_centre():
    box = _full_box(np.array([[190, 197, 190]] * 3))
    assert box.average == (23 * 8 + 4, 24 * 8 + 4, 23 * 8 + 4)

def test_average_weighted_by_counts():
    # r buckets 0 (x3) and 4 (x1): (0*3 + 32*1) // 4 + 4 = 12
    px = np.array([[0, 0, 0]] * 3 + [[32, 0, 0]])
    box = _full_box(px)
    assert box.average == (12, 4, 4)

def test_average_empty_box_falls_back_to_midpoint():
    box = VBox(2, 5, 0, 0, 31, 31, build_histogram(np.array([[255, 255, 0]])))
    assert box.count == 0
    assert box.average == (8 * 8 // 2, 8 // 2, 8 * 63 // 2)

def test_contains_uses_reduced_bounds():
    box = VBox(23, 23, 24, 24, 23, 23, build_histogram(PIXELS))
    assert box.contains([190, 197, 190])
    assert box.contains([184, 192, 191])
    assert not box.contains([192, 197, 190])

def test_copy_is_independent_and_shares_histogram():
    box = VBox(23, 26, 24, 26, 23, 26, build_histogram(PIXELS))
    dup = box.copy()
    assert dup == box and dup is not box
    assert dup.histogram is box.histogram
    narrowed = box.with_bounds(r2=23)
    assert narrowed.r2 == 23 and box.r2 == 26
    assert narrowed.count == 1

def test_inverted_bounds_rejected():
    with pytest.raises(QuantizerInvariantError):
        VBox(5, 4, 0, 0, 0, 0, build_histogram(PIXELS))

def test_plane_counts():
    box = VBox(23, 26, 24, 26, 23, 26, build_histogram(PIXELS))
    assert box.plane_counts("r").tolist() == [1, 0, 3, 1]
    assert box.plane_counts("b").tolist() == [1, 0, 2, 2]
