import math
import numpy as np
import pytest
from palette_cut import ColourMap, InvalidArgument, build
from palette_cut.histogram import build_histogram
from palette_cut.pqueue import PQueue
from palette_cut.refine import by_population_volume
from palette_cut.vbox import VBox

PIXELS = [[190, 197, 190], [202, 204, 200], [207, 214, 210], [211, 214, 211], [205, 207, 207]]

def _dist(a, b):
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))

def test_greyish_scenario():
    cmap = build(PIXELS, 4)
    assert cmap.size() == 4
    assert cmap.palette() == [(204, 204, 204), (188, 196, 188), (204, 212, 212), (212, 212, 212)]
    for r, g, b in cmap.palette():
        assert max(r, g, b) - min(r, g, b) <= 8
    mapped = cmap.map([190, 197, 190])
    assert mapped == (188, 196, 188)
    assert _dist(mapped, [190, 197, 190]) <= 4

@pytest.mark.parametrize("pixels, max_colours", [([], 4), ([[0, 0, 0]], 1), ([[0, 0, 0]], 300)])
def test_invalid_arguments(pixels, max_colours):
    with pytest.raises(InvalidArgument):
        build(pixels, max_colours)

def test_malformed_pixels_rejected():
    with pytest.raises(InvalidArgument):
        build([[0, 0]], 4)
    with pytest.raises(InvalidArgument):
        build([[0, 0, 256]], 4)
    with pytest.raises(InvalidArgument):
        build([[0.5, 0, 0]], 4)

def test_properties_on_random_image():
    img = (np.random.rand(64, 64, 3) * 255).astype("uint8")
    for k in (2, 5, 16, 64):
        cmap = build(img, k)
        assert 1 <= cmap.size() <= k
        assert sum(b.count for b in cmap.boxes()) == 64 * 64
        pal = cmap.palette_array()
        assert pal.shape == (cmap.size(), 3)
        assert all(0 <= c <= 255 for entry in cmap.palette() for c in entry)
        assert abs(sum(cmap.shares()) - 1.0) < 1e-9

def test_max_colours_two_gives_two():
    cmap = build([[0, 0, 0], [255, 255, 255]], 2)
    assert cmap.size() == 2

def test_size_reaches_distinct_bucket_count():
    px = [[0, 0, 0]] * 10 + [[100, 50, 20]] * 4 + [[255, 255, 255]] * 2
    cmap = build(px, 4)
    assert cmap.size() == 3
    assert set(cmap.palette()) == {(4, 4, 4), (100, 52, 20), (252, 252, 252)}

def test_size_monotonic_in_max_colours():
    px = np.random.default_rng(5).integers(0, 256, size=(3000, 3))
    sizes = [build(px, k).size() for k in range(2, 40, 3)]
    assert sizes == sorted(sizes)

def test_deterministic():
    px = np.random.default_rng(9).integers(0, 256, size=(1000, 3))
    assert build(px, 12).palette() == build(px, 12).palette()

def test_map_returns_containing_box_average():
    px = np.random.default_rng(11).integers(0, 256, size=(800, 3))
    cmap = build(px, 10)
    for pixel in px[:50]:
        mapped = cmap.map(pixel)
        owners = [b for b in cmap.boxes() if b.contains(pixel)]
        assert owners and mapped == owners[0].average

def test_map_falls_back_to_nearest_outside_boxes():
    cmap = build([[100, 100, 100], [120, 120, 120]], 2)
    assert cmap.map([0, 0, 0]) == cmap.nearest([0, 0, 0])
    assert cmap.nearest([0, 0, 0]) == (100, 100, 100)

def _cmap_from_averages(*cells):
    px = np.array([[r * 8, g * 8, b * 8] for r, g, b in cells])
    histo = build_histogram(px)
    q = PQueue(by_population_volume)
    for r, g, b in cells:
        q.push(VBox(r, r, g, g, b, b, histo))
    return ColourMap(q)

def test_nearest_zero_distance_legacy_sentinel():
    # boxes in queue order: exact match first, then a far one
    cmap = _cmap_from_averages((10, 10, 10), (30, 30, 30))
    exact = cmap.palette()[0]
    assert cmap.nearest(exact) == exact
    # legacy selection: a zero distance reads as "unset", so the next box wins
    assert cmap.nearest(exact, zero_sentinel=True) == cmap.palette()[1]

def test_nearest_sentinels_agree_without_zero_distance():
    cmap = _cmap_from_averages((10, 10, 10), (30, 30, 30))
    assert cmap.nearest([0, 0, 0]) == cmap.nearest([0, 0, 0], zero_sentinel=True)

def test_nearest_on_empty_map_is_none():
    cmap = ColourMap(PQueue(by_population_volume))
    assert cmap.nearest([1, 2, 3]) is None
    assert cmap.map([1, 2, 3]) is None

def test_map_pixels_matches_scalar_map():
    img = np.random.default_rng(13).integers(0, 256, size=(16, 12, 3)).astype(np.uint8)
    cmap = build(img, 6)
    out = cmap.map_pixels(img)
    assert out.shape == img.shape and out.dtype == np.uint8
    for y in range(0, 16, 3):
        for x in range(0, 12, 3):
            assert tuple(int(v) for v in out[y, x]) == cmap.map(img[y, x])

def test_map_pixels_outside_boxes_uses_nearest():
    cmap = build([[100, 100, 100], [120, 120, 120]], 2)
    out = cmap.map_pixels([[0, 0, 0], [255, 255, 255]])
    assert [tuple(map(int, row)) for row in out] == [cmap.nearest([0, 0, 0]), cmap.nearest([255, 255, 255])]
