import math

import pytest

from habicat.geometry import AABB, normalize, triangle_area


def test_from_flat_picks_extremes():
    box = AABB.from_flat([1.0, 2.0, 3.0, -1.0, 5.0, 0.0])
    assert box.min == (-1.0, 2.0, 0.0)
    assert box.max == (1.0, 5.0, 3.0)


def test_from_flat_rejects_empty_and_ragged():
    with pytest.raises(ValueError):
        AABB.from_flat([])
    with pytest.raises(ValueError):
        AABB.from_flat([1.0, 2.0, 3.0, 4.0])


def test_center_is_equidistant_from_corners():
    box = AABB.from_flat([1.0, 2.0, 3.0, -1.0, 5.0, 0.0])
    c = box.center()
    for lo, mid, hi in zip(box.min, c, box.max):
        assert math.isclose(mid - lo, hi - mid)


def test_longest_axis_is_largest_size_component():
    box = AABB.from_flat([0.0, 0.0, 0.0, 4.0, 7.0, 2.0])
    assert box.longest_axis_length() == max(box.size())
    assert box.size() == (4.0, 7.0, 2.0)


def test_scaled_scales_size():
    box = AABB.from_flat([1.0, 2.0, 3.0, -1.0, 5.0, 0.0])
    doubled = box.scaled(2.0)
    for a, b in zip(box.size(), doubled.size()):
        assert math.isclose(b, a * 2.0)


def test_scaled_negative_keeps_min_below_max():
    box = AABB.from_flat([1.0, 2.0, 3.0, 4.0, 5.0, 6.0]).scaled(-1.0)
    assert all(lo <= hi for lo, hi in zip(box.min, box.max))


def test_translated_moves_center_keeps_size():
    box = AABB.from_flat([0.0, 0.0, 0.0, 2.0, 4.0, 6.0])
    moved = box.translated((1.0, -1.0, 0.5))
    assert moved.size() == box.size()
    for a, b, o in zip(box.center(), moved.center(), (1.0, -1.0, 0.5)):
        assert math.isclose(b, a + o)


def test_triangle_area_right_triangle():
    assert math.isclose(triangle_area((0, 0, 0), (2, 0, 0), (0, 2, 0)), 2.0)


def test_triangle_area_order_invariant_and_degenerate():
    a, b, c = (0.3, 1.0, 2.0), (4.0, -1.0, 0.5), (1.0, 2.0, 3.0)
    assert math.isclose(triangle_area(a, b, c), triangle_area(c, a, b))
    assert triangle_area(a, a, b) == 0.0


def test_normalize_unit_length_and_identity():
    v = normalize((3.0, -2.0, 7.0))
    assert math.isclose(math.sqrt(sum(x * x for x in v)), 1.0)
    assert normalize((0.0, 0.0, 1.0)) == (0.0, 0.0, 1.0)


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        normalize((0.0, 0.0, 0.0))