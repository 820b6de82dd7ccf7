import math

import pytest

from habicat.jitter import (
    JitterManager,
    adjust_outliers,
    format_duration,
    standard_deviation,
    value_with_area_portion,
)
from habicat.jitter_sets import JitterSettings, jitter_set_names
from habicat.metric_info import FLT_MAX, ComplexityMetricInfo


def _square_info():
    info = ComplexityMetricInfo()
    vertices = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 0.0]
    normals = [0.0, 0.0, 1.0] * 4
    info.fill_triangles_data(vertices, [], [], [], [0, 1, 2, 0, 2, 3], normals)
    return info


@pytest.fixture
def manager():
    return JitterManager(_square_info())


def test_adjust_outliers_full_range_unchanged():
    data = [5.0, 1.0, 3.0]
    assert adjust_outliers(data, 0.0, 1.0) == data


def test_adjust_outliers_empty():
    assert adjust_outliers([], 0.1, 0.9) == []


def test_adjust_outliers_clips_both_ends():
    data = [float(v) for v in range(1, 11)]
    result = adjust_outliers(data, 0.1, 0.9)
    assert len(result) == len(data)
    assert min(result) > min(data)
    assert max(result) < max(data)
    assert result[4:8] == data[4:8]


def test_adjust_outliers_rejects_inverted_range():
    with pytest.raises(ValueError):
        adjust_outliers([1.0, 2.0, 3.0], 0.9, 0.1)


def test_value_with_area_portion():
    data = [1.0, 2.0, 3.0]
    areas = [1.0, 1.0, 1.0]
    assert value_with_area_portion(data, areas, 0.5) == 2.0
    assert value_with_area_portion(data, areas, 1.0) == 1.0


def test_value_with_area_portion_degenerate():
    assert value_with_area_portion([], [], 0.5) == FLT_MAX
    assert value_with_area_portion([1.0], [0.0], 0.5) == FLT_MAX


def test_standard_deviation():
    assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
    assert standard_deviation([3.0, 3.0, 3.0]) == 0.0
    base = [1.0, 2.5, 7.0]
    assert standard_deviation([v + 10 for v in base]) == pytest.approx(standard_deviation(base))


def test_standard_deviation_empty():
    with pytest.raises(ValueError):
        standard_deviation([])


def test_format_duration():
    assert format_duration(0) == ""
    assert format_duration(3723000) == "1 hours 2 minutes 3 seconds"
    assert format_duration(60000) == "1 minutes "


def test_mesh_update_sets_resolution_range(manager):
    assert manager.resolution == manager.lowest_resolution
    assert manager.highest_resolution / manager.lowest_resolution == pytest.approx(120 / 9)


def test_mesh_update_requires_box():
    with pytest.raises(ValueError):
        JitterManager(ComplexityMetricInfo())


def test_set_resolution_clamps(manager):
    assert manager.set_resolution(1e9) == manager.highest_resolution
    assert manager.set_resolution(-5.0) == manager.lowest_resolution
    middle = (manager.lowest_resolution + manager.highest_resolution) / 2
    assert manager.set_resolution(middle) == middle


def test_aabb_for_jittered_grid(manager):
    box = manager.aabb_for_jittered_grid(JitterSettings(0.0, 0.0, 0.0, 1.0), 1.0)
    assert box.center() == pytest.approx((0.5, 0.5, 0.0))
    assert box.size() == pytest.approx((1.0, 1.0, 1.0))
    shifted = manager.aabb_for_jittered_grid(JitterSettings(1.0, 0.0, 0.0, 2.0), 2.0)
    assert shifted.center() == pytest.approx((2.5, 0.5, 0.0))
    assert shifted.longest_axis_length() == pytest.approx(2.0)


def test_aabb_without_mesh():
    with pytest.raises(RuntimeError):
        JitterManager().aabb_for_jittered_grid(JitterSettings(), 1.0)


def test_run_constant_values(manager):
    manager.current_set_name = "7"
    layer = manager.run(lambda settings, box: [2.0, 4.0])
    assert layer.values == [2.0, 4.0]
    assert manager.jitter_to_do_count == 7
    assert manager.jitter_done_count == 7
    assert manager.progress() == 1.0
    assert manager.produce_standard_deviation_data() == [0.0, 0.0]


def test_run_unknown_set_falls_back(manager):
    manager.current_set_name = "nope"
    manager.run(lambda settings, box: [1.0, 1.0])
    assert manager.current_set_name == "55"
    assert manager.jitter_to_do_count == 55


def test_run_smoother_uses_64(manager):
    manager.run(lambda settings, box: [1.0, 1.0], smoother=True)
    assert len(manager.per_jitter_result) == 64


def test_run_averages_over_jitters(manager):
    manager.current_set_name = "7"
    seen = []

    def compute(settings, box):
        seen.append(settings)
        return [float(len(seen)), 0.0]

    layer = manager.run(compute)
    assert layer.values[0] == pytest.approx(sum(range(1, 8)) / 7)
    assert manager.produce_standard_deviation_data()[0] == pytest.approx(
        standard_deviation([float(v) for v in range(1, 8)])
    )


def test_ignore_and_fallback(manager):
    manager.current_set_name = "7"
    manager.set_ignore_value_function(lambda value: value > 5.0)
    manager.set_fallback_value(3.0)
    layer = manager.run(lambda settings, box: [10.0, 1.0])
    assert layer.values == [3.0, 1.0]
    assert manager.fallback_value == 1.0
    again = manager.run(lambda settings, box: [10.0, 1.0])
    assert again.values == [10.0, 1.0]


def test_nan_replaced_by_fallback(manager):
    manager.current_set_name = "1"
    layer = manager.run(lambda settings, box: [math.nan, 2.0])
    assert layer.values == [1.0, 2.0]


def test_wrong_value_count(manager):
    with pytest.raises(ValueError):
        manager.run(lambda settings, box: [1.0])


def test_callbacks_and_debug_info(manager):
    manager.current_set_name = "1"
    events = []
    manager.add_start_callback(lambda: events.append("start"))
    manager.add_end_callback(lambda layer: events.append(layer))
    layer = manager.run(lambda settings, box: [1.0, 1.0])
    assert events[0] == "start"
    assert events[1] is layer
    text = layer.debug_info.to_string()
    assert "Jitter count: 1" in text
    assert "Jitter 0 ShiftX" in text
    assert layer.debug_info.type == "JitterMeshLayerDebugInfo"


def test_debug_jitter_count(manager):
    manager.debug_jitter_count = 3
    manager.run(lambda settings, box: [1.0, 1.0])
    assert manager.jitter_to_do_count == 3
    with pytest.raises(ValueError):
        manager.debug_jitter_count = 0
    manager.debug_jitter_count = -1
    assert manager.debug_jitter_count is None


def test_progress_partial(manager):
    manager.jitter_to_do_count = 4
    manager.accumulate([1.0, 2.0])
    assert manager.progress() == pytest.approx(0.25)
    assert manager.per_jitter_result == [[1.0, 2.0]]


def test_standard_deviation_data_empty_before_run(manager):
    assert manager.produce_standard_deviation_data() == []
    assert "55" in jitter_set_names()