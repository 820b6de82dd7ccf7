import io
import math
import struct

import pytest

from habicat.metric_info import (
    FLT_MAX,
    ComplexityMetricInfo,
    DebugEntry,
    LayerType,
    MeshLayer,
    MeshLayerDebugInfo,
)

VERTICES = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 0.0]
NORMALS = [0.0, 0.0, 1.0] * 4
INDICES = [0, 1, 2, 0, 2, 3]


@pytest.fixture
def info():
    mesh = ComplexityMetricInfo()
    mesh.fill_triangles_data(VERTICES, [], [], [], INDICES, NORMALS)
    return mesh


def test_fill_triangles_data(info):
    assert len(info.triangles) == 2
    assert len(info.triangles_normals) == 2
    assert math.isclose(info.total_area, sum(info.triangles_area))
    assert info.triangles[0][1] == (1.0, 0.0, 0.0)
    assert info.mesh_data.aabb.max == (1.0, 1.0, 0.0)


def test_fill_rejects_partial_triangle():
    with pytest.raises(ValueError):
        ComplexityMetricInfo().fill_triangles_data(VERTICES, [], [], [], [0, 1], [])


def test_average_normal(info):
    assert info.update_average_normal() == (0.0, 0.0, 1.0)


def test_average_normal_needs_normals():
    mesh = ComplexityMetricInfo()
    mesh.fill_triangles_data(VERTICES, [], [], [], INDICES, [])
    with pytest.raises(ValueError):
        mesh.update_average_normal()


def test_layer_statistics(info):
    layer = info.add_layer([3.0, 7.0])
    assert layer.min == 3.0
    assert layer.max == 7.0
    assert layer.median == 7.0
    assert layer.min_visible == 3.0
    assert layer in info.layers
    assert [entry[2] for entry in layer.value_area_index] == [0, 1]


def test_layer_size_mismatch(info):
    with pytest.raises(ValueError):
        info.add_layer([1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        MeshLayer(info, [1.0])
    assert info.layers == []


def test_unattached_layer_defaults():
    layer = MeshLayer(values=[1.0])
    assert layer.parent is None
    assert layer.min == FLT_MAX
    assert layer.type is LayerType.UNKNOWN
    assert layer.caption == "Layer caption"


def test_add_existing_layer_attaches(info):
    layer = MeshLayer(values=[5.0, 2.0])
    info.add_layer(layer)
    assert layer.parent is info
    assert layer.min == 2.0


def test_fill_raw_data(info):
    layer = info.add_layer([3.0, 7.0])
    layer.fill_raw_data()
    assert len(layer.raw_data) == len(VERTICES)
    assert layer.raw_data[3:6] == [3.0, 3.0, 3.0]
    assert layer.raw_data[0:3] == [7.0, 7.0, 7.0]


def test_selected_range_clamps():
    layer = MeshLayer()
    layer.set_selected_range(-0.4, 1.7)
    assert (layer.selected_range_min, layer.selected_range_max) == (0.0, 1.0)


def test_debug_entry_strings():
    debug = MeshLayerDebugInfo()
    debug.add_entry("flag", True)
    debug.add_entry("count", 5)
    debug.add_entry("ratio", 0.5, "float")
    debug.add_entry("label", "hello")
    assert debug.to_string() == "flag: 1\ncount: 5\nratio: 0.500000\nlabel: hello\n"


def test_debug_entry_unknown_kind():
    assert DebugEntry("x", "mystery", b"\x00").to_string() == ""
    with pytest.raises(ValueError):
        MeshLayerDebugInfo().add_entry("x", 1, "mystery")


def test_debug_info_wire_format():
    debug = MeshLayerDebugInfo()
    debug.add_entry("n", 5)
    stream = io.BytesIO()
    debug.to_file(stream)
    expected = (
        struct.pack("<i", 1)
        + struct.pack("<i", 3) + b"int"
        + struct.pack("<i", 1) + b"n"
        + struct.pack("<i", 4) + struct.pack("<i", 5)
    )
    assert stream.getvalue() == expected


def test_debug_info_round_trip():
    debug = MeshLayerDebugInfo()
    debug.add_entry("count", 5)
    debug.add_entry("start", 123456789, "uint64_t")
    debug.add_entry("label", "hello")
    stream = io.BytesIO()
    debug.to_file(stream)
    stream.seek(0)
    restored = MeshLayerDebugInfo()
    restored.from_file(stream)
    assert restored.entries == debug.entries
    assert restored.to_string() == debug.to_string()


def test_debug_info_truncated():
    debug = MeshLayerDebugInfo()
    debug.add_entry("count", 5)
    stream = io.BytesIO()
    debug.to_file(stream)
    with pytest.raises(EOFError):
        MeshLayerDebugInfo().from_file(io.BytesIO(stream.getvalue()[:-2]))