"""Mesh data, per-triangle data layers and their debug records."""

from __future__ import annotations

import secrets
import struct
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import BinaryIO, Callable, Optional, Sequence, Union

from .geometry import AABB, Vector3, normalize, triangle_area

FLT_MAX = 3.4028234663852886e38

_INT = struct.Struct("<i")


class LayerType(IntEnum):
    UNKNOWN = 0
    HEIGHT = 1
    TRIANGLE_EDGE = 2
    TRIANGLE_AREA = 3
    COMPARE = 4
    STANDARD_DEVIATION = 5
    RUGOSITY = 6
    VECTOR_DISPERSION = 7
    FRACTAL_DIMENSION = 8
    TRIANGLE_DENSITY = 9


def _timestamp_to_date(nanoseconds: int) -> str:
    moment = datetime.fromtimestamp(nanoseconds / 1e9, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


_ENCODERS: dict[str, Callable[[object], bytes]] = {
    "bool": lambda v: b"\x01" if v else b"\x00",
    "int": lambda v: struct.pack("<i", v),
    "float": lambda v: struct.pack("<f", v),
    "double": lambda v: struct.pack("<d", v),
    "uint64_t": lambda v: struct.pack("<Q", v),
    "std::string": lambda v: str(v).encode("utf-8") + b"\x00",
}


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError("unexpected end of debug info data")
    return data


def _read_int(stream: BinaryIO) -> int:
    return _INT.unpack(_read_exact(stream, 4))[0]


def _read_string(stream: BinaryIO) -> str:
    return _read_exact(stream, _read_int(stream)).decode("utf-8")


def _write_string(stream: BinaryIO, text: str) -> None:
    data = text.encode("utf-8")
    stream.write(_INT.pack(len(data)))
    stream.write(data)


@dataclass
class DebugEntry:
    """A named, typed value stored as raw little-endian bytes."""

    name: str
    kind: str
    raw: bytes

    def __post_init__(self) -> None:
        if self.kind == "std::string" and self.raw:
            self.raw = self.raw[:-1] + b"\x00"

    @property
    def size(self) -> int:
        return len(self.raw)

    def to_string(self) -> str:
        if self.kind == "bool":
            text = "1" if self.raw[0] else "0"
        elif self.kind == "int":
            text = str(struct.unpack("<i", self.raw[:4])[0])
        elif self.kind == "float":
            text = f"{struct.unpack('<f', self.raw[:4])[0]:f}"
        elif self.kind == "double":
            text = f"{struct.unpack('<d', self.raw[:8])[0]:f}"
        elif self.kind == "uint64_t":
            text = _timestamp_to_date(struct.unpack("<Q", self.raw[:8])[0])
        elif self.kind == "std::string":
            text = self.raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")
        else:
            return ""
        return f"{self.name}: {text}"


@dataclass
class MeshLayerDebugInfo:
    """Debug records attached to a layer."""

    type: str = "MeshLayerDebugInfo"
    entries: list[DebugEntry] = field(default_factory=list)
    start_calculations_time: Optional[int] = None
    end_calculations_time: Optional[int] = None

    def add_entry(self, name: str, value: object, kind: Optional[str] = None) -> DebugEntry:
        """Append an entry; ``kind`` is inferred from the value when omitted."""
        if kind is None:
            if isinstance(value, bool):
                kind = "bool"
            elif isinstance(value, int):
                kind = "int"
            elif isinstance(value, float):
                kind = "double"
            elif isinstance(value, str):
                kind = "std::string"
            else:
                raise TypeError(f"cannot store value of type {type(value).__name__}")
        try:
            encoder = _ENCODERS[kind]
        except KeyError:
            raise ValueError(f"unknown debug entry kind: {kind!r}") from None
        entry = DebugEntry(name, kind, encoder(value))
        self.entries.append(entry)
        return entry

    def to_string(self) -> str:
        return "".join(entry.to_string() + "\n" for entry in self.entries)

    def to_file(self, stream: BinaryIO) -> None:
        stream.write(_INT.pack(len(self.entries)))
        for entry in self.entries:
            _write_string(stream, entry.kind)
            _write_string(stream, entry.name)
            stream.write(_INT.pack(entry.size))
            stream.write(entry.raw)

    def from_file(self, stream: BinaryIO) -> None:
        for _ in range(_read_int(stream)):
            kind = _read_string(stream)
            name = _read_string(stream)
            raw = _read_exact(stream, _read_int(stream))
            self.entries.append(DebugEntry(name, kind, raw))


@dataclass
class RawMeshData:
    vertices: list[float] = field(default_factory=list)
    colors: list[float] = field(default_factory=list)
    uvs: list[float] = field(default_factory=list)
    tangents: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    normals: list[float] = field(default_factory=list)
    aabb: Optional[AABB] = None


class MeshLayer:
    """Per-triangle values over a mesh, with summary statistics."""

    def __init__(
        self,
        parent: Optional["ComplexityMetricInfo"] = None,
        values: Optional[Sequence[float]] = None,
    ) -> None:
        self.id = secrets.token_hex(12).upper()
        self.caption = "Layer caption"
        self.note = ""
        self.type = LayerType.UNKNOWN
        self.parent: Optional[ComplexityMetricInfo] = None
        self.values: list[float] = list(values) if values is not None else []
        self.raw_data: list[float] = []
        self.value_area_index: list[tuple[float, float, int]] = []
        self.debug_info: Optional[MeshLayerDebugInfo] = None
        self.selected_range_min = 0.0
        self.selected_range_max = 0.0
        self.max = -FLT_MAX
        self.min = FLT_MAX
        self.mean = -FLT_MAX
        self.median = -FLT_MAX
        self.min_visible = FLT_MAX
        self.max_visible = FLT_MAX
        if parent is not None:
            self.set_parent(parent)

    def set_parent(self, parent: "ComplexityMetricInfo") -> None:
        """Attach the layer to a mesh and recompute its statistics."""
        if parent is None:
            raise ValueError("parent must not be None")
        if len(self.values) != len(parent.triangles):
            raise ValueError(
                f"layer has {len(self.values)} values but mesh has "
                f"{len(parent.triangles)} triangles"
            )
        self.parent = parent
        self._calculate_init_data()

    def _calculate_init_data(self) -> None:
        self.min = FLT_MAX
        self.min_visible = FLT_MAX
        self.max = -FLT_MAX
        self.max_visible = FLT_MAX
        self.mean = -FLT_MAX
        self.median = -FLT_MAX
        self.value_area_index = []
        if self.parent is None or not self.values:
            return

        ordered = sorted(self.values)
        self.min = ordered[0]
        self.max = ordered[-1]
        self.min_visible = self.min
        self.max_visible = ordered[int(len(ordered) * 0.85)]
        self.mean = sum(self.values) / len(self.values)
        self.median = ordered[len(ordered) // 2]
        self.value_area_index = sorted(
            (value, area, index)
            for index, (value, area) in enumerate(zip(self.values, self.parent.triangles_area))
        )

    def fill_raw_data(self) -> None:
        """Spread triangle values onto every component of their vertices."""
        if self.parent is None or not self.values:
            return
        mesh = self.parent.mesh_data
        self.raw_data = [0.0] * len(mesh.vertices)
        corners = [mesh.indices[i:i + 3] for i in range(0, len(mesh.indices), 3)]
        for face, value in zip(corners, self.values):
            for vertex in face:
                self.raw_data[vertex * 3:vertex * 3 + 3] = [value] * 3

    def set_selected_range(self, low: float, high: float) -> None:
        """Set the selected range, each bound clamped to [0, 1]."""
        self.selected_range_min = min(max(low, 0.0), 1.0)
        self.selected_range_max = min(max(high, 0.0), 1.0)


class ComplexityMetricInfo:
    """Triangle geometry of a mesh together with its data layers."""

    def __init__(self) -> None:
        self.total_area = 0.0
        self.average_normal: Vector3 = (0.0, 0.0, 0.0)
        self.triangle_selected: list[int] = []
        self.mesh_data = RawMeshData()
        self.triangles: list[tuple[Vector3, Vector3, Vector3]] = []
        self.triangles_area: list[float] = []
        self.triangles_normals: list[tuple[Vector3, Vector3, Vector3]] = []
        self.triangles_centroids: list[Vector3] = []
        self.layers: list[MeshLayer] = []
        self.file_name = ""
        self.position: Vector3 = (0.0, 0.0, 0.0)
        self.current_layer_index = -1

    def fill_triangles_data(
        self,
        vertices: Sequence[float],
        colors: Sequence[float],
        uvs: Sequence[float],
        tangents: Sequence[float],
        indices: Sequence[int],
        normals: Sequence[float],
    ) -> None:
        """Store raw mesh data and derive per-triangle geometry from it."""
        if len(indices) % 3:
            raise ValueError("index count must be a multiple of three")
        self.mesh_data = RawMeshData(
            list(vertices), list(colors), list(uvs), list(tangents), list(indices), list(normals)
        )
        self.triangles = []
        self.triangles_normals = []
        self.triangles_area = []
        self.triangles_centroids = []
        self.total_area = 0.0

        def point(source: Sequence[float], index: int) -> Vector3:
            return (float(source[index * 3]), float(source[index * 3 + 1]), float(source[index * 3 + 2]))

        for start in range(0, len(indices), 3):
            face = indices[start:start + 3]
            a, b, c = (point(vertices, i) for i in face)
            self.triangles.append((a, b, c))
            area = triangle_area(a, b, c)
            self.triangles_area.append(area)
            self.total_area += area
            self.triangles_centroids.append(
                tuple((p + q + r) / 3.0 for p, q, r in zip(a, b, c))  # type: ignore[arg-type]
            )
            if normals:
                na, nb, nc = (point(normals, i) for i in face)
                self.triangles_normals.append((na, nb, nc))

        self.mesh_data.aabb = AABB.from_flat(self.mesh_data.vertices) if vertices else None

    def update_average_normal(self) -> Vector3:
        """Recompute the area-weighted average of the vertex normals."""
        if len(self.triangles_normals) != len(self.triangles):
            raise ValueError("mesh has no per-vertex normals")
        areas = [triangle_area(*triangle) for triangle in self.triangles]
        total = sum(areas)
        if total == 0.0:
            raise ValueError("mesh has no surface area")
        acc = [0.0, 0.0, 0.0]
        for area, corner_normals in zip(areas, self.triangles_normals):
            weight = area / total
            for n in corner_normals:
                for axis in range(3):
                    acc[axis] += n[axis] * weight
        self.average_normal = normalize(acc)
        return self.average_normal

    def add_layer(self, layer: Union[MeshLayer, Sequence[float]]) -> MeshLayer:
        """Attach a layer, or build one from per-triangle values, and append it."""
        if not isinstance(layer, MeshLayer):
            layer = MeshLayer(self, layer)
        else:
            layer.set_parent(self)
        self.layers.append(layer)
        return layer


__all__ = [
    "FLT_MAX",
    "LayerType",
    "DebugEntry",
    "MeshLayerDebugInfo",
    "RawMeshData",
    "MeshLayer",
    "ComplexityMetricInfo",
]

if sys.version_info < (3, 10):  # pragma: no cover
    raise RuntimeError("Python 3.10 or newer is required")