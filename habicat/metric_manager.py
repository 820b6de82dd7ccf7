"""Holds the active mesh and writes it to the .rug format."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence, Union

from .geometry import AABB
from .metric_info import ComplexityMetricInfo

APP_VERSION = 0.87

_INT = struct.Struct("<i")


def _write_array(stream: BinaryIO, code: str, values: Sequence) -> None:
    stream.write(_INT.pack(len(values)))
    stream.write(struct.pack(f"<{len(values)}{code}", *values))


def _write_bytes(stream: BinaryIO, data: bytes) -> None:
    stream.write(_INT.pack(len(data)))
    stream.write(data)


def write_rug(info: ComplexityMetricInfo, stream: BinaryIO) -> None:
    """Write the mesh, its layers and its bounding box in .rug layout."""
    mesh = info.mesh_data
    stream.write(struct.pack("<f", APP_VERSION))
    _write_array(stream, "d", mesh.vertices)
    _write_array(stream, "f", mesh.colors)
    _write_array(stream, "f", mesh.uvs)
    _write_array(stream, "f", mesh.normals)
    _write_array(stream, "f", mesh.tangents)
    _write_array(stream, "i", mesh.indices)

    stream.write(_INT.pack(len(info.layers)))
    for layer in info.layers:
        stream.write(_INT.pack(int(layer.type)))
        _write_bytes(stream, layer.id.encode("utf-8") + b"\x00")
        _write_bytes(stream, layer.caption.encode("utf-8"))
        _write_bytes(stream, layer.note.encode("utf-8"))
        _write_array(stream, "f", layer.values)
        stream.write(_INT.pack(1 if layer.debug_info is not None else 0))
        if layer.debug_info is not None:
            layer.debug_info.to_file(stream)

    box = AABB.from_flat(mesh.vertices)
    stream.write(struct.pack("<3f", *box.min))
    stream.write(struct.pack("<3f", *box.max))


class ComplexityMetricManager:
    """Owns the active mesh and notifies listeners when a mesh is loaded."""

    def __init__(self) -> None:
        self.active_info: Optional[ComplexityMetricInfo] = None
        self._load_callbacks: list[Callable[[], None]] = []

    def init(
        self,
        vertices: Sequence[float],
        colors: Sequence[float],
        uvs: Sequence[float],
        tangents: Sequence[float],
        indices: Sequence[int],
        normals: Sequence[float],
    ) -> ComplexityMetricInfo:
        """Replace the active mesh with one built from the given data."""
        info = ComplexityMetricInfo()
        info.fill_triangles_data(vertices, colors, uvs, tangents, indices, normals)
        self.active_info = info
        return info

    def add_load_callback(self, func: Callable[[], None]) -> None:
        self._load_callbacks.append(func)

    def notify_loaded(self) -> None:
        """Call every registered load callback in registration order."""
        for callback in self._load_callbacks:
            if callback is not None:
                callback()

    def save_to_rug_file(self, path: Union[str, Path]) -> Path:
        """Save the active mesh; '.rug' is appended when the path lacks it."""
        text = str(path)
        if not text:
            raise ValueError("file path must not be empty")
        if self.active_info is None:
            raise RuntimeError("no mesh is loaded")
        if ".rug" not in text:
            text += ".rug"
        target = Path(text)
        with target.open("wb") as stream:
            write_rug(self.active_info, stream)
        return target