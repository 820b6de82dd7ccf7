"""Averaging per-triangle results over a series of shifted, scaled grids."""

from __future__ import annotations

import math
import time
from collections import deque
from typing import Callable, Optional, Sequence

from .geometry import AABB, Vector3
from .jitter_sets import (
    DEFAULT_GRID_SIZE,
    DEFAULT_SET_NAME,
    GRID_VARIANCE,
    SPHERE_JITTER,
    TETRAHEDRON_SETS,
    JitterSettings,
    jitter_settings,
)
from .metric_info import FLT_MAX, ComplexityMetricInfo, MeshLayer, MeshLayerDebugInfo

ComputeFunc = Callable[[JitterSettings, AABB], Sequence[float]]

_ESTIMATES_TO_KEEP = 10


def adjust_outliers(
    data: Sequence[float], lower_percentile: float, upper_percentile: float
) -> list[float]:
    """Return a copy of ``data`` with values beyond the percentile thresholds pulled in.

    Values at or below the lower threshold become the next larger sorted
    value; values at or above the upper threshold become the next smaller one.
    """
    values = list(data)
    if not values:
        return values
    if lower_percentile == 0.0 and upper_percentile == 1.0:
        return values
    if lower_percentile > upper_percentile:
        raise ValueError("lower percentile must not exceed upper percentile")

    ordered = sorted(values)
    last = len(ordered) - 1
    lower_position = min(max(int(len(ordered) * lower_percentile), 0), last)
    upper_position = min(max(int(len(ordered) * upper_percentile), 0), last)
    if lower_position == upper_position:
        return values

    lower_value = ordered[lower_position]
    upper_value = ordered[upper_position]
    new_min = ordered[lower_position + 1]
    new_max = ordered[upper_position - 1]

    adjusted = []
    for value in values:
        if value <= lower_value and lower_percentile > 0.0:
            adjusted.append(new_min)
        elif value >= upper_value:
            adjusted.append(new_max)
        else:
            adjusted.append(value)
    return adjusted


def value_with_area_portion(
    data: Sequence[float], areas: Sequence[float], portion: float
) -> float:
    """Return the largest value whose own and all larger values' areas reach ``portion`` of the total.

    Returns ``FLT_MAX`` when there is no data or no positive total area.
    """
    if not data or not areas:
        return FLT_MAX
    pairs = sorted(zip(data, areas), key=lambda pair: pair[0])
    total = sum(area for _, area in pairs)
    if total <= 0.0:
        return FLT_MAX
    covered = 0.0
    for value, area in reversed(pairs):
        covered += area
        if covered >= total * portion:
            return value
    return FLT_MAX


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation of ``values``."""
    if not values:
        raise ValueError("standard deviation of an empty sequence")
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


def format_duration(milliseconds: int) -> str:
    """Render a duration as hours, minutes and seconds, omitting zero parts."""
    total_seconds = int(milliseconds) // 1000
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    text = ""
    if hours > 0:
        text += f"{hours} hours "
    if minutes > 0:
        text += f"{minutes} minutes "
    if seconds > 0:
        text += f"{seconds} seconds"
    return text


class JitterManager:
    """Runs a per-triangle computation on many jittered grids and averages the results."""

    def __init__(self, info: Optional[ComplexityMetricInfo] = None) -> None:
        self.info: Optional[ComplexityMetricInfo] = None
        self.resolution = 1.0
        self.lowest_resolution = -1.0
        self.highest_resolution = -1.0
        self.current_set_name = DEFAULT_SET_NAME
        self._debug_jitter_count: Optional[int] = None

        self.jitter_done_count = 0
        self.jitter_to_do_count = 4
        self.result: list[float] = []
        self.per_jitter_result: list[list[float]] = []
        self._counters: list[int] = []
        self.fallback_value = 1.0
        self._ignore_value: Optional[Callable[[float], bool]] = None
        self.last_used_settings: list[JitterSettings] = []

        self._start_callbacks: list[Callable[[], None]] = []
        self._end_callbacks: list[Callable[[MeshLayer], None]] = []

        self.start_time = 0
        self.last_time_took_ms = 0.0
        self._estimates: deque[int] = deque(maxlen=_ESTIMATES_TO_KEEP)
        self.approximate_time_to_finish_ms = 0

        if info is not None:
            self.on_mesh_update(info)

    # ----- configuration -------------------------------------------------

    def on_mesh_update(self, info: ComplexityMetricInfo) -> None:
        """Adopt a new mesh and derive the allowed resolution range from its size."""
        if info.mesh_data.aabb is None:
            raise ValueError("mesh has no bounding box")
        box = info.mesh_data.aabb.scaled(DEFAULT_GRID_SIZE + GRID_VARIANCE / 100.0)
        longest = box.longest_axis_length()
        self.info = info
        self.lowest_resolution = longest / 120
        self.highest_resolution = longest / 9
        self.resolution = self.lowest_resolution

    def set_resolution(self, value: float) -> float:
        """Set the cell size, clamped to the allowed range, and return it."""
        value = max(value, self.lowest_resolution)
        value = min(value, self.highest_resolution)
        self.resolution = value
        return value

    @property
    def debug_jitter_count(self) -> Optional[int]:
        return self._debug_jitter_count

    @debug_jitter_count.setter
    def debug_jitter_count(self, value: Optional[int]) -> None:
        if value is None or value == -1:
            self._debug_jitter_count = None
            return
        if not 0 < value < len(SPHERE_JITTER):
            raise ValueError(f"debug jitter count must be between 1 and {len(SPHERE_JITTER) - 1}")
        self._debug_jitter_count = value

    def set_ignore_value_function(self, func: Optional[Callable[[float], bool]]) -> None:
        """Values for which ``func`` returns True are left out of the average.

        The function is cleared after each calculation.
        """
        self._ignore_value = func

    def set_fallback_value(self, value: float) -> None:
        """Value used where every jitter's value was ignored; reset to 1.0 after each calculation."""
        self.fallback_value = value

    def add_start_callback(self, func: Callable[[], None]) -> None:
        self._start_callbacks.append(func)

    def add_end_callback(self, func: Callable[[MeshLayer], None]) -> None:
        self._end_callbacks.append(func)

    # ----- geometry ------------------------------------------------------

    def _require_info(self) -> ComplexityMetricInfo:
        if self.info is None or self.info.mesh_data.aabb is None:
            raise RuntimeError("no mesh is loaded")
        return self.info

    def aabb_for_jittered_grid(self, settings: JitterSettings, resolution: float) -> AABB:
        """Cubic grid box around the mesh, shifted by the settings in cells and scaled."""
        info = self._require_info()
        mesh_box = info.mesh_data.aabb
        transformed = mesh_box.scaled(settings.grid_scale).translated(info.position)
        half = transformed.longest_axis_length() / 2.0
        center: Vector3 = tuple(  # type: ignore[assignment]
            c + s * resolution
            for c, s in zip(
                mesh_box.center(), (settings.shift_x, settings.shift_y, settings.shift_z)
            )
        )
        return AABB(
            tuple(c - half for c in center),  # type: ignore[arg-type]
            tuple(c + half for c in center),  # type: ignore[arg-type]
        )

    # ----- calculation ---------------------------------------------------

    def _on_calculations_start(self) -> None:
        self.result = []
        self.per_jitter_result = []
        self.jitter_done_count = 0
        self._counters = []
        self.start_time = time.time_ns()
        self._estimates.clear()
        self.approximate_time_to_finish_ms = 0
        for callback in self._start_callbacks:
            if callback is not None:
                callback()

    def run(self, compute: ComputeFunc, smoother: bool = False) -> MeshLayer:
        """Run ``compute`` once per jitter and return the averaged layer.

        ``compute`` receives the jitter settings and the grid box and returns
        one value per triangle.
        """
        if compute is None:
            raise ValueError("compute function is required")
        self._require_info()
        self._on_calculations_start()

        if self.current_set_name not in TETRAHEDRON_SETS:
            self.current_set_name = DEFAULT_SET_NAME
        settings = jitter_settings(self.current_set_name, smoother)
        if self._debug_jitter_count is not None:
            settings = settings[: self._debug_jitter_count]
        self.jitter_to_do_count = len(settings)
        self.last_used_settings = list(settings)

        for current in settings:
            box = self.aabb_for_jittered_grid(current, self.resolution)
            self.accumulate(compute(current, box))

        return self._on_calculations_end()

    def accumulate(self, triangle_values: Sequence[float]) -> None:
        """Add one jitter's per-triangle values to the running result."""
        self.jitter_done_count += 1
        values = list(triangle_values)
        if not values:
            return
        if self.info is not None and len(values) != len(self.info.triangles):
            raise ValueError(
                f"got {len(values)} values for {len(self.info.triangles)} triangles"
            )
        if self.result and len(self.result) != len(values):
            raise ValueError("value count differs from earlier jitters")
        if not self.result:
            self.result = [0.0] * len(values)
        if not self._counters:
            self._counters = [0] * len(values)

        values = [self.fallback_value if math.isnan(v) else v for v in values]
        self.per_jitter_result.append(values)
        for index, value in enumerate(values):
            if self._ignore_value is not None and self._ignore_value(value):
                continue
            self.result[index] += value
            self._counters[index] += 1

        if self.jitter_done_count == self.jitter_to_do_count:
            self.result = [
                total / count if count else self.fallback_value
                for total, count in zip(self.result, self._counters)
            ]
        self._update_time_estimate()

    def _update_time_estimate(self) -> None:
        if self.jitter_done_count >= self.jitter_to_do_count:
            self.approximate_time_to_finish_ms = 0
            return
        elapsed_ms = (time.time_ns() - self.start_time) // 1_000_000
        steps_left = self.jitter_to_do_count - self.jitter_done_count
        per_step = elapsed_ms / self.jitter_done_count
        self._estimates.append(int(per_step * steps_left))
        self.approximate_time_to_finish_ms = sum(self._estimates) // len(self._estimates)

    def _on_calculations_end(self) -> MeshLayer:
        self._ignore_value = None
        self.fallback_value = 1.0

        layer = MeshLayer(values=self.result)
        debug = MeshLayerDebugInfo(type="JitterMeshLayerDebugInfo")
        debug.add_entry("Start time", self.start_time, "uint64_t")
        debug.add_entry("End time", time.time_ns(), "uint64_t")
        debug.add_entry("Jitter count", self.jitter_done_count, "int")
        debug.add_entry("Resolution used", f"{self.resolution:f} m.", "std::string")
        layer.debug_info = debug

        self.last_time_took_ms = (time.time_ns() - self.start_time) / 1e6

        for callback in self._end_callbacks:
            if callback is not None:
                callback(layer)

        for number, used in enumerate(self.last_used_settings):
            debug.add_entry(f"Jitter {number} ShiftX", used.shift_x, "float")
            debug.add_entry(f"Jitter {number} ShiftY", used.shift_y, "float")
            debug.add_entry(f"Jitter {number} ShiftZ", used.shift_z, "float")
            debug.add_entry(f"Jitter {number} GridScale", used.grid_scale, "float")
        return layer

    # ----- reporting -----------------------------------------------------

    def progress(self) -> float:
        """Fraction of jitters done, at most 1.0."""
        if self.jitter_to_do_count <= 0:
            return 0.0
        return min(self.jitter_done_count / self.jitter_to_do_count, 1.0)

    @property
    def time_to_finish_seconds(self) -> int:
        return int(self.approximate_time_to_finish_ms // 1000)

    @property
    def time_to_finish_formatted(self) -> str:
        return format_duration(self.approximate_time_to_finish_ms)

    def produce_standard_deviation_data(self) -> list[float]:
        """Per-triangle standard deviation over the jitters of the last run."""
        if self.info is None or not self.per_jitter_result:
            return []
        runs = self.per_jitter_result[: self.jitter_to_do_count]
        return [
            standard_deviation([run[index] for run in runs])
            for index in range(len(self.info.triangles))
        ]