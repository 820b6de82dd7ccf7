# habicat

Tools for measuring the surface complexity of triangle meshes.

A mesh is loaded into a `ComplexityMetricInfo`. It keeps the triangles,
their areas, their centroids and the per-vertex normals of each triangle.
Per-triangle values are stored as `MeshLayer` objects. The mesh and its
layers can be written to a binary RUG file.

## Installing

```
pip install .
```

To run the tests, install the test extra with `pip install .[test]` and then
run `pytest`.

## Using it

```python
from habicat.metric_manager import ComplexityMetricManager

vertices = [0.0, 0.0, 0.0,  1.0, 0.0, 0.0,  0.0, 1.0, 0.0]
normals = [0.0, 0.0, 1.0] * 3
indices = [0, 1, 2]

manager = ComplexityMetricManager()
info = manager.init(vertices, [], [], [], indices, normals)

print(info.total_area)                    # 0.5
print(info.update_average_normal())       # (0.0, 0.0, 1.0)

path = manager.save_to_rug_file("surface")   # writes surface.rug
```

`save_to_rug_file` adds `.rug` when the path does not already contain it,
and it returns the path it wrote. It raises `ValueError` when the path is
empty and `RuntimeError` when no mesh is loaded. `write_rug(info, stream)`
writes the same data to any open binary stream.

`add_load_callback(func)` registers a function, and `notify_loaded()` calls
the registered functions in the order they were added.

### Geometry

`habicat.geometry` provides `triangle_area`, `normalize` and the frozen
`AABB` box. The box has `from_flat`, `center`, `size`,
`longest_axis_length`, `scaled` and `translated`.

### Layers

`MeshLayer(parent, values)` takes one value per triangle. From these values
it works out `min`, `max`, `mean`, `median`, `min_visible` and
`max_visible`. `max_visible` is the value found 85% of the way up the
sorted list. It also builds `value_area_index`, the (value, area, index)
tuples sorted by value.

`ComplexityMetricInfo.add_layer` accepts either a `MeshLayer` or a plain
sequence of values, and returns the attached layer. If the number of values
does not match the number of triangles, it raises `ValueError`.

`fill_raw_data()` copies each triangle's value onto the three coordinates
of every one of its vertices. `set_selected_range(low, high)` clamps both
bounds to the range 0–1. Each layer has a `type` taken from the `LayerType`
enum.

### Debug information

A layer can carry a `MeshLayerDebugInfo`. `add_entry(name, value, kind)`
stores one value as raw little-endian bytes. The allowed kinds are:

- `bool`
- `int`
- `float`
- `double`
- `uint64_t` (a nanosecond timestamp, shown as a UTC date)
- `std::string`

If you leave out the kind, it is taken from the Python type of the value: a
bool, an int (stored as `int`), a float (stored as `double`) or a str.

`to_string()` lists the entries, one per line. `to_file(stream)` and
`from_file(stream)` write and read the entries in the layout used inside
RUG files.

### Jittered measurement

`habicat.jitter.JitterManager` runs a per-triangle measurement once for
each jitter in a set and averages the results.

Setting up the manager:

- Give it a mesh, either in the constructor or with `on_mesh_update(info)`.
  This sets the allowed resolution range from the size of the mesh.
- `set_resolution` clamps the grid cell size to that range.

Running a measurement:

1. Call `run(compute, smoother=False)`.
2. `run` calls `compute(settings, box)` once per jitter. Here `settings` is
   a `JitterSettings` and `box` is the jittered grid box from
   `aabb_for_jittered_grid`. `compute` must return one value per triangle.
3. `run` returns a new `MeshLayer` of averaged values, with a
   `JitterMeshLayerDebugInfo` attached.

How the averaging treats values:

- NaN values are replaced by the fallback value, which is 1.0 unless you set
  it with `set_fallback_value`.
- Values for which the function set by `set_ignore_value_function` returns
  true are left out of the average.
- A triangle whose values were all left out receives the fallback value.
- The ignore function and the fallback value are reset after each run.

Reporting and callbacks:

- `add_start_callback` and `add_end_callback` register functions that are
  called when a run starts and ends.
- `progress()` returns the fraction of jitters done.
- `time_to_finish_seconds` and `time_to_finish_formatted` give the
  estimated time left.
- `produce_standard_deviation_data()` returns, for each triangle, the
  standard deviation of its values across the jitters of the last run.

The jitter sets come from `habicat.jitter_sets`:

- `jitter_set_names()` returns `"1"`, `"7"`, `"13"`, `"25"`, `"37"`, `"55"`
  and `"73"`.
- `jitter_settings(name, smoother)` returns that set's shifts multiplied by
  1.3 and its grid scales multiplied by 1.2.
- An unknown name uses set `"55"`.
- With `smoother` set, it uses a fixed pseudo-random set of 64 jitters
  instead.

Helper functions in `habicat.jitter`:

- `adjust_outliers` returns a copy with values past the percentile
  thresholds pulled in.
- `value_with_area_portion` returns the value at which the larger values
  cover a given portion of the total area.
- `standard_deviation` returns the population standard deviation.
- `format_duration` formats milliseconds as hours, minutes and seconds.

## What it does not do

- It does not read OBJ files or read RUG files back. Meshes are passed in as
  flat vertex, index and normal lists.
- It has no measurement grid of its own and no built-in metrics such as
  rugosity or fractal dimension. The per-triangle computation is supplied
  by the caller through `JitterManager.run`.
- It has no command-line tool, no viewer and no graphical interface.