"""Predefined grid-jitter offsets used when averaging results over shifted grids."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_GRID_SIZE = 1.25
GRID_VARIANCE = 25
DEFAULT_SET_NAME = "55"

SHIFT_FACTOR = 1.3
SCALE_FACTOR = 1.2

Row = tuple[float, float, float, float]

PSEUDO_RANDOM_64: tuple[Row, ...] = (
    (0.30, 0.10, 0.02, 1.43),
    (0.45, 0.13, 0.09, 1.41),
    (0.41, -0.31, 0.30, 1.39),
    (0.34, 0.13, 0.47, 1.33),
    (-0.39, 0.06, -0.44, 1.40),
    (-0.35, -0.02, 0.38, 1.34),
    (-0.30, 0.48, -0.50, 1.28),
    (-0.39, 0.06, 0.37, 1.29),
    (-0.12, 0.27, 0.30, 1.30),
    (0.03, -0.06, -0.29, 1.41),
    (-0.24, -0.13, -0.13, 1.25),
    (0.22, -0.32, 0.16, 1.30),
    (-0.36, -0.01, -0.19, 1.27),
    (-0.20, -0.22, -0.14, 1.44),
    (0.34, -0.10, -0.06, 1.28),
    (-0.21, 0.29, 0.09, 1.27),
    (0.13, 0.01, 0.18, 1.25),
    (0.09, 0.46, 0.35, 1.46),
    (-0.50, -0.09, 0.32, 1.25),
    (-0.20, 0.08, -0.32, 1.26),
    (-0.39, -0.44, 0.42, 1.41),
    (0.26, -0.04, 0.40, 1.44),
    (-0.02, -0.01, 0.29, 1.40),
    (-0.02, -0.37, 0.28, 1.39),
    (0.24, -0.32, -0.29, 1.41),
    (-0.10, 0.36, -0.11, 1.42),
    (-0.27, -0.49, 0.47, 1.25),
    (-0.45, 0.39, -0.31, 1.28),
    (0.44, -0.29, -0.36, 1.46),
    (0.00, -0.05, -0.37, 1.40),
    (-0.06, 0.12, 0.43, 1.27),
    (-0.49, 0.41, 0.15, 1.27),
    (-0.50, 0.37, -0.04, 1.39),
    (0.38, -0.21, 0.04, 1.32),
    (0.28, 0.34, -0.43, 1.27),
    (-0.41, -0.45, 0.33, 1.43),
    (-0.18, -0.37, 0.07, 1.28),
    (-0.11, -0.31, 0.40, 1.30),
    (-0.06, 0.27, 0.24, 1.32),
    (-0.39, 0.48, 0.18, 1.26),
    (-0.39, 0.10, 0.07, 1.33),
    (-0.26, -0.23, 0.45, 1.43),
    (0.48, 0.08, -0.14, 1.47),
    (0.33, -0.38, -0.35, 1.31),
    (0.18, 0.20, -0.33, 1.49),
    (-0.23, -0.11, 0.07, 1.25),
    (0.19, -0.23, -0.33, 1.48),
    (0.48, 0.15, 0.29, 1.41),
    (-0.21, 0.24, 0.18, 1.32),
    (0.45, -0.23, 0.24, 1.48),
    (0.40, 0.37, -0.06, 1.45),
    (0.08, -0.50, 0.20, 1.37),
    (-0.24, -0.38, 0.44, 1.43),
    (-0.23, -0.21, 0.24, 1.39),
    (-0.32, -0.05, 0.33, 1.37),
    (-0.03, -0.47, -0.32, 1.48),
    (0.32, 0.16, 0.46, 1.46),
    (0.27, 0.43, 0.41, 1.38),
    (0.24, -0.47, -0.19, 1.43),
    (0.48, -0.42, -0.24, 1.49),
    (-0.40, -0.27, 0.06, 1.45),
    (0.28, 0.43, -0.01, 1.49),
    (-0.19, 0.11, -0.10, 1.45),
    (-0.21, -0.04, 0.34, 1.44),
)

_CENTER: tuple[Row, ...] = ((0.0, 0.0, 0.0, 1.0),)

_AXES: tuple[Row, ...] = (
    (0.0, 1.0, 0.0, 1.0),
    (1.0, 0.0, 0.0, 1.0),
    (0.0, 0.0, -1.0, 1.0),
    (-1.0, 0.0, 0.0, 1.0),
    (0.0, 0.0, 1.0, 1.0),
    (0.0, -1.0, 0.0, 1.0),
)

_EDGES: tuple[Row, ...] = (
    (0.70711, 0.70711, 0.0, 1.0),
    (0.0, 0.70711, -0.70711, 1.0),
    (-0.70711, 0.70711, 0.0, 1.0),
    (0.0, 0.70711, 0.70711, 1.0),
    (0.70711, -0.70711, 0.0, 1.0),
    (0.0, -0.70711, -0.70711, 1.0),
    (-0.70711, -0.70711, 0.0, 1.0),
    (0.0, -0.70711, 0.70711, 1.0),
    (0.70711, 0.0, -0.70711, 1.0),
    (-0.70711, 0.0, -0.70711, 1.0),
    (-0.70711, 0.0, 0.70711, 1.0),
    (0.70711, 0.0, 0.70711, 1.0),
)

TETRAHEDRON_1: tuple[Row, ...] = _CENTER

TETRAHEDRON_7: tuple[Row, ...] = _CENTER + _AXES

TETRAHEDRON_13: tuple[Row, ...] = _CENTER + _AXES + (
    (0.0, 0.70711, 0.70711, 1.0),
    (0.70711, 0.5, -0.5, 1.0),
    (-0.70711, 0.5, -0.5, 1.0),
    (-0.70711, -0.5, 0.5, 1.0),
    (0.70711, -0.5, 0.5, 1.0),
    (0.0, -0.70711, -0.70711, 1.0),
)

TETRAHEDRON_25: tuple[Row, ...] = _CENTER + _AXES + _EDGES + (
    (-0.00537, 0.45959, 0.45962, 1.0),
    (0.45579, 0.33035, -0.32500, 1.0),
    (-0.46338, 0.31961, -0.32500, 1.0),
    (-0.45579, -0.33035, 0.32500, 1.0),
    (0.46338, -0.31961, 0.32500, 1.0),
    (0.00537, -0.45959, -0.45962, 1.0),
)

TETRAHEDRON_37: tuple[Row, ...] = _CENTER + _AXES + _EDGES + (
    (0.04654, 0.37805, 0.32391, 1.0),
    (0.25692, 0.26041, -0.34085, 1.0),
    (-0.42641, 0.19816, -0.17001, 1.0),
    (-0.25692, -0.26041, 0.34085, 1.0),
    (0.42641, -0.19816, 0.17001, 1.0),
    (-0.04654, -0.37805, -0.32391, 1.0),
    (0.21458, 0.45146, -0.01198, 1.0),
    (-0.26861, 0.40744, 0.10882, 1.0),
    (-0.14876, 0.08318, 0.47005, 1.0),
    (0.33443, 0.12720, 0.34926, 1.0),
    (0.14876, -0.08318, -0.47005, 1.0),
    (-0.33443, -0.12720, -0.34926, 1.0),
    (-0.21458, -0.45146, 0.01198, 1.0),
    (0.26861, -0.40744, -0.10882, 1.0),
    (-0.11985, 0.32426, -0.36124, 1.0),
    (-0.48319, -0.04401, 0.12080, 1.0),
    (0.11985, -0.32426, 0.36124, 1.0),
    (0.48319, 0.04401, -0.12080, 1.0),
)

TETRAHEDRON_55: tuple[Row, ...] = _CENTER + _AXES + _EDGES + (
    (0.06143, 0.49902, 0.42756, 1.0),
    (0.33913, 0.34374, -0.44992, 1.0),
    (-0.56286, 0.26158, -0.22442, 1.0),
    (-0.33913, -0.34374, 0.44992, 1.0),
    (0.56286, -0.26158, 0.22442, 1.0),
    (-0.06143, -0.49902, -0.42756, 1.0),
    (0.28324, 0.59592, -0.01582, 1.0),
    (-0.35456, 0.53782, 0.14364, 1.0),
    (-0.19636, 0.10980, 0.62047, 1.0),
    (0.44144, 0.16790, 0.46102, 1.0),
    (0.19636, -0.10980, -0.62047, 1.0),
    (-0.44144, -0.16790, -0.46102, 1.0),
    (-0.28324, -0.59592, 0.01582, 1.0),
    (0.35456, -0.53782, -0.14364, 1.0),
    (-0.15820, 0.42802, -0.47683, 1.0),
    (-0.63781, -0.05810, 0.15946, 1.0),
    (0.15820, -0.42802, 0.47683, 1.0),
    (0.63781, 0.05810, -0.15946, 1.0),
    (0.00360, 0.23247, 0.23419, 1.0),
    (0.25790, 0.14413, -0.14702, 1.0),
    (-0.20586, 0.18463, -0.18010, 1.0),
    (-0.25790, -0.14413, 0.14702, 1.0),
    (0.20586, -0.18463, 0.18010, 1.0),
    (-0.00360, -0.23247, -0.23419, 1.0),
    (0.18490, 0.26629, 0.06164, 1.0),
    (-0.14302, 0.29493, 0.03825, 1.0),
    (-0.17982, 0.06246, 0.26956, 1.0),
    (0.14810, 0.03383, 0.29295, 1.0),
    (0.17982, -0.06246, -0.26956, 1.0),
    (-0.14810, -0.03383, -0.29295, 1.0),
    (-0.18490, -0.26629, -0.06164, 1.0),
    (0.14302, -0.29493, -0.03825, 1.0),
    (0.03680, 0.23247, -0.23131, 1.0),
    (-0.32792, 0.02864, -0.02339, 1.0),
    (-0.03680, -0.23247, 0.23131, 1.0),
    (0.32792, -0.02864, 0.02339, 1.0),
)

TETRAHEDRON_73: tuple[Row, ...] = _CENTER + _AXES + _EDGES + (
    (0.06981, 0.56707, 0.48586, 1.0),
    (0.38538, 0.39061, -0.51128, 1.0),
    (-0.63962, 0.29724, -0.25502, 1.0),
    (-0.38538, -0.39061, 0.51128, 1.0),
    (0.63962, -0.29724, 0.25502, 1.0),
    (-0.06981, -0.56707, -0.48586, 1.0),
    (0.32187, 0.67718, -0.01797, 1.0),
    (-0.40291, 0.61116, 0.16323, 1.0),
    (-0.22314, 0.12477, 0.70508, 1.0),
    (0.50164, 0.19079, 0.52388, 1.0),
    (0.22314, -0.12477, -0.70508, 1.0),
    (-0.50164, -0.19079, -0.52388, 1.0),
    (-0.32187, -0.67718, 0.01797, 1.0),
    (0.40291, -0.61116, -0.16323, 1.0),
    (-0.17977, 0.48639, -0.54185, 1.0),
    (-0.72478, -0.06602, 0.18120, 1.0),
    (0.17977, -0.48639, 0.54185, 1.0),
    (0.72478, 0.06602, -0.18120, 1.0),
    (0.00545, 0.35222, 0.35484, 1.0),
    (0.39075, 0.21838, -0.22276, 1.0),
    (-0.31190, 0.27974, -0.27288, 1.0),
    (-0.39075, -0.21838, 0.22276, 1.0),
    (0.31190, -0.27974, 0.27288, 1.0),
    (-0.00545, -0.35222, -0.35484, 1.0),
    (0.28016, 0.40347, 0.09339, 1.0),
    (-0.21670, 0.44686, 0.05795, 1.0),
    (-0.27245, 0.09464, 0.40843, 1.0),
    (0.22440, 0.05125, 0.44387, 1.0),
    (0.27245, -0.09464, -0.40843, 1.0),
    (-0.22440, -0.05125, -0.44387, 1.0),
    (-0.28016, -0.40347, -0.09339, 1.0),
    (0.21670, -0.44686, -0.05795, 1.0),
    (0.05576, 0.35222, -0.35047, 1.0),
    (-0.49685, 0.04339, -0.03544, 1.0),
    (-0.05576, -0.35222, 0.35047, 1.0),
    (0.49685, -0.04339, 0.03544, 1.0),
    (0.04625, 0.08012, 0.23225, 1.0),
    (0.18067, 0.14906, -0.08740, 1.0),
    (-0.16649, 0.18401, -0.03033, 1.0),
    (-0.18067, -0.14906, 0.08740, 1.0),
    (0.16649, -0.18401, 0.03033, 1.0),
    (-0.04625, -0.08012, -0.23225, 1.0),
    (0.16046, 0.16206, 0.10243, 1.0),
    (-0.08502, 0.18677, 0.14278, 1.0),
    (-0.09505, -0.04875, 0.22603, 1.0),
    (0.15043, -0.07346, 0.18567, 1.0),
    (0.09505, 0.04875, -0.22603, 1.0),
    (-0.15043, 0.07346, -0.18567, 1.0),
    (-0.16046, -0.16206, -0.10243, 1.0),
    (0.08502, -0.18677, -0.14278, 1.0),
    (0.01003, 0.23552, -0.08324, 1.0),
    (-0.24548, 0.02472, 0.04036, 1.0),
    (-0.01003, -0.23552, 0.08324, 1.0),
    (0.24548, -0.02472, -0.04036, 1.0),
)

TETRAHEDRON_SETS: dict[str, tuple[Row, ...]] = {
    "1": TETRAHEDRON_1,
    "7": TETRAHEDRON_7,
    "13": TETRAHEDRON_13,
    "25": TETRAHEDRON_25,
    "37": TETRAHEDRON_37,
    "55": TETRAHEDRON_55,
    "73": TETRAHEDRON_73,
}

SPHERE_JITTER: tuple[Row, ...] = (
    (0.0, 1.0, 0.0, 1.43),
    (1.0, 0.0, 0.0, 1.41),
    (0.0, 0.0, -1.0, 1.39),
    (-1.0, 0.0, 0.0, 1.33),
    (0.0, 0.0, 1.0, 1.40),
    (0.0, -1.0, 0.0, 1.34),
    (0.5, 0.8660, 0.0, 1.28),
    (0.8660, 0.5, 0.0, 1.29),
    (0.0, 0.8660, -0.5, 1.30),
    (0.0, 0.5, -0.8660, 1.41),
    (-0.5, 0.8660, 0.0, 1.25),
    (-0.8660, 0.5, 0.0, 1.30),
    (0.0, 0.8660, 0.5, 1.27),
    (0.0, 0.5, 0.8660, 1.44),
    (0.5, -0.8660, 0.0, 1.28),
    (0.8660, -0.5, 0.0, 1.27),
    (0.0, -0.8660, -0.5, 1.25),
    (0.0, -0.5, -0.8660, 1.46),
    (-0.5, -0.8660, 0.0, 1.25),
    (-0.8660, -0.5, 0.0, 1.26),
    (0.0, -0.8660, 0.5, 1.41),
    (0.0, -0.5, 0.8660, 1.44),
    (0.8660, 0.0, -0.5, 1.40),
    (0.5, 0.0, -0.8660, 1.39),
    (-0.5, 0.0, -0.8660, 1.41),
    (-0.8660, 0.0, -0.5, 1.42),
    (-0.8660, 0.0, 0.5, 1.25),
    (-0.5, 0.0, 0.8660, 1.28),
    (0.5, 0.0, 0.8660, 1.46),
    (0.8660, 0.0, 0.5, 1.40),
    (0.5477, 0.6325, -0.5477, 1.27),
    (-0.5477, 0.6325, -0.5477, 1.27),
    (-0.5477, 0.6325, 0.5477, 1.39),
    (0.5477, 0.6325, 0.5477, 1.32),
    (0.5477, -0.6325, -0.5477, 1.27),
    (-0.5477, -0.6325, -0.5477, 1.43),
    (-0.5477, -0.6325, 0.5477, 1.28),
    (0.5477, -0.6325, 0.5477, 1.30),
    (0.0, 0.5, 0.0, 1.32),
    (0.4714, -0.1667, 0.0, 1.26),
    (-0.2357, -0.1667, -0.4082, 1.33),
    (-0.2357, -0.1667, 0.4082, 1.43),
    (0.2973, 0.4020, 0.0, 1.47),
    (0.4781, 0.1463, 0.0, 1.31),
    (-0.1487, 0.4020, -0.2575, 1.49),
    (-0.2391, 0.1463, -0.4140, 1.25),
    (-0.1487, 0.4020, 0.2575, 1.48),
    (-0.2391, 0.1463, 0.4140, 1.41),
    (0.3294, -0.2742, -0.2575, 1.32),
    (0.0583, -0.2742, -0.4140, 1.48),
    (0.3294, -0.2742, 0.2575, 1.45),
    (0.0583, -0.2742, 0.4140, 1.37),
    (-0.3877, -0.2742, -0.1565, 1.43),
    (-0.3877, -0.2742, 0.1565, 1.39),
    (0.2132, 0.2611, -0.3693, 1.37),
    (-0.4264, 0.2611, 0.0, 1.48),
    (0.2132, 0.2611, 0.3693, 1.46),
    (0.1040, -0.4891, 0.0, 1.38),
)


@dataclass
class JitterSettings:
    """Offset of a grid, in cells, and its scale relative to the mesh box."""

    shift_x: float = 0.0
    shift_y: float = 0.0
    shift_z: float = 0.0
    grid_scale: float = 2.5


def jitter_set_names() -> list[str]:
    """Names of the selectable jitter sets, in display order."""
    return list(TETRAHEDRON_SETS)


def jitter_settings(name: str, smoother: bool = False) -> list[JitterSettings]:
    """Return the scaled jitter settings for a set.

    Unknown names fall back to the default set. With ``smoother`` the
    pseudo-random set of 64 jitters is used instead.
    """
    if smoother:
        rows = PSEUDO_RANDOM_64
    else:
        rows = TETRAHEDRON_SETS.get(name, TETRAHEDRON_SETS[DEFAULT_SET_NAME])
    return [
        JitterSettings(
            x * SHIFT_FACTOR,
            y * SHIFT_FACTOR,
            z * SHIFT_FACTOR,
            scale * SCALE_FACTOR,
        )
        for x, y, z, scale in rows
    ]