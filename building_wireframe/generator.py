"""Procedural wireframe generator for multi-storey buildings.

All coordinate math is done here; the result is a flat tuple of
:class:`~building_wireframe.models.Primitive` box outlines that a renderer
turns into line geometry.  Nothing is drawn or stored.

Coordinates are Y-up with the building centred on the origin: ``+z`` is the
front wall, ``-z`` the back, ``-x`` the left and ``+x`` the right.  Floor 0
starts at ``y = 0``; the base stack hangs below it.

Opposite walls are never computed twice: back parts come from their front
counterpart, and one side of each left/right pair from the other, via
:func:`_mirror`, which reflects exactly one coordinate about the centreline.
"""

from __future__ import annotations

import math
from dataclasses import replace

from .helpers.construction import (
    OUTLINE_COLOR,
    BASE_MIDDLE_INSET,
    BASE_MIDDLE_HEIGHT_RATIO,
    BASE_TOP_INSET,
    BASE_TOP_HEIGHT_RATIO,
    BASE_TOP_OFFSET_RATIO,
    SIDE_COLUMN_RATIO,
    COLUMN_FOOT_SCALE,
    COLUMN_FOOT_HEIGHT_RATIO,
    COLUMN_FOOT_OFFSET_RATIO,
    COLUMN_SHAFT_HEIGHT_RATIO,
    COLUMN_SHAFT_OFFSET_RATIO,
    COLUMN_CAPITAL_SCALE,
    COLUMN_CAPITAL_HEIGHT_RATIO,
    COLUMN_CAPITAL_OFFSET_RATIO,
    CORNER_SIZE_RATIO,
    CORNER_HEIGHT_RATIO,
    CORNER_OFFSET_RATIO,
    WINDOW_FRAME_MARGIN,
    WINDOW_FRAME_THICKNESS,
    WINDOW_PANE_THICKNESS,
    WINDOW_MULLION,
    DIVIDER_BAND_OVERHANG_RATIO,
    DIVIDER_BAND_HEIGHT_RATIO,
    DIVIDER_BAND_OFFSET_RATIO,
    ACCENT_COUNT_FRONT,
    ACCENT_COUNT_SIDE,
    ACCENT_THICKNESS_RATIO,
    ACCENT_HEIGHT_RATIO,
    center_offset,
    even_positions,
    reflect,
    run_positions,
    stack_center,
    window_positions,
)
from .models import BaseConfig, BuildingConfig, FloorConfig, Primitive, RoofConfig

X, Y, Z = 0, 1, 2


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _box(
    name: str, kind: str,
    cx: float, cy: float, cz: float,
    w: float, h: float, d: float,
) -> Primitive:
    return Primitive(name, kind, (w, h, d), (cx, cy, cz), OUTLINE_COLOR)


def _mirror(prim: Primitive, axis: int, name: str) -> Primitive:
    """Return *prim* reflected across the centreline on *axis*, renamed."""
    position = list(prim.position)
    position[axis] = reflect(position[axis])
    return replace(prim, name=name, position=tuple(position))


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _build_base(base: BaseConfig) -> list[Primitive]:
    """Platform, middle layer and top trim, narrowing as they rise."""
    bh = base.height
    return [
        _box("Base_Platform", "base_platform",
             0.0, -bh / 2.0, 0.0,
             base.width, bh, base.depth),
        _box("Base_Middle", "base_middle",
             0.0, 0.0, 0.0,
             base.width - BASE_MIDDLE_INSET, bh * BASE_MIDDLE_HEIGHT_RATIO,
             base.depth - BASE_MIDDLE_INSET),
        _box("Base_TopTrim", "base_trim",
             0.0, bh * BASE_TOP_OFFSET_RATIO, 0.0,
             base.width - BASE_TOP_INSET, bh * BASE_TOP_HEIGHT_RATIO,
             base.depth - BASE_TOP_INSET),
    ]


def _build_column(name: str, x: float, z: float, base: BaseConfig) -> list[Primitive]:
    """Foot, shaft and capital of one column at (x, z)."""
    cw, cd, bh = base.columns.width, base.columns.depth, base.height
    return [
        _box(f"{name}_Foot", "column_foot",
             x, bh * COLUMN_FOOT_OFFSET_RATIO, z,
             cw * COLUMN_FOOT_SCALE, bh * COLUMN_FOOT_HEIGHT_RATIO, cd * COLUMN_FOOT_SCALE),
        _box(f"{name}_Shaft", "column_shaft",
             x, bh * COLUMN_SHAFT_OFFSET_RATIO, z,
             cw, bh * COLUMN_SHAFT_HEIGHT_RATIO, cd),
        _box(f"{name}_Capital", "column_capital",
             x, bh * COLUMN_CAPITAL_OFFSET_RATIO, z,
             cw * COLUMN_CAPITAL_SCALE, bh * COLUMN_CAPITAL_HEIGHT_RATIO, cd * COLUMN_CAPITAL_SCALE),
    ]


def _build_columns(base: BaseConfig) -> list[Primitive]:
    """Column rows around the base: front, right, back, left.

    Front/back rows run along X at ``z = ±depth/2``; right/left rows run
    along Z at ``x = ±width/2`` with three quarters of the count.
    """
    cols = base.columns
    if not cols.enabled:
        return []

    front_count = cols.count
    side_count = math.floor(cols.count * SIDE_COLUMN_RATIO)
    half_w = center_offset(base.width)
    half_d = center_offset(base.depth)

    front: list[Primitive] = []
    for i, x in enumerate(even_positions(base.width, cols.width, front_count)):
        front.extend(_build_column(f"Column_Front{i}", x, half_d, base))

    right: list[Primitive] = []
    for i, z in enumerate(even_positions(base.depth, cols.width, side_count)):
        right.extend(_build_column(f"Column_Right{i}", half_w, z, base))

    back = [_mirror(p, Z, p.name.replace("_Front", "_Back", 1)) for p in front]
    left = [_mirror(p, X, p.name.replace("_Right", "_Left", 1)) for p in right]
    return front + right + back + left


def _build_corners(base: BaseConfig) -> list[Primitive]:
    """Square blocks tucked into the four base corners."""
    size = base.columns.width * CORNER_SIZE_RATIO
    h = base.height * CORNER_HEIGHT_RATIO
    cy = base.height * CORNER_OFFSET_RATIO
    inset_x = center_offset(base.width) - size / 2.0
    inset_z = center_offset(base.depth) - size / 2.0

    created: list[Primitive] = []
    for i in range(4):
        x_sign = 1 if i % 2 == 0 else -1
        z_sign = 1 if i < 2 else -1
        created.append(_box(
            f"Corner{i}", "corner",
            x_sign * inset_x, cy, z_sign * inset_z,
            size, h, size,
        ))
    return created


def _window_parts(
    prefix: str, cx: float, cy: float, cz: float,
    ww: float, wh: float, facing_z: bool,
) -> list[Primitive]:
    """Frame, pane and the two mullions of one window.

    *facing_z* windows sit on the front/back walls (thin along Z); the
    others sit on the side walls with width running along Z.
    """
    frame_w, frame_h = ww + WINDOW_FRAME_MARGIN, wh + WINDOW_FRAME_MARGIN
    m = WINDOW_MULLION
    if facing_z:
        sizes = [
            (frame_w, frame_h, WINDOW_FRAME_THICKNESS),
            (ww, wh, WINDOW_PANE_THICKNESS),
            (m, wh, m),
            (ww, m, m),
        ]
    else:
        sizes = [
            (WINDOW_FRAME_THICKNESS, frame_h, frame_w),
            (WINDOW_PANE_THICKNESS, wh, ww),
            (m, wh, m),
            (m, m, ww),
        ]
    parts = ("Frame", "Pane", "MullionV", "MullionH")
    kinds = ("window_frame", "window_pane", "window_mullion", "window_mullion")
    return [
        _box(f"{prefix}_{part}", kind, cx, cy, cz, *size)
        for part, kind, size in zip(parts, kinds, sizes)
    ]


def _build_windows(
    index: int, config: BuildingConfig, floor: FloorConfig,
) -> list[Primitive]:
    win = floor.windows
    cy = index * config.floor_height + win.height / 2.0
    half_w = center_offset(config.width)
    half_d = center_offset(config.depth)
    prefix = f"Floor{index}"

    created: list[Primitive] = []
    for j, x in enumerate(window_positions(config.width, win.width, win.spacing, win.count_front)):
        front = _window_parts(f"{prefix}_WindowFront{j}", x, cy, half_d,
                              win.width, win.height, facing_z=True)
        created.extend(front)
        created.extend(_mirror(p, Z, p.name.replace("WindowFront", "WindowBack", 1)) for p in front)

    for j, z in enumerate(window_positions(config.depth, win.width, win.spacing, win.count_side)):
        left = _window_parts(f"{prefix}_WindowLeft{j}", -half_w, cy, z,
                             win.width, win.height, facing_z=False)
        created.extend(left)
        created.extend(_mirror(p, X, p.name.replace("WindowLeft", "WindowRight", 1)) for p in left)
    return created


def _build_divider(
    index: int, config: BuildingConfig, floor: FloorConfig,
) -> list[Primitive]:
    """Cornice band above floor *index* with its accent blocks."""
    div = floor.divider
    o, h = div.overhang, div.height
    cy = (index + 1) * config.floor_height
    prefix = f"Floor{index}_Divider"
    band_over = o * DIVIDER_BAND_OVERHANG_RATIO
    band_h = h * DIVIDER_BAND_HEIGHT_RATIO
    band_dy = h * DIVIDER_BAND_OFFSET_RATIO

    created = [
        _box(f"{prefix}_Main", "divider",
             0.0, cy, 0.0,
             config.width + o * 2, h, config.depth + o * 2),
        _box(f"{prefix}_Upper", "divider_band",
             0.0, cy + band_dy, 0.0,
             config.width + band_over, band_h, config.depth + band_over),
        _box(f"{prefix}_Lower", "divider_band",
             0.0, cy - band_dy, 0.0,
             config.width + band_over, band_h, config.depth + band_over),
    ]

    a_t = h * ACCENT_THICKNESS_RATIO
    a_h = h * ACCENT_HEIGHT_RATIO
    edge_x = center_offset(config.width) + o
    edge_z = center_offset(config.depth) + o

    front_spacing = (config.width + o) / (ACCENT_COUNT_FRONT - 1)
    for j, x in enumerate(run_positions(-edge_x, front_spacing, ACCENT_COUNT_FRONT)):
        accent = _box(f"{prefix}_AccentFront{j}", "divider_accent",
                      x, cy, edge_z, a_t, a_h, a_t)
        created.append(accent)
        created.append(_mirror(accent, Z, f"{prefix}_AccentBack{j}"))

    side_spacing = (config.depth + o) / (ACCENT_COUNT_SIDE - 1)
    for j, z in enumerate(run_positions(-edge_z, side_spacing, ACCENT_COUNT_SIDE)):
        accent = _box(f"{prefix}_AccentLeft{j}", "divider_accent",
                      -edge_x, cy, z, a_t, a_h, a_t)
        created.append(accent)
        created.append(_mirror(accent, X, f"{prefix}_AccentRight{j}"))
    return created


def _build_floors(config: BuildingConfig) -> list[Primitive]:
    created: list[Primitive] = []
    last = config.num_floors - 1
    for i, floor in enumerate(config.floors):
        created.append(_box(
            f"Floor{i}", "floor",
            0.0, i * config.floor_height, 0.0,
            config.width, config.floor_height, config.depth,
        ))
        created.extend(_build_windows(i, config, floor))
        if i < last and floor.divider.enabled:
            created.extend(_build_divider(i, config, floor))
    return created


def _build_roof(roof: RoofConfig, roof_base_y: float) -> list[Primitive]:
    """Roof slab, trim, stacked tower and the four parapets."""
    slab_top = roof_base_y + roof.height
    created = [
        _box("Roof", "roof",
             0.0, stack_center(roof_base_y, roof.height), 0.0,
             roof.width, roof.height, roof.depth),
        _box("Roof_Trim", "roof_trim",
             0.0, stack_center(slab_top, roof.trim.height), 0.0,
             roof.width + roof.trim.overhang * 2, roof.trim.height,
             roof.depth + roof.trim.overhang * 2),
    ]

    current_y = slab_top
    for name, stage in roof.tower.stages():
        created.append(_box(
            f"Tower_{name.capitalize()}", f"tower_{name}",
            0.0, stack_center(current_y, stage.height), 0.0,
            stage.width, stage.height, stage.depth,
        ))
        current_y += stage.height

    par = roof.parapet
    trim = par.top_trim
    wall_y = stack_center(slab_top, par.height)
    cap_y = stack_center(slab_top + par.height, trim.height)
    half_w = center_offset(roof.width)
    half_d = center_offset(roof.depth)

    front = [
        _box("Parapet_Front", "parapet",
             0.0, wall_y, half_d,
             roof.width, par.height, par.thickness),
        _box("Parapet_Front_Cap", "parapet_cap",
             0.0, cap_y, half_d,
             roof.width + trim.overhang * 2, trim.height, par.thickness + trim.overhang * 2),
    ]
    left = [
        _box("Parapet_Left", "parapet",
             -half_w, wall_y, 0.0,
             par.thickness, par.height, roof.depth),
        _box("Parapet_Left_Cap", "parapet_cap",
             -half_w, cap_y, 0.0,
             par.thickness + trim.overhang * 2, trim.height, roof.depth + trim.overhang * 2),
    ]
    created.extend(front)
    created.extend(_mirror(p, Z, p.name.replace("Front", "Back", 1)) for p in front)
    created.extend(left)
    created.extend(_mirror(p, X, p.name.replace("Left", "Right", 1)) for p in left)
    return created


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def generate(config: BuildingConfig) -> tuple[Primitive, ...]:
    """Expand *config* into the building's box outlines.

    Order is base, columns, corners, floors (windows, dividers), roof, and
    is identical for identical input.

    Raises:
        ConfigError: if *config* fails validation; nothing is generated.
    """
    # model_copy(update=...) skips validation, so check again here.
    config = BuildingConfig.parse(config)

    created: list[Primitive] = []
    created.extend(_build_base(config.base))
    created.extend(_build_columns(config.base))
    created.extend(_build_corners(config.base))
    created.extend(_build_floors(config))
    created.extend(_build_roof(config.roof, config.num_floors * config.floor_height))
    return tuple(created)
