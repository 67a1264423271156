"""Building wireframe tools.

``generate_building`` and ``check_placements`` are pure: they only run the
generator / collision checks and return JSON.  ``draw_building`` hands the
generated boxes to 3ds Max in a single MAXScript batch.

Generated geometry is Y-up; 3ds Max is Z-up, so a point ``(x, y, z)`` maps
to ``(x, -z, y)`` in the viewport.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from typing import Any, Sequence

from ..server import mcp, client
from ..generator import generate
from ..models import GRID_SIZE, BuildingConfig, ConfigError, Placement, PlacementError, Primitive
from ..placement import collision_flags, collision_pairs

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _safe_name(name: str) -> str:
    return name.replace("\\", "\\\\").replace('"', '\\"')


def _bounds(primitives: Sequence[Primitive]) -> dict[str, list[float]]:
    """Axis-aligned bounds enclosing every primitive (Y-up)."""
    lo = [min(p.position[a] - p.size[a] / 2.0 for p in primitives) for a in range(3)]
    hi = [max(p.position[a] + p.size[a] / 2.0 for p in primitives) for a in range(3)]
    return {
        "min": lo,
        "max": hi,
        "center": [(l + h) / 2.0 for l, h in zip(lo, hi)],
        "size": [h - l for l, h in zip(lo, hi)],
    }


def _to_max(
    position: Sequence[float], location: Sequence[float],
) -> tuple[float, float, float]:
    x, y, z = position
    lx, ly, lz = location
    return (lx + x, ly - z, lz + y)


def _box_command(prim: Primitive, prefix: str, location: Sequence[float]) -> str:
    """MAXScript lines creating one wirecolored Box for *prim*.

    Box pivot is at centre-bottom, so Z is shifted down by half the height.
    """
    w, h, d = prim.size
    mx, my, mz = _to_max(prim.position, location)
    r, g, b = prim.color
    safe = _safe_name(f"{prefix}_{prim.name}")
    return (
        f'b = Box name:"{safe}" length:{d} width:{w} height:{h} '
        f"pos:[{mx},{my},{mz - h / 2.0}] lengthsegs:1 widthsegs:1 heightsegs:1\n"
        f"b.wirecolor = color {r} {g} {b}\n"
        "append created b\n"
    )


def _draw_command(
    primitives: Sequence[Primitive], prefix: str, location: Sequence[float],
) -> str:
    """One MAXScript block: every box, then a Dummy parenting them all."""
    bounds = _bounds(primitives)
    cx, cy, cz = _to_max(bounds["center"], location)
    sx, sy, sz = bounds["size"]
    safe = _safe_name(prefix)
    lines = ["(", "local created = #()", "local b"]
    lines.extend(_box_command(p, prefix, location) for p in primitives)
    lines.append(
        f'local d = Dummy name:"{safe}" pos:[{cx},{cy},{cz}] boxsize:[{sx},{sz},{sy}]\n'
        "for c in created do c.parent = d\n"
        "d.name"
    )
    lines.append(")")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# MCP tools
# ---------------------------------------------------------------------------

@mcp.tool()
def generate_building(
    config: dict[str, Any] | None = None,
    include_primitives: bool = True,
) -> str:
    """Generate the wireframe boxes for one building.

    Args:
        config: Nested building parameters.  Omitted keys use the reference
            building (see the default-config resource).  Top-level keys:
            width, depth, floor_height, num_floors, floors (list or one
            mapping for every floor: windows{width, height, spacing,
            count_front, count_side}, divider{enabled, height, overhang},
            decorative_lines), base{width, depth, height, decorative_lines,
            columns{enabled, count, width, depth}}, roof{width, depth,
            height, trim{height, overhang}, tower{base, main, top, spire},
            parapet{height, thickness, top_trim{height, overhang}}}.
        include_primitives: Include the full primitive list (can be large).

    Returns:
        JSON with primitive count, counts per kind, overall bounds and the
        primitives ({name, kind, size [w,h,d], position [x,y,z], color}).
    """
    try:
        primitives = generate(BuildingConfig.from_dict(config))
    except ConfigError as exc:
        return json.dumps({"error": f"Invalid building config: {exc}"})

    result: dict[str, Any] = {
        "primitive_count": len(primitives),
        "counts": dict(Counter(p.kind for p in primitives)),
        "bounds": _bounds(primitives),
    }
    if include_primitives:
        result["primitives"] = [p.to_dict() for p in primitives]
    return json.dumps(result)


@mcp.tool()
def check_placements(
    placements: list[dict[str, Any]],
    grid_size: float = GRID_SIZE,
) -> str:
    """Check building footprints on the ground grid for overlaps.

    Two footprints collide when they overlap on both X and Z; touching edges
    do not count.

    Args:
        placements: List of {x, z, width?, depth?, id?}.  width/depth
            default to 1 grid cell.
        grid_size: Grid extent, used to report world positions (the grid
            is centred on the origin).

    Returns:
        JSON with per-placement collision flags and world positions, the
        colliding indices and the overlapping index pairs.
    """
    try:
        items = [Placement.from_dict(p, i) for i, p in enumerate(placements)]
    except PlacementError as exc:
        return json.dumps({"error": str(exc)})

    flags = collision_flags(items)
    colliding = [i for i, hit in enumerate(flags) if hit]
    if colliding:
        logger.warning(
            "Building collision detected: %s",
            ", ".join(str(items[i].id) for i in colliding),
        )

    return json.dumps({
        "placements": [
            {
                **p.to_dict(),
                "colliding": hit,
                "world_position": list(p.world_position(grid_size)),
            }
            for p, hit in zip(items, flags)
        ],
        "colliding": colliding,
        "pairs": [list(pair) for pair in collision_pairs(items)],
    })


@mcp.tool()
def draw_building(
    location: list[float] = [0, 0, 0],
    config: dict[str, Any] | None = None,
    name_prefix: str = "Building",
) -> str:
    """Generate a building and create its wireframe boxes in 3ds Max.

    Every primitive becomes an axis-aligned Box with its wirecolor set, all
    parented under one Dummy named *name_prefix*.

    Args:
        location: Ground point [x, y, z] in 3ds Max coordinates (Z up).
        config: Building parameters, as for generate_building.
        name_prefix: Prefix for object names and the organiser Dummy.

    Returns:
        JSON with the dummy name and how many boxes were created.
    """
    loc = location if len(location) >= 3 else [0.0, 0.0, 0.0]
    try:
        primitives = generate(BuildingConfig.from_dict(config))
    except ConfigError as exc:
        return json.dumps({"error": f"Invalid building config: {exc}"})

    resp = client.send_command(_draw_command(primitives, name_prefix, loc))
    logger.info("Drew %d boxes under %s", len(primitives), resp.get("result", name_prefix))
    return json.dumps({
        "dummy": resp.get("result", name_prefix),
        "objects": len(primitives),
    })
