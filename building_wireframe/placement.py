"""Footprint collision checks for buildings placed on the ground grid.

Every placement is compared against every other one (n is small).  Two
footprints collide only when they overlap on *both* X and Z; footprints that
merely touch along an edge do not.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .models import Placement


def _coerce(placements: Iterable[Placement | Mapping[str, Any]]) -> list[Placement]:
    return [
        p if isinstance(p, Placement) else Placement.from_dict(p, i)
        for i, p in enumerate(placements)
    ]


def overlaps(a: Placement, b: Placement) -> bool:
    """Strict axis-aligned overlap of two footprints."""
    x_overlap = abs(a.x - b.x) < (a.width + b.width) / 2.0
    z_overlap = abs(a.z - b.z) < (a.depth + b.depth) / 2.0
    return x_overlap and z_overlap


def collision_pairs(placements: Iterable[Placement | Mapping[str, Any]]) -> list[tuple[int, int]]:
    """Index pairs ``(i, j)``, ``i < j``, of overlapping placements."""
    items = _coerce(placements)
    return [
        (i, j)
        for i in range(len(items))
        for j in range(i + 1, len(items))
        if overlaps(items[i], items[j])
    ]


def collision_flags(placements: Iterable[Placement | Mapping[str, Any]]) -> list[bool]:
    """One flag per placement: does it overlap any *other* placement?"""
    items = _coerce(placements)
    return [
        any(overlaps(p, other) for j, other in enumerate(items) if j != i)
        for i, p in enumerate(items)
    ]


def find_collisions(placements: Iterable[Placement | Mapping[str, Any]]) -> list[Placement]:
    """The colliding placements, in input order.

    Raises:
        PlacementError: if a mapping lacks ``x``/``z`` or has a bad footprint.
    """
    items = _coerce(placements)
    return [p for p, hit in zip(items, collision_flags(items)) if hit]
