"""Procedural building wireframes and ground-grid placement checks."""

from .generator import generate
from .models import (
    BuildingConfig,
    ConfigError,
    Placement,
    PlacementError,
    Primitive,
    default_config,
)
from .placement import collision_flags, collision_pairs, find_collisions, overlaps

__all__ = [
    "BuildingConfig",
    "ConfigError",
    "Placement",
    "PlacementError",
    "Primitive",
    "collision_flags",
    "collision_pairs",
    "default_config",
    "find_collisions",
    "generate",
    "overlaps",
]
