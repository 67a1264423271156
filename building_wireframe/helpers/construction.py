"""Shared ratios and layout math for procedural building wireframes."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Render tag
# ---------------------------------------------------------------------------
OUTLINE_COLOR = (0, 0, 0)

# ---------------------------------------------------------------------------
# Base stack (fractions of base height, insets in world units)
# ---------------------------------------------------------------------------
BASE_MIDDLE_INSET = 1.0
BASE_MIDDLE_HEIGHT_RATIO = 0.3
BASE_TOP_INSET = 2.0
BASE_TOP_HEIGHT_RATIO = 0.2
BASE_TOP_OFFSET_RATIO = 0.25

# ---------------------------------------------------------------------------
# Columns and corner blocks
# ---------------------------------------------------------------------------
SIDE_COLUMN_RATIO = 0.75  # side walls get fewer columns than front/back
COLUMN_FOOT_SCALE = 1.2
COLUMN_FOOT_HEIGHT_RATIO = 0.2
COLUMN_FOOT_OFFSET_RATIO = -0.4
COLUMN_SHAFT_HEIGHT_RATIO = 0.8
COLUMN_SHAFT_OFFSET_RATIO = -0.1
COLUMN_CAPITAL_SCALE = 1.3
COLUMN_CAPITAL_HEIGHT_RATIO = 0.3
COLUMN_CAPITAL_OFFSET_RATIO = 0.2
CORNER_SIZE_RATIO = 1.5  # of column width
CORNER_HEIGHT_RATIO = 0.9
CORNER_OFFSET_RATIO = -0.05

# ---------------------------------------------------------------------------
# Windows
# ---------------------------------------------------------------------------
WINDOW_FRAME_MARGIN = 0.2
WINDOW_FRAME_THICKNESS = 0.1
WINDOW_PANE_THICKNESS = 0.05
WINDOW_MULLION = 0.05

# ---------------------------------------------------------------------------
# Floor dividers
# ---------------------------------------------------------------------------
DIVIDER_BAND_OVERHANG_RATIO = 1.5  # secondary bands use 1.5x overhang
DIVIDER_BAND_HEIGHT_RATIO = 0.5
DIVIDER_BAND_OFFSET_RATIO = 1.5
ACCENT_COUNT_FRONT = 8
ACCENT_COUNT_SIDE = 6
ACCENT_THICKNESS_RATIO = 0.5
ACCENT_HEIGHT_RATIO = 4.0

# ---------------------------------------------------------------------------
# Roof
# ---------------------------------------------------------------------------
ROOF_FOOTPRINT_RATIO = 0.85

# ---------------------------------------------------------------------------
# Math helpers
# ---------------------------------------------------------------------------


def center_offset(dimension: float) -> float:
    """Half of *dimension*."""
    return dimension / 2.0


def reflect(value: float, center: float = 0.0) -> float:
    """Mirror *value* about *center* (the building centreline by default)."""
    return 2.0 * center - value


def stack_center(base_y: float, height: float) -> float:
    """Return the centre Y of a block of *height* resting on *base_y*."""
    return base_y + height / 2.0


def even_positions(length: float, item_size: float, count: int) -> list[float]:
    """Positions of *count* items spread along a side of *length*.

    ``-length/2 + i * (length - item_size) / (count - 1)``.
    One item sits at the centre; zero items yields an empty list.
    """
    if count <= 0:
        return []
    if count == 1:
        return [0.0]
    spacing = (length - item_size) / (count - 1)
    start = -center_offset(length)
    return [start + i * spacing for i in range(count)]


def run_positions(start: float, spacing: float, count: int) -> list[float]:
    """Positions of *count* items laid ``spacing`` apart after ``start``."""
    return [start + i * spacing for i in range(count)]


def window_positions(
    wall_length: float, window_width: float, spacing: float, count: int,
) -> list[float]:
    """Window centres along a wall, each one ``spacing`` past the previous.

    ``-wall/2 + spacing + j * (window_width + spacing)``.
    """
    first = -center_offset(wall_length) + spacing
    return run_positions(first, window_width + spacing, count)
