"""
Geometry — регионы (axis-aligned боксы), их алгебра и курсор обхода решётки.
"""

from src.core.geometry.cursor import CursorState, GridCursor
from src.core.geometry.region import Region
from src.core.geometry.region_algebra import (
    axis_of_difference,
    convex_hull,
    intersection,
    union,
)

__all__ = [
    # Region
    "Region",
    # Cursor
    "CursorState",
    "GridCursor",
    # Algebra
    "axis_of_difference",
    "convex_hull",
    "intersection",
    "union",
]
