"""Terrain Bounded Context - Error Hierarchy.

Custom exceptions for terrain operations.

Grid construction errors abort creation entirely; bounds errors abort only
the call that received the offending point.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.terrain.value_objects import GridPoint


class TerrainError(Exception):
    """Base error for terrain operations."""


class MalformedGridError(TerrainError):
    """Grid is empty, ragged, non-integer or has elevations out of range."""


class InvalidHeightmapError(TerrainError):
    """Heightmap text is unreadable, has unknown characters or bad markers."""


# ---------------------------------------------------------------------------
# Per-call Errors
# ---------------------------------------------------------------------------
class PointOutOfBoundsError(TerrainError):
    """Point is outside the terrain grid.

    Attributes:
        point: The offending GridPoint
        width: Grid width (number of columns)
        height: Grid height (number of rows)
    """

    def __init__(self, point: "GridPoint", width: int, height: int) -> None:
        self.point = point
        self.width = width
        self.height = height
        super().__init__(
            f"Point (x={point.x}, y={point.y}) outside grid "
            f"[x: 0 to {width - 1}, y: 0 to {height - 1}]"
        )
