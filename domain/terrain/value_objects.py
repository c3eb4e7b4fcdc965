"""Terrain Bounded Context - Value Objects.

Immutable data structures describing a climbable terrain.
All validation occurs at construction time via Pydantic.

Coordinates follow array convention: ``x`` is the column, ``y`` is the row,
and ``data[y, x]`` is the elevation of ``GridPoint(x=x, y=y)``.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from domain.terrain.errors import MalformedGridError, PointOutOfBoundsError

# ---------------------------------------------------------------------------
# Elevation Constants
# ---------------------------------------------------------------------------
MIN_ELEVATION = 0  # 'a' / start marker
MAX_ELEVATION = 25  # 'z' / end marker
MAX_CLIMB = 1  # Largest allowed rise per step; descents are unlimited

# (dx, dy) offsets: left, right, up, down
_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def climb_allowed(from_elevation: int, to_elevation: int) -> bool:
    """Return True if a step from one elevation to another is traversable.

    The rule is directed: rising more than MAX_CLIMB is forbidden, dropping
    any amount is fine.
    """
    return to_elevation - from_elevation <= MAX_CLIMB


class GridPoint(BaseModel):
    """Integer cell coordinate (Value Object).

    Points are not bound to a grid; any integers are accepted and each
    TerrainGrid decides whether a point lies inside it.

    Pydantic frozen models compare and hash by value, so GridPoint can be
    used directly as a dict key.
    """

    x: int  # Column
    y: int  # Row

    model_config = ConfigDict(frozen=True)


class TerrainGrid(BaseModel):
    """Immutable rectangular elevation grid (Value Object).

    The data array is copied to an owned, read-only int8 array at
    construction time. Attempts to modify it afterwards raise ValueError.
    """

    data: NDArray[np.int8]  # 2D array (height x width), read-only

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_grid(self) -> "TerrainGrid":
        # 2D array
        if self.data.ndim != 2:
            raise ValueError(f"Data must be 2D, got {self.data.ndim}D")
        # Non-empty
        if self.data.shape[0] == 0 or self.data.shape[1] == 0:
            raise ValueError(f"Data cannot be empty: {self.data.shape}")
        # dtype
        if not np.issubdtype(self.data.dtype, np.integer):
            raise ValueError(f"Data must be integer, got {self.data.dtype}")
        # Elevation range
        low = int(self.data.min())
        high = int(self.data.max())
        if low < MIN_ELEVATION or high > MAX_ELEVATION:
            raise ValueError(
                f"Elevations must be in [{MIN_ELEVATION}, {MAX_ELEVATION}], "
                f"got [{low}, {high}]"
            )

        # Always keep an OWNED, contiguous copy so caller arrays are never
        # frozen or aliased by the grid.
        immutable = np.array(self.data, dtype=np.int8, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "data", immutable)

        return self

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "TerrainGrid":
        """Build a grid from nested rows of elevations.

        Raises:
            MalformedGridError: If rows are missing or ragged, or if the
                values fail TerrainGrid validation.
        """
        if len(rows) == 0:
            raise MalformedGridError("Grid must have at least one row")
        try:
            widths = {len(row) for row in rows}
        except TypeError as e:
            raise MalformedGridError(f"Grid rows must be sequences: {e}") from e
        if len(widths) != 1:
            raise MalformedGridError(
                f"Grid rows must have identical length, got widths {sorted(widths)}"
            )
        try:
            data = np.asarray(rows)
            return cls(data=data)
        except ValidationError as e:
            raise MalformedGridError(str(e)) from e
        except (TypeError, ValueError) as e:
            # numpy rejects cells that are themselves nested sequences
            raise MalformedGridError(f"Grid cells must be integers: {e}") from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TerrainGrid):
            return NotImplemented
        return bool(np.array_equal(self.data, other.data))

    def __hash__(self) -> int:
        return hash((self.data.shape, self.data.tobytes()))

    # -----------------------------------------------------------------------
    # Shape
    # -----------------------------------------------------------------------
    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        """Return (height, width), matching ``data.shape``."""
        return (self.height, self.width)

    def contains(self, point: GridPoint) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def require(self, point: GridPoint) -> None:
        """Raise PointOutOfBoundsError unless the point lies in the grid."""
        if not self.contains(point):
            raise PointOutOfBoundsError(point, self.width, self.height)

    def is_border(self, point: GridPoint) -> bool:
        """Check if point lies on the outer ring of the grid."""
        self.require(point)
        return (
            point.x == 0
            or point.y == 0
            or point.x == self.width - 1
            or point.y == self.height - 1
        )

    # -----------------------------------------------------------------------
    # Elevation and adjacency
    # -----------------------------------------------------------------------
    def elevation(self, point: GridPoint) -> int:
        """Return the elevation at point.

        Raises:
            PointOutOfBoundsError: If point is outside the grid
        """
        self.require(point)
        return int(self.data[point.y, point.x])

    def neighbors(self, point: GridPoint) -> tuple[GridPoint, ...]:
        """Return the in-bounds axis-aligned neighbours of point (0 to 4)."""
        self.require(point)
        result = []
        for dx, dy in _OFFSETS:
            candidate = GridPoint(x=point.x + dx, y=point.y + dy)
            if self.contains(candidate):
                result.append(candidate)
        return tuple(result)

    def can_step(self, origin: GridPoint, destination: GridPoint) -> bool:
        """Check the elevation-climb rule for the directed edge origin -> destination.

        Adjacency is not checked here; callers pair this with neighbors().
        """
        return climb_allowed(self.elevation(origin), self.elevation(destination))

    def points(self) -> Iterator[GridPoint]:
        """Yield every cell in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield GridPoint(x=x, y=y)

    def points_at(self, elevation: int) -> tuple[GridPoint, ...]:
        """Return every cell with the given elevation, row-major."""
        rows, cols = np.nonzero(self.data == elevation)
        return tuple(GridPoint(x=int(x), y=int(y)) for y, x in zip(rows, cols))


# ---------------------------------------------------------------------------
# Heightmap
# ---------------------------------------------------------------------------
class Heightmap(BaseModel):
    """Terrain grid together with its start and end markers (Value Object).

    Invariants:
        start and end both lie inside grid
    """

    grid: TerrainGrid
    start: GridPoint
    end: GridPoint

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_markers(self) -> "Heightmap":
        if not self.grid.contains(self.start):
            raise ValueError(f"Start marker outside grid: {self.start}")
        if not self.grid.contains(self.end):
            raise ValueError(f"End marker outside grid: {self.end}")
        return self
