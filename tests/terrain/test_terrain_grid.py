"""Tests for terrain Value Objects (GridPoint, TerrainGrid, Heightmap).

Grids are built directly from rows; no infrastructure adapters involved.
"""

from __future__ import annotations

import numpy as np
import pytest

from domain.terrain.errors import MalformedGridError, PointOutOfBoundsError
from domain.terrain.value_objects import (
    MAX_ELEVATION,
    MIN_ELEVATION,
    GridPoint,
    Heightmap,
    TerrainGrid,
    climb_allowed,
)
from tests.conftest_utils import EXAMPLE_END, EXAMPLE_START, grid_from_letters


# ===========================================================================
# Construction
# ===========================================================================
def test_from_rows_shape(example_grid):
    assert example_grid.width == 8
    assert example_grid.height == 5
    assert example_grid.shape == (5, 8)
    assert example_grid.data.shape == (5, 8)


def test_from_rows_stores_int8():
    grid = TerrainGrid.from_rows([[0, 1], [2, 3]])

    assert grid.data.dtype == np.int8
    assert grid.data.flags.c_contiguous


def test_direct_construction_accepts_any_integer_dtype():
    data = np.array([[0, 25], [13, 7]], dtype=np.int64)

    grid = TerrainGrid(data=data)

    assert grid.data.dtype == np.int8
    assert grid.data.tolist() == [[0, 25], [13, 7]]


def test_single_cell_grid():
    grid = TerrainGrid.from_rows([[4]])

    assert grid.shape == (1, 1)
    assert grid.neighbors(GridPoint(x=0, y=0)) == ()


class TestMalformedGrid:
    """Invalid input never produces a TerrainGrid."""

    def test_ragged_rows_rejected(self):
        with pytest.raises(MalformedGridError, match="identical length"):
            TerrainGrid.from_rows([[0, 1, 2], [0, 1]])

    def test_no_rows_rejected(self):
        with pytest.raises(MalformedGridError, match="at least one row"):
            TerrainGrid.from_rows([])

    def test_empty_rows_rejected(self):
        with pytest.raises(MalformedGridError, match="cannot be empty"):
            TerrainGrid.from_rows([[], []])

    def test_elevation_above_range_rejected(self):
        with pytest.raises(MalformedGridError, match="Elevations must be in"):
            TerrainGrid.from_rows([[0, MAX_ELEVATION + 1]])

    def test_negative_elevation_rejected(self):
        with pytest.raises(MalformedGridError, match="Elevations must be in"):
            TerrainGrid.from_rows([[MIN_ELEVATION - 1, 0]])

    def test_float_data_rejected(self):
        with pytest.raises(MalformedGridError, match="must be integer"):
            TerrainGrid.from_rows([[0.5, 1.0]])

    def test_flat_rows_rejected(self):
        with pytest.raises(MalformedGridError, match="must be sequences"):
            TerrainGrid.from_rows([1, 2, 3])

    def test_mixed_row_and_scalar_rejected(self):
        with pytest.raises(MalformedGridError, match="must be sequences"):
            TerrainGrid.from_rows([[0, 1], 5])

    def test_nested_cell_rejected(self):
        with pytest.raises(MalformedGridError, match="must be integers"):
            TerrainGrid.from_rows([[0, [1]], [2, 3]])

    def test_direct_construction_raises_value_error(self):
        # pydantic ValidationError is a ValueError subclass
        with pytest.raises(ValueError, match="must be 2D"):
            TerrainGrid(data=np.array([0, 1, 2]))

    def test_non_array_data_rejected(self):
        with pytest.raises(ValueError):
            TerrainGrid(data=[[0, 1], [1, 0]])


class TestImmutability:
    def test_data_is_read_only(self, example_grid):
        with pytest.raises(ValueError):
            example_grid.data[0, 0] = 5

    def test_fields_are_frozen(self, example_grid):
        with pytest.raises(Exception):  # ValidationError or AttributeError
            example_grid.data = np.zeros((2, 2), dtype=np.int8)

    def test_caller_array_not_aliased(self):
        source = np.array([[0, 1], [2, 3]], dtype=np.int8)

        grid = TerrainGrid(data=source)
        source[0, 0] = 9

        assert source.flags.writeable
        assert grid.elevation(GridPoint(x=0, y=0)) == 0


class TestGridEquality:
    """Grids compare and hash by their elevations."""

    def test_equal_when_built_separately(self):
        first = TerrainGrid.from_rows([[0, 1], [2, 3]])
        second = TerrainGrid(data=np.array([[0, 1], [2, 3]], dtype=np.int64))

        assert first == second
        assert hash(first) == hash(second)

    def test_different_elevations_not_equal(self):
        first = TerrainGrid.from_rows([[0, 1], [2, 3]])
        second = TerrainGrid.from_rows([[0, 1], [2, 4]])

        assert first != second

    def test_different_shape_not_equal(self):
        row = TerrainGrid.from_rows([[0, 1, 2, 3]])
        square = TerrainGrid.from_rows([[0, 1], [2, 3]])

        assert row != square
        assert len({row, square}) == 2

    def test_not_equal_to_other_types(self, example_grid):
        assert example_grid != "grid"
        assert example_grid != example_grid.shape

    def test_heightmaps_compare_by_value(self, example_grid):
        first = Heightmap(grid=example_grid, start=EXAMPLE_START, end=EXAMPLE_END)
        rebuilt = Heightmap(
            grid=TerrainGrid(data=example_grid.data),
            start=EXAMPLE_START,
            end=EXAMPLE_END,
        )

        assert first == rebuilt


# ===========================================================================
# Elevation
# ===========================================================================
def test_elevation_reads_row_major(example_grid):
    assert example_grid.elevation(EXAMPLE_START) == 0
    assert example_grid.elevation(GridPoint(x=2, y=0)) == 1  # 'b'
    assert example_grid.elevation(GridPoint(x=3, y=0)) == 16  # 'q'
    assert example_grid.elevation(GridPoint(x=7, y=4)) == 8  # 'i'
    assert example_grid.elevation(EXAMPLE_END) == MAX_ELEVATION


@pytest.mark.parametrize(
    "point",
    [
        GridPoint(x=-1, y=0),
        GridPoint(x=0, y=-1),
        GridPoint(x=8, y=0),
        GridPoint(x=0, y=5),
    ],
)
def test_elevation_out_of_bounds(example_grid, point):
    with pytest.raises(PointOutOfBoundsError) as exc_info:
        example_grid.elevation(point)

    assert exc_info.value.point == point
    assert exc_info.value.width == 8
    assert exc_info.value.height == 5


def test_out_of_bounds_message(example_grid):
    with pytest.raises(PointOutOfBoundsError, match=r"x: 0 to 7, y: 0 to 4"):
        example_grid.elevation(GridPoint(x=9, y=9))


# ===========================================================================
# Neighbours
# ===========================================================================
def test_neighbors_corner(example_grid):
    assert example_grid.neighbors(GridPoint(x=0, y=0)) == (
        GridPoint(x=1, y=0),
        GridPoint(x=0, y=1),
    )


def test_neighbors_edge(example_grid):
    assert example_grid.neighbors(GridPoint(x=3, y=4)) == (
        GridPoint(x=2, y=4),
        GridPoint(x=4, y=4),
        GridPoint(x=3, y=3),
    )


def test_neighbors_interior_order(example_grid):
    # left, right, up, down
    assert example_grid.neighbors(GridPoint(x=3, y=2)) == (
        GridPoint(x=2, y=2),
        GridPoint(x=4, y=2),
        GridPoint(x=3, y=1),
        GridPoint(x=3, y=3),
    )


def test_neighbors_out_of_bounds(example_grid):
    with pytest.raises(PointOutOfBoundsError):
        example_grid.neighbors(GridPoint(x=8, y=2))


# ===========================================================================
# Elevation-climb rule
# ===========================================================================
@pytest.mark.parametrize(
    ("from_elevation", "to_elevation", "expected"),
    [
        (0, 0, True),  # level
        (0, 1, True),  # climb of exactly one
        (0, 2, False),  # climb of two
        (3, 0, True),  # drop of three
        (25, 0, True),  # any drop
        (24, 25, True),
        (0, 25, False),
    ],
)
def test_climb_allowed(from_elevation, to_elevation, expected):
    assert climb_allowed(from_elevation, to_elevation) is expected


def test_can_step_is_directed():
    grid = TerrainGrid.from_rows([[0, 3]])
    a = GridPoint(x=0, y=0)
    b = GridPoint(x=1, y=0)

    assert grid.can_step(a, b) is False
    assert grid.can_step(b, a) is True


def test_can_step_out_of_bounds(example_grid):
    with pytest.raises(PointOutOfBoundsError):
        example_grid.can_step(EXAMPLE_START, GridPoint(x=-1, y=0))


# ===========================================================================
# Enumeration
# ===========================================================================
def test_points_row_major(example_grid):
    points = list(example_grid.points())

    assert len(points) == 40
    assert points[0] == GridPoint(x=0, y=0)
    assert points[1] == GridPoint(x=1, y=0)
    assert points[8] == GridPoint(x=0, y=1)
    assert points[-1] == GridPoint(x=7, y=4)


def test_points_at_lowest(example_grid):
    assert example_grid.points_at(MIN_ELEVATION) == (
        GridPoint(x=0, y=0),
        GridPoint(x=1, y=0),
        GridPoint(x=0, y=1),
        GridPoint(x=0, y=2),
        GridPoint(x=0, y=3),
        GridPoint(x=0, y=4),
    )


def test_points_at_missing_elevation():
    grid = grid_from_letters("abc")

    assert grid.points_at(20) == ()


def test_is_border(example_grid):
    assert example_grid.is_border(GridPoint(x=0, y=2))
    assert example_grid.is_border(GridPoint(x=7, y=4))
    assert example_grid.is_border(GridPoint(x=4, y=0))
    assert not example_grid.is_border(GridPoint(x=3, y=2))


# ===========================================================================
# GridPoint
# ===========================================================================
class TestGridPoint:
    def test_equality_by_value(self):
        assert GridPoint(x=1, y=2) == GridPoint(x=1, y=2)
        assert GridPoint(x=1, y=2) != GridPoint(x=2, y=1)

    def test_hashable(self):
        seen = {GridPoint(x=1, y=2), GridPoint(x=1, y=2), GridPoint(x=0, y=0)}

        assert len(seen) == 2

    def test_negative_coordinates_allowed(self):
        point = GridPoint(x=-3, y=-4)

        assert (point.x, point.y) == (-3, -4)

    def test_immutable(self):
        point = GridPoint(x=1, y=2)

        with pytest.raises(Exception):  # ValidationError or AttributeError
            point.x = 5


# ===========================================================================
# Heightmap
# ===========================================================================
class TestHeightmapInvariants:
    def test_valid_markers(self, example_grid):
        heightmap = Heightmap(grid=example_grid, start=EXAMPLE_START, end=EXAMPLE_END)

        assert heightmap.start == EXAMPLE_START
        assert heightmap.end == EXAMPLE_END

    def test_start_outside_grid(self, example_grid):
        with pytest.raises(ValueError, match="Start marker outside grid"):
            Heightmap(grid=example_grid, start=GridPoint(x=8, y=0), end=EXAMPLE_END)

    def test_end_outside_grid(self, example_grid):
        with pytest.raises(ValueError, match="End marker outside grid"):
            Heightmap(grid=example_grid, start=EXAMPLE_START, end=GridPoint(x=0, y=-1))
