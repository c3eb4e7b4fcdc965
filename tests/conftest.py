"""Root pytest configuration for all tests.

Domain tests build TerrainGrids directly from rows; only the heightmap
adapter tests read files from tests/fixtures/.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.terrain.value_objects import TerrainGrid
from tests.conftest_utils import EXAMPLE_ROWS, get_fixtures_dir, grid_from_letters


@pytest.fixture
def example_grid() -> TerrainGrid:
    """Canonical 8x5 example terrain."""
    return grid_from_letters(*EXAMPLE_ROWS)


@pytest.fixture
def fixtures_dir() -> Path:
    return get_fixtures_dir()
