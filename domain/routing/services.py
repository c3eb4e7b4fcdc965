"""Routing Bounded Context - Single-Source Shortest Path.

Pure domain logic: forward Dijkstra over the directed graph implied by
``climb_allowed``. Every edge costs one step.

Each call allocates its own distance list, predecessor list and heap, so
searches are reentrant and may run concurrently against the same grid.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Sequence
from math import inf

from domain.routing.errors import NoPathError
from domain.routing.value_objects import SearchOptions, SearchResult
from domain.terrain.value_objects import GridPoint, TerrainGrid, climb_allowed

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

_NO_CELL = -1  # Predecessor of the source / unreached cells


# ---------------------------------------------------------------------------
# Helpers: cell ids
# ---------------------------------------------------------------------------
# Cell ids are row-major: id = y * width + x


def _cell_id(grid: TerrainGrid, point: GridPoint) -> int:
    return point.y * grid.width + point.x


def _cell_point(grid: TerrainGrid, cell: int) -> GridPoint:
    y, x = divmod(cell, grid.width)
    return GridPoint(x=x, y=y)


def _adjacent_cells(cell: int, width: int, height: int) -> list[int]:
    """Return in-bounds neighbour ids in TerrainGrid.neighbors() order."""
    y, x = divmod(cell, width)
    result = []
    if x > 0:
        result.append(cell - 1)
    if x < width - 1:
        result.append(cell + 1)
    if y > 0:
        result.append(cell - width)
    if y < height - 1:
        result.append(cell + width)
    return result


# ---------------------------------------------------------------------------
# Core: Dijkstra
# ---------------------------------------------------------------------------
def _dijkstra(
    grid: TerrainGrid,
    source: int,
    target: int | None,
    max_expansions: int | None,
) -> tuple[list[float], list[int], int, bool]:
    """Run the search on cell ids.

    Returns:
        Tuple of (dist, came_from, expanded, exhausted). ``dist`` holds
        ``inf`` for unreached cells and ``came_from`` holds ``_NO_CELL``.
    """
    width, height = grid.width, grid.height
    elevations = grid.data.ravel().tolist()

    dist: list[float] = [inf] * (width * height)
    dist[source] = 0
    came_from = [_NO_CELL] * (width * height)

    # Lazy frontier: cells are pushed when discovered; stale entries skipped.
    pq: list[tuple[float, int]] = [(0, source)]
    expanded = 0
    exhausted = False

    while pq:
        d, cur = heapq.heappop(pq)
        if d != dist[cur]:
            continue
        if max_expansions is not None and expanded >= max_expansions:
            exhausted = True
            break
        expanded += 1

        if cur == target:
            break

        for nxt in _adjacent_cells(cur, width, height):
            if not climb_allowed(elevations[cur], elevations[nxt]):
                continue
            nd = d + 1
            if nd < dist[nxt]:
                dist[nxt] = nd
                came_from[nxt] = cur
                heapq.heappush(pq, (nd, nxt))

    return dist, came_from, expanded, exhausted


def _checked_dijkstra(
    grid: TerrainGrid,
    source: GridPoint,
    target: GridPoint | None,
    options: SearchOptions | None,
) -> tuple[list[float], list[int], int, bool]:
    """Check preconditions, run _dijkstra and report a hit expansion cap."""
    options = options or SearchOptions()

    # PRE-1: Source must be inside the grid
    grid.require(source)
    # PRE-2: Target must be inside the grid
    if target is not None:
        grid.require(target)

    target_id = _cell_id(grid, target) if target is not None else None
    dist, came_from, expanded, exhausted = _dijkstra(
        grid, _cell_id(grid, source), target_id, options.max_expansions
    )

    if exhausted:
        logger.warning(
            "Search from %s to %s gave up after %d expansions",
            source,
            target,
            expanded,
        )
    return dist, came_from, expanded, exhausted


# ---------------------------------------------------------------------------
# Public Services
# ---------------------------------------------------------------------------
def search(
    grid: TerrainGrid,
    source: GridPoint,
    target: GridPoint | None = None,
    options: SearchOptions | None = None,
) -> SearchResult:
    """Run a single-source search and return its distance and predecessor maps.

    With a target the search stops as soon as the target is finalized.
    Without one it explores every cell reachable from source.

    Args:
        grid: Terrain to search
        source: Starting cell
        target: Optional destination cell
        options: Optional search tuning (expansion cap)

    Returns:
        SearchResult with maps for every discovered cell

    Raises:
        PointOutOfBoundsError: If source or target is outside the grid
    """
    dist, came_from, expanded, exhausted = _checked_dijkstra(
        grid, source, target, options
    )

    distances: dict[GridPoint, int] = {}
    predecessors: dict[GridPoint, GridPoint | None] = {}
    for cell, d in enumerate(dist):
        if d == inf:
            continue
        point = _cell_point(grid, cell)
        distances[point] = int(d)
        prev = came_from[cell]
        predecessors[point] = None if prev == _NO_CELL else _cell_point(grid, prev)

    logger.debug(
        "Search from %s: reached=%d expanded=%d", source, len(distances), expanded
    )

    return SearchResult(
        source=source,
        target=target,
        distances=distances,
        predecessors=predecessors,
        expanded=expanded,
        exhausted=exhausted,
    )


def compute_shortest_path(
    grid: TerrainGrid,
    source: GridPoint,
    target: GridPoint,
    options: SearchOptions | None = None,
) -> int | None:
    """Return the minimum number of steps from source to target.

    Same answer as ``search(grid, source, target, options).distance`` without
    building the distance and predecessor maps, which keeps multi-source
    batches cheap.

    Returns:
        Step count, or None if target is unreachable under the climb rule
        (or the expansion cap was hit first).

    Raises:
        PointOutOfBoundsError: If source or target is outside the grid

    Example:
        >>> grid = TerrainGrid.from_rows([[0, 1, 2], [5, 4, 3]])
        >>> compute_shortest_path(grid, GridPoint(x=0, y=0), GridPoint(x=0, y=1))
        5
    """
    dist, _, expanded, exhausted = _checked_dijkstra(grid, source, target, options)
    if exhausted:
        return None

    d = dist[_cell_id(grid, target)]
    result = None if d == inf else int(d)
    logger.debug(
        "Search from %s to %s: distance=%s expanded=%d",
        source,
        target,
        result,
        expanded,
    )
    return result


def reconstruct_path(
    predecessors: dict[GridPoint, GridPoint | None],
    source: GridPoint,
    target: GridPoint,
) -> tuple[GridPoint, ...]:
    """Walk predecessor links back from target.

    Returns:
        Points from source to target inclusive; ``len(path) - 1`` steps.

    Raises:
        NoPathError: If the walk does not end at exactly source
    """
    if target not in predecessors:
        raise NoPathError(source, target)

    path = [target]
    current: GridPoint | None = predecessors[target]

    # A walk longer than the map means the links form a cycle.
    while current is not None and len(path) <= len(predecessors):
        path.append(current)
        current = predecessors.get(current)

    if path[-1] != source or current is not None:
        raise NoPathError(source, target)

    path.reverse()
    return tuple(path)


def shortest_path(
    grid: TerrainGrid,
    source: GridPoint,
    target: GridPoint,
    options: SearchOptions | None = None,
) -> tuple[GridPoint, ...]:
    """Search from source to target and return one shortest path.

    Raises:
        PointOutOfBoundsError: If source or target is outside the grid
        NoPathError: If target is unreachable
    """
    result = search(grid, source, target, options)
    if not result.reached:
        raise NoPathError(source, target)
    return reconstruct_path(result.predecessors, source, target)


def is_valid_walk(grid: TerrainGrid, walk: Sequence[GridPoint]) -> bool:
    """Check every consecutive pair is adjacent and climbable."""
    for origin, destination in zip(walk, walk[1:]):
        if not grid.contains(origin) or not grid.contains(destination):
            return False
        if destination not in grid.neighbors(origin):
            return False
        if not grid.can_step(origin, destination):
            return False
    return all(grid.contains(point) for point in walk)
