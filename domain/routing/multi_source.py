"""Routing Bounded Context - Multi-Source Search.

Answers "what is the shortest distance to target from any cell matching a
predicate?" by running one independent single-source search per candidate
and keeping the minimum.

Candidates share only the read-only grid, so they can be evaluated on a
thread or process pool. The min reduction does not depend on evaluation
order. Each search is pure-Python, so only the process pool runs candidates
in parallel; the thread pool is kept for callers that want to avoid the
per-worker pickling cost.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from functools import partial

from domain.routing.services import compute_shortest_path
from domain.routing.value_objects import SearchOptions
from domain.terrain.value_objects import MIN_ELEVATION, GridPoint, TerrainGrid

logger = logging.getLogger(__name__)

CandidatePredicate = Callable[[TerrainGrid, GridPoint], bool]


# ---------------------------------------------------------------------------
# Candidate Predicates
# ---------------------------------------------------------------------------
def is_lowest_elevation(grid: TerrainGrid, point: GridPoint) -> bool:
    """Match every cell at MIN_ELEVATION."""
    return grid.elevation(point) == MIN_ELEVATION


def is_lowest_border_cell(grid: TerrainGrid, point: GridPoint) -> bool:
    """Match cells at MIN_ELEVATION on the outer ring of the grid."""
    return is_lowest_elevation(grid, point) and grid.is_border(point)


def candidate_points(
    grid: TerrainGrid, predicate: CandidatePredicate = is_lowest_elevation
) -> tuple[GridPoint, ...]:
    """Return every cell matching predicate, row-major."""
    return tuple(point for point in grid.points() if predicate(grid, point))


# ---------------------------------------------------------------------------
# Main Service: compute_minimum_from_candidates
# ---------------------------------------------------------------------------
def compute_minimum_from_candidates(
    grid: TerrainGrid,
    candidates: Iterable[GridPoint],
    target: GridPoint,
    options: SearchOptions | None = None,
) -> int | None:
    """Return the minimum distance to target over all candidate sources.

    Candidates that cannot reach target contribute nothing.

    Args:
        grid: Terrain to search
        candidates: Possible starting cells
        target: Destination cell
        options: Search tuning; ``max_workers > 1`` evaluates candidates
            on the pool named by ``executor``

    Returns:
        Smallest per-candidate distance, or None if no candidate reaches
        target (including an empty candidate set)

    Raises:
        PointOutOfBoundsError: If target or any candidate is outside the grid.
            Raised before any search runs.
    """
    options = options or SearchOptions()
    candidates = tuple(candidates)

    # PRE-1: Target and every candidate must be inside the grid
    grid.require(target)
    for candidate in candidates:
        grid.require(candidate)

    run = partial(compute_shortest_path, grid, target=target, options=options)
    if options.max_workers > 1 and len(candidates) > 1:
        pool_cls = (
            ProcessPoolExecutor if options.executor == "process" else ThreadPoolExecutor
        )
        with pool_cls(max_workers=options.max_workers) as executor:
            distances = list(executor.map(run, candidates))
    else:
        distances = [run(candidate) for candidate in candidates]

    reached = [d for d in distances if d is not None]
    best = min(reached) if reached else None

    logger.info(
        "Multi-source search to %s: %d of %d candidates reached target, best=%s",
        target,
        len(reached),
        len(candidates),
        best,
    )
    return best


def compute_minimum_from_predicate(
    grid: TerrainGrid,
    target: GridPoint,
    predicate: CandidatePredicate = is_lowest_elevation,
    options: SearchOptions | None = None,
) -> int | None:
    """Select candidates with predicate, then run compute_minimum_from_candidates."""
    return compute_minimum_from_candidates(
        grid, candidate_points(grid, predicate), target, options
    )
