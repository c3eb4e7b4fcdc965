"""Routing Bounded Context - Value Objects.

Search tuning parameters and the per-call result of a single-source search.
A SearchResult is built fresh by every search and shares nothing with other
searches.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.terrain.value_objects import GridPoint


class SearchOptions(BaseModel):
    """Per-call search tuning (Value Object).

    Fields:
        max_expansions: Give up after finalizing this many cells. The target
            then counts as unreachable. None means unbounded.
        max_workers: Workers used by multi-source searches. 1 runs
            candidates sequentially.
        executor: "thread" or "process". Searches are pure-Python and
            CPU-bound, so threads run one search at a time under the GIL.
            "process" spreads candidates over cores at the cost of
            pickling the grid to each worker.
    """

    max_expansions: int | None = Field(default=None, gt=0)
    max_workers: int = Field(default=1, ge=1)
    executor: Literal["thread", "process"] = "thread"

    model_config = ConfigDict(frozen=True)


class SearchResult(BaseModel):
    """Distance and predecessor maps of one single-source search (Value Object).

    Invariants:
        SR-1: distances[source] == 0
        SR-2: predecessors[source] is None
        SR-3: distances and predecessors have the same keys

    A point missing from ``distances`` was never reached (+infinity).
    """

    source: GridPoint
    target: GridPoint | None = None  # None when the whole region was explored
    distances: dict[GridPoint, int]
    predecessors: dict[GridPoint, GridPoint | None]
    expanded: int = Field(ge=0)  # Cells finalized before the search stopped
    exhausted: bool = False  # True if max_expansions stopped the search

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_maps(self) -> "SearchResult":
        if self.distances.get(self.source) != 0:
            raise ValueError("Source distance must be 0")
        if self.predecessors.get(self.source, self.source) is not None:
            raise ValueError("Source must have no predecessor")
        if self.distances.keys() != self.predecessors.keys():
            raise ValueError("Distance and predecessor maps must cover the same points")
        return self

    @property
    def distance(self) -> int | None:
        """Return the finalized distance to target, or None if unreached."""
        if self.target is None or self.exhausted:
            return None
        return self.distances.get(self.target)

    @property
    def reached(self) -> bool:
        return self.distance is not None

    def distance_to(self, point: GridPoint) -> int | None:
        """Return the best known distance to point, or None if never reached."""
        return self.distances.get(point)
