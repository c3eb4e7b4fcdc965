"""Routing Bounded Context - Error Hierarchy.

An unreachable target is a normal search outcome and is reported as None.
NoPathError is only raised when a caller asks for the path itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.terrain.value_objects import GridPoint


class RoutingError(Exception):
    """Base error for routing operations."""


class NoPathError(RoutingError):
    """Predecessor walk from target does not lead back to source.

    Attributes:
        source: Requested path origin
        target: Requested path destination
    """

    def __init__(self, source: "GridPoint", target: "GridPoint") -> None:
        self.source = source
        self.target = target
        super().__init__(
            f"No path from (x={source.x}, y={source.y}) "
            f"to (x={target.x}, y={target.y})"
        )
