"""Hillclimb Router Domain Layer.

This package contains the core logic organized by bounded contexts:
- terrain: Elevation grid, points, elevation-climb rule
- routing: Single-source and multi-source shortest-path search
"""

# Imports alphabetized per project style (isort)
from domain import routing, terrain

__all__ = ["routing", "terrain"]
