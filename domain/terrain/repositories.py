"""Domain Port(s) for Terrain I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import Heightmap


class HeightmapRepository(Protocol):
    """Port for obtaining marked heightmaps from external sources.

    Implementations live in infrastructure (e.g., the text heightmap adapter).
    """

    def load_heightmap(self, file_path: Path | str) -> Heightmap:
        """Load a heightmap and return its grid with start and end markers."""
        ...
