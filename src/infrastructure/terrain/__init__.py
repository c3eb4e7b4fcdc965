"""Infrastructure adapters for the terrain bounded context.

This module provides the infrastructure layer implementations for terrain
operations, including loading letter-coded heightmaps from text files.
"""

from .heightmap_adapter import TextHeightmapAdapter, parse_heightmap

__all__ = ["TextHeightmapAdapter", "parse_heightmap"]
