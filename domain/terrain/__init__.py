"""Terrain Bounded Context.

Responsible for the shape of the climbable terrain:
- Value Objects: GridPoint, TerrainGrid, Heightmap
- Rules: climb_allowed (elevation-climb constraint)
- Ports: HeightmapRepository
"""
