"""Routing Bounded Context.

Responsible for shortest-path search over a TerrainGrid:
- Value Objects: SearchOptions, SearchResult
- Services: search, compute_shortest_path, reconstruct_path (single source)
- Services: candidate_points, compute_minimum_from_candidates (multi source)
"""
