"""Application Layer.

Infrastructure that feeds the domain: reading heightmaps from files and
turning them into domain Value Objects.
"""
