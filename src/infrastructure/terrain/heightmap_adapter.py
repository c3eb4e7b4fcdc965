"""Text heightmap adapter for HeightmapRepository.

Implements loading of letter-coded heightmaps, returning a domain Heightmap
Value Object (TerrainGrid plus start and end markers).

Format:
    One grid row per line. Letters 'a' to 'z' are elevations 0 to 25.
    'S' marks the start (elevation of 'a'); 'E' marks the end (elevation
    of 'z'). Each marker must appear exactly once. Leading and trailing
    whitespace on a line is ignored, as are blank lines.

Lifecycle:
1) Validate path (existence, extension allowlist, no symlinks, size)
2) Read and decode UTF-8 text
3) Parse characters into elevations and locate markers
4) Build TerrainGrid (rectangularity and range enforced by the VO)
5) Return Heightmap
"""

from __future__ import annotations

import logging
from pathlib import Path

from domain.terrain.errors import InvalidHeightmapError, MalformedGridError
from domain.terrain.value_objects import (
    MAX_ELEVATION,
    MIN_ELEVATION,
    GridPoint,
    Heightmap,
    TerrainGrid,
)

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

START_MARKER = "S"
END_MARKER = "E"
HEIGHTMAP_EXTENSIONS = (".txt",)

_LOWEST_CHAR = "a"
_HIGHEST_CHAR = "z"


def elevation_for_char(char: str) -> int:
    """Convert a heightmap character to its elevation.

    Raises:
        InvalidHeightmapError: If char is not a lowercase letter or marker
    """
    if char == START_MARKER:
        return MIN_ELEVATION
    if char == END_MARKER:
        return MAX_ELEVATION
    if len(char) != 1 or not (_LOWEST_CHAR <= char <= _HIGHEST_CHAR):
        raise InvalidHeightmapError(f"Unknown heightmap character: {char!r}")
    return ord(char) - ord(_LOWEST_CHAR)


def parse_heightmap(text: str) -> Heightmap:
    """Parse heightmap text into a Heightmap.

    Raises:
        InvalidHeightmapError: On unknown characters, missing or duplicate
            markers, empty input, or ragged rows
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise InvalidHeightmapError("Empty heightmap")

    rows: list[list[int]] = []
    starts: list[GridPoint] = []
    ends: list[GridPoint] = []
    for y, line in enumerate(lines):
        row = []
        for x, char in enumerate(line):
            try:
                row.append(elevation_for_char(char))
            except InvalidHeightmapError as e:
                raise InvalidHeightmapError(f"{e} at line {y + 1}, column {x + 1}") from e
            if char == START_MARKER:
                starts.append(GridPoint(x=x, y=y))
            elif char == END_MARKER:
                ends.append(GridPoint(x=x, y=y))
        rows.append(row)

    if len(starts) != 1:
        raise InvalidHeightmapError(
            f"Expected exactly one start marker {START_MARKER!r}, found {len(starts)}"
        )
    if len(ends) != 1:
        raise InvalidHeightmapError(
            f"Expected exactly one end marker {END_MARKER!r}, found {len(ends)}"
        )

    try:
        grid = TerrainGrid.from_rows(rows)
    except MalformedGridError as e:
        raise InvalidHeightmapError(f"Malformed heightmap: {e}") from e

    return Heightmap(grid=grid, start=starts[0], end=ends[0])


class TextHeightmapAdapter:
    """Infrastructure adapter for loading heightmaps from text files.

    Parameters
    ----------
    max_bytes: int | None
        Optional size budget for the heightmap file. Files larger than this
        are rejected with InvalidHeightmapError before being read.
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        self.max_bytes = max_bytes

    def load_heightmap(self, file_path: Path | str) -> Heightmap:
        """Load a heightmap file and return its grid and markers."""
        path = Path(file_path)

        # Missing files surface as FileNotFoundError
        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.suffix.lower() not in HEIGHTMAP_EXTENSIONS:
            raise InvalidHeightmapError(f"Unsupported file extension: {path.suffix}")

        try:
            if path.is_symlink():
                raise InvalidHeightmapError("Symlinks are not permitted")
            st = path.stat()
            if st.st_size == 0:
                raise InvalidHeightmapError("Empty file")
            if self.max_bytes is not None and st.st_size > self.max_bytes:
                raise InvalidHeightmapError(
                    f"File size {st.st_size}B exceeds budget {self.max_bytes}B"
                )
            raw = path.read_bytes()
        except OSError as e:
            # Log only filename, errno and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidHeightmapError(f"Heightmap is not valid UTF-8: {e}") from e

        heightmap = parse_heightmap(text)
        logger.debug(
            "Heightmap %s: Loaded %dx%d grid",
            path.name,
            heightmap.grid.width,
            heightmap.grid.height,
        )
        return heightmap
