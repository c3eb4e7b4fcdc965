#!/usr/bin/env python3
"""Generate heightmap fixtures for routing and adapter tests.

Fixtures are small hand-designed heightmaps in the letter-coded text format
('a'-'z' elevations, 'S' start, 'E' end). They are committed to the repo;
rerun this script after changing a layout here.

Usage:
    python scripts/gen_fixtures.py

Output:
    tests/fixtures/*.txt

Dependencies:
    This script imports from shared/fixtures_expected.py (not tests/) to avoid
    circular dependencies between scripts and tests packages.
"""

from __future__ import annotations

from pathlib import Path

from shared.fixtures_expected import EXPECTED_FIXTURE_COUNT, EXPECTED_FIXTURES

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"

# =============================================================================
# Layouts
# =============================================================================
# Canonical example terrain. Known answers:
# - S -> E: 31 steps
# - any 'a' (or S) -> E: 29 steps
EXAMPLE_8X5 = (
    "Sabqponm",
    "abcryxxl",
    "accszExk",
    "acctuvwj",
    "abdefghi",
)

# E sits inside a ring of 'z' cells. Every approach to the ring is 'a', a
# climb of 25, so E is unreachable from anywhere outside the ring.
ENCLOSED_PEAK = (
    "Saaaa",
    "aazaa",
    "azEza",
    "aazaa",
    "aaaaa",
)

# Single row climbing one unit per step: S(0) b(1) ... y(24) E(25).
RAMP_26X1 = ("S" + "".join(chr(c) for c in range(ord("b"), ord("y") + 1)) + "E",)


def ensure_dir() -> None:
    """Ensure fixtures directory exists."""
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Output directory: {FIXTURES_DIR}")


def write_heightmap(name: str, rows: tuple[str, ...]) -> None:
    """Write rows as a heightmap file (one row per line, trailing newline)."""
    widths = {len(row) for row in rows}
    if len(widths) != 1:
        raise ValueError(f"{name}: ragged layout, widths {sorted(widths)}")
    path = FIXTURES_DIR / name
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    print(f"  Created: {name} ({len(rows[0])}x{len(rows)})")


def main() -> int:
    """Generate all fixtures and verify them against EXPECTED_FIXTURES."""
    print("=" * 60)
    print("Generating heightmap fixtures")
    print("=" * 60)

    ensure_dir()

    write_heightmap("example_8x5.txt", EXAMPLE_8X5)
    write_heightmap("enclosed_peak.txt", ENCLOSED_PEAK)
    write_heightmap("ramp_26x1.txt", RAMP_26X1)

    fixture_files = sorted(
        f.name for f in FIXTURES_DIR.iterdir() if f.is_file() and f.suffix == ".txt"
    )
    found_set = set(fixture_files)
    expected_set = set(EXPECTED_FIXTURES)

    if found_set != expected_set:
        print("ERROR: Fixture filenames do not match expected list!")
        missing = expected_set - found_set
        extra = found_set - expected_set
        if missing:
            print(f"  Missing (expected but not generated): {sorted(missing)}")
        if extra:
            print(f"  Extra (generated but not expected): {sorted(extra)}")
        print("\nUpdate shared/fixtures_expected.py to match generated fixtures.")
        return 1

    print(f"\nAll {EXPECTED_FIXTURE_COUNT} fixtures verified successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
