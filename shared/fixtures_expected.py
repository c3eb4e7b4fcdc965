"""Single source of truth for expected heightmap test fixtures.

This module defines the list of expected fixture filenames used by both:
- scripts/gen_fixtures.py (generation verification)
- tests/heightmap/test_fixtures_sanity.py (existence verification)

Location: shared/ (not tests/) to avoid scripts->tests dependency.

When adding/removing fixtures, update ONLY this list.
"""

from __future__ import annotations

# Sorted alphabetically for deterministic comparison.
EXPECTED_FIXTURES: list[str] = sorted(
    [
        "enclosed_peak.txt",  # End marker walled off by a steep ring
        "example_8x5.txt",  # Canonical example: 31 steps / 29 from lowest
        "ramp_26x1.txt",  # One-row staircase from S up to E: 25 steps
    ]
)

# Count derived from list for verification
EXPECTED_FIXTURE_COUNT: int = len(EXPECTED_FIXTURES)
