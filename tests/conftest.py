"""Pytest configuration and shared fixtures for ocean current track generation tests."""

from __future__ import annotations

import math
import os
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

# Render plots off-screen
os.environ.setdefault("MPLBACKEND", "Agg")


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (may require external resources)",
    )


def build_uniform_rows(
    width: int,
    height: int,
    direction_degrees: float,
    speed: float,
    cells: list[tuple[int, int]] | None = None,
) -> list[list[float]]:
    """Build dataset rows carrying the same current for every season.

    Args:
        width: Number of grid columns.
        height: Number of grid rows.
        direction_degrees: Current direction, clockwise from north.
        speed: Current speed.
        cells: (column, row) pairs to populate (every cell if None).

    Returns:
        Dataset rows.
    """
    if cells is None:
        cells = [(cell_x, cell_y) for cell_y in range(height) for cell_x in range(width)]
    return [[cell_x + cell_y * width] + [direction_degrees, speed] * 4 for cell_x, cell_y in cells]


class ScriptedRandomSource:
    """Random source replaying a fixed list of values."""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)
        self.draws = 0

    def uniform(self, low: float, high: float) -> float:
        value = self._values[self.draws % len(self._values)]
        self.draws += 1
        assert low <= value < high
        return value


@pytest.fixture(scope="session")
def direction_for_three_four() -> tuple[float, float]:
    """Direction and magnitude whose grid components are (dx=3, dy=4)."""
    return math.degrees(math.atan2(3.0, -4.0)), 5.0
