"""Constants and configuration values for ocean current track generation.

This module contains all constant values organized by domain,
following the Single Responsibility Principle.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Final


class GridDimensions:
    """Geometry of the global longitude/latitude sample grid.

    One cell per degree; cell identifiers run row-major from the north-west corner.
    """

    WIDTH: Final[int] = 360
    HEIGHT: Final[int] = 180
    CELL_COUNT: Final[int] = WIDTH * HEIGHT
    DEFAULT_POLE_BUFFER_CELLS: Final[int] = 25


class UnitConversionConstants:
    """Angular unit conversion factors."""

    DEGREES_TO_RADIANS: Final[float] = math.pi / 180.0

    @classmethod
    def convert_degrees_to_radians(cls, angle_degrees: float) -> float:
        """Convert angle from degrees to radians."""
        return angle_degrees * cls.DEGREES_TO_RADIANS


class TracingDefaults:
    """Default parameters for streamline tracing."""

    STEP_SIZE: Final[float] = 1.0
    MINIMUM_TRACK_POINTS: Final[int] = 5
    MAXIMUM_ATTEMPTS_PER_TRACK: Final[int] = 1000


class DatasetLayout:
    """Column layout of a dataset row.

    A row is ``[cell_id, fall_dir, fall_speed, spring_dir, spring_speed,
    summer_dir, summer_speed, winter_dir, winter_speed]``.
    """

    CELL_IDENTIFIER_COLUMN: Final[int] = 0
    FIELDS_PER_ROW: Final[int] = 9
    COLUMN_NAMES: Final[tuple[str, ...]] = (
        "cell_id",
        "fall_direction",
        "fall_speed",
        "spring_direction",
        "spring_speed",
        "summer_direction",
        "summer_speed",
        "winter_direction",
        "winter_speed",
    )
    DIRECTION_DECIMALS: Final[int] = 0
    SPEED_DECIMALS: Final[int] = 2


class FileExportLimits:
    """Limits for file export operations."""

    MAXIMUM_CSV_ROWS_PER_FILE: Final[int] = 1_000_000


# Default output directory for all generated files
DEFAULT_OUTPUT_DIRECTORY: Final[Path] = Path("output")
