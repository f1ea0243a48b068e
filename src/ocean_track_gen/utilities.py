"""Utility functions for ocean current track generation.

This module contains utility functions for vector conversion, cell
indexing, geographic conversion, and file operations.
"""

from __future__ import annotations

import math
from pathlib import Path

from ocean_track_gen.constants import GridDimensions, UnitConversionConstants


def generate_unique_filepath(output_directory: Path, base_name: str, extension: str) -> Path:
    """Generate a unique filepath by appending a number if file exists.

    Args:
        output_directory: Directory to save the file in.
        base_name: Base filename without extension.
        extension: File extension including the dot (e.g., '.csv').

    Returns:
        Unique filepath that does not exist.
    """
    output_directory.mkdir(parents=True, exist_ok=True)
    counter = 0
    filepath = output_directory / f"{base_name}{extension}"

    while filepath.exists():
        counter += 1
        filepath = output_directory / f"{base_name}_{counter}{extension}"

    return filepath


def convert_direction_to_vector_components(direction_degrees: float, magnitude: float) -> tuple[float, float]:
    """Convert a compass direction and speed into grid-space components.

    Direction is measured clockwise from north. Grid y grows southwards, so a
    northward current has a negative dy.

    Args:
        direction_degrees: Direction the current flows towards, in degrees.
        magnitude: Current speed.

    Returns:
        Tuple of (dx, dy).
    """
    # math module is significantly faster than numpy for scalar operations
    direction_radians = UnitConversionConstants.convert_degrees_to_radians(direction_degrees)
    return magnitude * math.sin(direction_radians), -magnitude * math.cos(direction_radians)


def compute_cell_identifier(cell_x: int, cell_y: int, width: int = GridDimensions.WIDTH) -> int:
    """Compute the row-major identifier of a grid cell."""
    return cell_x + cell_y * width


def split_cell_identifier(cell_identifier: int, width: int = GridDimensions.WIDTH) -> tuple[int, int]:
    """Split a cell identifier into (column, row)."""
    cell_y, cell_x = divmod(cell_identifier, width)
    return cell_x, cell_y


def is_within_pole_buffer(cell_row: int, height: int, pole_buffer: int) -> bool:
    """Check whether a grid row lies inside the excluded band at either pole.

    Args:
        cell_row: Row index (0 at the north pole).
        height: Number of rows in the grid.
        pole_buffer: Number of rows excluded at each pole.

    Returns:
        True if the row must not carry samples.
    """
    return cell_row < pole_buffer or cell_row > height - pole_buffer - 1


def convert_grid_position_to_geographic(
    x: float,
    y: float,
    width: int = GridDimensions.WIDTH,
    height: int = GridDimensions.HEIGHT,
) -> tuple[float, float]:
    """Convert a continuous grid position into longitude and latitude.

    The grid spans -180..180 degrees of longitude left to right and
    90..-90 degrees of latitude top to bottom.

    Args:
        x: Column position in cells.
        y: Row position in cells.
        width: Number of grid columns.
        height: Number of grid rows.

    Returns:
        Tuple of (longitude_degrees, latitude_degrees).
    """
    longitude = x * 360.0 / width - 180.0
    latitude = 90.0 - y * 180.0 / height
    return longitude, latitude
