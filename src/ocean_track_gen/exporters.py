"""Track exporters for ocean current track generation.

This module contains classes for exporting generated tracks
to various file formats (CSV, MATLAB) and to DataFrames.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd
import scipy.io
from numpy.typing import NDArray

from ocean_track_gen.constants import DEFAULT_OUTPUT_DIRECTORY, FileExportLimits, GridDimensions
from ocean_track_gen.types import TrackExporterInterface
from ocean_track_gen.utilities import convert_grid_position_to_geographic, generate_unique_filepath

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ocean_track_gen.data_classes import Track

TRACK_EXPORT_FIELDNAMES = ["Track_ID", "Point_Index", "x", "y", "dx", "dy", "longitude", "latitude"]


def tracks_to_dataframe(
    tracks: Sequence[Track],
    grid_width: int = GridDimensions.WIDTH,
    grid_height: int = GridDimensions.HEIGHT,
) -> pd.DataFrame:
    """Flatten tracks into one row per point.

    Args:
        tracks: Tracks to flatten.
        grid_width: Number of grid columns (for geographic conversion).
        grid_height: Number of grid rows (for geographic conversion).

    Returns:
        DataFrame with the columns of ``TRACK_EXPORT_FIELDNAMES``.
    """
    records = [
        [
            track_id,
            point_index,
            point.x,
            point.y,
            point.dx,
            point.dy,
            *convert_grid_position_to_geographic(point.x, point.y, grid_width, grid_height),
        ]
        for track_id, track in enumerate(tracks, start=1)
        for point_index, point in enumerate(track)
    ]
    return pd.DataFrame(records, columns=TRACK_EXPORT_FIELDNAMES)


def track_to_array(track: Track) -> NDArray[np.floating[Any]]:
    """Convert a track to an (n, 4) array of x, y, dx, dy."""
    return np.array([[point.x, point.y, point.dx, point.dy] for point in track], dtype=float).reshape(-1, 4)


class CsvTrackExporter(TrackExporterInterface):
    """Exports tracks to CSV format with automatic file splitting."""

    def __init__(
        self,
        maximum_rows_per_file: int = FileExportLimits.MAXIMUM_CSV_ROWS_PER_FILE,
        grid_width: int = GridDimensions.WIDTH,
        grid_height: int = GridDimensions.HEIGHT,
    ) -> None:
        """Initialize the CSV exporter.

        Args:
            maximum_rows_per_file: Maximum number of rows per output file.
            grid_width: Number of grid columns (for geographic conversion).
            grid_height: Number of grid rows (for geographic conversion).
        """
        self.maximum_rows_per_file = maximum_rows_per_file
        self.grid_width = grid_width
        self.grid_height = grid_height

    def export_tracks(
        self,
        tracks: Sequence[Track],
        output_filename_base: str,
        output_directory: Path | None = None,
    ) -> list[Path]:
        """Export track points to CSV format with automatic file splitting.

        Args:
            tracks: Sequence of tracks to export.
            output_filename_base: Base filename for output.
            output_directory: Directory to save files in (uses DEFAULT_OUTPUT_DIRECTORY if None).

        Returns:
            List of paths to created files.
        """
        if not tracks:
            print("No track data to export.")
            return []

        target_directory = output_directory or DEFAULT_OUTPUT_DIRECTORY
        created_files: list[Path] = []
        current_row_count = 0

        output_filepath = generate_unique_filepath(target_directory, f"{output_filename_base}_Tracks", ".csv")
        current_file = open(output_filepath, mode="w", newline="", encoding="utf-8")  # noqa: SIM115
        csv_writer = csv.writer(current_file)
        csv_writer.writerow(TRACK_EXPORT_FIELDNAMES)
        created_files.append(output_filepath)
        print(f"Writing to {output_filepath}...")

        try:
            for track_id, track in enumerate(tracks, start=1):
                for point_index, point in enumerate(track):
                    if current_row_count >= self.maximum_rows_per_file:
                        current_file.close()
                        output_filepath = generate_unique_filepath(
                            target_directory, f"{output_filename_base}_Tracks", ".csv"
                        )
                        current_file = open(output_filepath, mode="w", newline="", encoding="utf-8")  # noqa: SIM115
                        csv_writer = csv.writer(current_file)
                        csv_writer.writerow(TRACK_EXPORT_FIELDNAMES)
                        created_files.append(output_filepath)
                        print(f"Writing to {output_filepath}...")
                        current_row_count = 0

                    longitude, latitude = convert_grid_position_to_geographic(
                        point.x, point.y, self.grid_width, self.grid_height
                    )
                    csv_writer.writerow([track_id, point_index, point.x, point.y, point.dx, point.dy, longitude, latitude])
                    current_row_count += 1
        finally:
            current_file.close()

        print("Data successfully saved.")
        return created_files


class MatlabTrackExporter(TrackExporterInterface):
    """Exports tracks to MATLAB .mat format as a cell array of (n, 4) matrices."""

    def export_tracks(
        self,
        tracks: Sequence[Track],
        output_filename_base: str,
        output_directory: Path | None = None,
    ) -> Path:
        """Export tracks to MATLAB format.

        Args:
            tracks: Sequence of tracks to export.
            output_filename_base: Base filename for output.
            output_directory: Directory to save files in (uses DEFAULT_OUTPUT_DIRECTORY if None).

        Returns:
            Path to created file.
        """
        target_directory = output_directory or DEFAULT_OUTPUT_DIRECTORY
        output_filepath = generate_unique_filepath(target_directory, f"{output_filename_base}_Tracks", ".mat")

        # Tracks differ in length, so they are stored as a MATLAB cell array
        track_cells = np.empty((len(tracks),), dtype=object)
        for track_index, track in enumerate(tracks):
            track_cells[track_index] = track_to_array(track)

        scipy.io.savemat(str(output_filepath), {"tracks": track_cells, "columns": ["x", "y", "dx", "dy"]})
        print(f"Data successfully saved to {output_filepath}")
        return output_filepath
