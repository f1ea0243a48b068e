"""Dataset assembly and loading for ocean current track generation.

This module turns raster bands into dataset rows and reads previously
assembled datasets from JSON or CSV files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ocean_track_gen.constants import DatasetLayout, GridDimensions
from ocean_track_gen.exceptions import MalformedInputError

if TYPE_CHECKING:
    from collections.abc import Sequence

SEASONAL_BAND_COUNT = DatasetLayout.FIELDS_PER_ROW - 1


def _round_half_up(values: NDArray[np.floating[Any]], decimals: int) -> NDArray[np.floating[Any]]:
    """Round halves away from negative infinity, as the published dataset does."""
    scale = 10.0**decimals
    return np.floor(values * scale + 0.5) / scale


def assemble_dataset_rows(
    bands: Sequence[Sequence[float] | NDArray[np.floating[Any]]],
    no_data_value: float | None = None,
    width: int = GridDimensions.WIDTH,
    height: int = GridDimensions.HEIGHT,
) -> NDArray[np.floating[Any]]:
    """Assemble dataset rows from co-registered seasonal raster bands.

    Bands are ordered fall direction, fall velocity, spring direction, spring
    velocity, summer direction, summer velocity, winter direction, winter
    velocity; each holds ``width * height`` pixels in row-major order from the
    north-west corner. A cell is emitted only where the fall direction band
    holds data.

    Args:
        bands: The eight seasonal bands.
        no_data_value: No-data sentinel of the fall direction band (NaN is always no-data).
        width: Number of raster columns.
        height: Number of raster rows.

    Returns:
        Array of shape (n, 9) with directions rounded to whole degrees and
        velocities to two decimals.

    Raises:
        MalformedInputError: If the band count or band sizes do not match the grid.
    """
    if len(bands) != SEASONAL_BAND_COUNT:
        raise MalformedInputError(f"Expected {SEASONAL_BAND_COUNT} bands, got {len(bands)}")

    cell_count = width * height
    band_matrix = np.empty((SEASONAL_BAND_COUNT, cell_count), dtype=float)
    for band_index, band in enumerate(bands):
        band_values = np.asarray(band, dtype=float).ravel()
        if band_values.size != cell_count:
            raise MalformedInputError(
                f"Band {band_index} holds {band_values.size} pixels, expected {cell_count}"
            )
        band_matrix[band_index] = band_values

    has_data = ~np.isnan(band_matrix[0])
    if no_data_value is not None:
        has_data &= band_matrix[0] != no_data_value

    cell_identifiers = np.nonzero(has_data)[0]
    rows = np.empty((cell_identifiers.size, DatasetLayout.FIELDS_PER_ROW), dtype=float)
    rows[:, 0] = cell_identifiers
    for band_index in range(SEASONAL_BAND_COUNT):
        decimals = DatasetLayout.DIRECTION_DECIMALS if band_index % 2 == 0 else DatasetLayout.SPEED_DECIMALS
        rows[:, band_index + 1] = _round_half_up(band_matrix[band_index, cell_identifiers], decimals)

    return rows


def load_dataset_rows_from_dataframe(frame: pd.DataFrame) -> NDArray[np.floating[Any]]:
    """Extract dataset rows from a DataFrame.

    Named columns (``cell_id``, ``fall_direction``, ...) are used when present,
    otherwise the first nine columns are taken positionally.

    Args:
        frame: DataFrame holding the dataset.

    Returns:
        Array of shape (n, 9).

    Raises:
        MalformedInputError: If the frame has too few columns or non-numeric values.
    """
    column_names = list(DatasetLayout.COLUMN_NAMES)
    if set(column_names).issubset(frame.columns):
        selected = frame[column_names]
    elif frame.shape[1] == DatasetLayout.FIELDS_PER_ROW:
        selected = frame
    else:
        raise MalformedInputError(
            f"Dataset has {frame.shape[1]} columns, expected {DatasetLayout.FIELDS_PER_ROW}"
        )

    try:
        numeric = selected.apply(pd.to_numeric, errors="raise")
    except (TypeError, ValueError) as error:
        raise MalformedInputError(f"Dataset contains non-numeric values: {error}") from error

    return numeric.to_numpy(dtype=float)


def load_dataset_rows_from_file(filepath: str | Path) -> NDArray[np.floating[Any]] | list[list[float]] | None:
    """Load dataset rows from a JSON or CSV file.

    JSON files (``.json`` or the original ``.js`` data file) hold an array of
    nine-element rows. CSV files may carry a header row.

    Args:
        filepath: Path to the dataset file.

    Returns:
        Dataset rows, or None if the file does not exist.

    Raises:
        MalformedInputError: If the file cannot be parsed as a dataset.
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        print(f"The file {filepath} was not found.")
        return None

    suffix = filepath.suffix.lower()
    if suffix in (".json", ".js"):
        try:
            with open(filepath, encoding="utf-8") as dataset_file:
                rows = json.load(dataset_file)
        except json.JSONDecodeError as error:
            raise MalformedInputError(f"Could not parse {filepath}: {error}") from error
        if not isinstance(rows, list):
            raise MalformedInputError(f"{filepath} does not hold a JSON array of rows")
        return rows

    if suffix == ".csv":
        try:
            frame = pd.read_csv(filepath, header=None)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as error:
            raise MalformedInputError(f"Could not parse {filepath}: {error}") from error
        header_candidates = frame.iloc[0].astype(str).str.strip()
        if set(DatasetLayout.COLUMN_NAMES).issubset(set(header_candidates)):
            frame = frame.iloc[1:].reset_index(drop=True)
            frame.columns = list(header_candidates)
        elif pd.to_numeric(frame.iloc[0], errors="coerce").isna().all():
            frame = frame.iloc[1:].reset_index(drop=True)
        return load_dataset_rows_from_dataframe(frame)

    raise MalformedInputError(f"Unsupported dataset format: {filepath.suffix!r}")
