"""Sparse index of seasonal current samples.

This module contains the read-only grid that maps discretized cell
positions to the seasonal current samples available there.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from ocean_track_gen.constants import DatasetLayout, GridDimensions
from ocean_track_gen.data_classes import Vector2, VectorSample
from ocean_track_gen.exceptions import MalformedInputError
from ocean_track_gen.types import Season
from ocean_track_gen.utilities import compute_cell_identifier, is_within_pole_buffer

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

LOGGER = logging.getLogger(__name__)


class SampleGrid:
    """Immutable mapping from cell identifier to seasonal current sample.

    Cells inside the polar buffer, cells without source data, and seasons that
    were not requested at build time are simply absent. Lookups are safe from
    any number of threads once the grid is built.
    """

    def __init__(
        self,
        samples: Mapping[int, VectorSample],
        seasons: Sequence[Season] = tuple(Season),
        width: int = GridDimensions.WIDTH,
        height: int = GridDimensions.HEIGHT,
        pole_buffer: int = GridDimensions.DEFAULT_POLE_BUFFER_CELLS,
    ) -> None:
        """Initialize the grid from already validated samples.

        Use :meth:`build` to construct a grid from raw dataset rows.

        Args:
            samples: Samples keyed by cell identifier.
            seasons: Seasons available for lookup.
            width: Number of grid columns.
            height: Number of grid rows.
            pole_buffer: Number of rows excluded at each pole.
        """
        self._width = width
        self._height = height
        self._pole_buffer = pole_buffer
        self._seasons = tuple(seasons)
        self._samples = dict(samples)
        self._components_by_season = self._precompute_vector_components()

    def _precompute_vector_components(self) -> dict[Season, dict[int, Vector2]]:
        """Convert every stored direction/magnitude pair to grid components once."""
        components_by_season: dict[Season, dict[int, Vector2]] = {}
        for season in self._seasons:
            season_components: dict[int, Vector2] = {}
            for cell_identifier, sample in self._samples.items():
                seasonal_current = sample.for_season(season)
                if seasonal_current is not None:
                    season_components[cell_identifier] = seasonal_current.to_vector_components()
            components_by_season[season] = season_components
        return components_by_season

    @classmethod
    def build(
        cls,
        samples: Iterable[Sequence[float]],
        season_set: Iterable[Season | str] | None = None,
        width: int = GridDimensions.WIDTH,
        height: int = GridDimensions.HEIGHT,
        pole_buffer: int = GridDimensions.DEFAULT_POLE_BUFFER_CELLS,
        no_data_value: float | None = None,
    ) -> SampleGrid:
        """Build a grid from dataset rows.

        A row is kept only when every required season carries real data, and
        rows inside the polar buffer are dropped regardless of their data.

        Args:
            samples: Rows ``[cell_id, fall_dir, fall_speed, spring_dir, spring_speed,
                summer_dir, summer_speed, winter_dir, winter_speed]``.
            season_set: Seasons that must be present (all four if None).
            width: Number of grid columns.
            height: Number of grid rows.
            pole_buffer: Number of rows excluded at each pole.
            no_data_value: Sentinel marking a missing value (NaN is always missing).

        Returns:
            Built SampleGrid.

        Raises:
            MalformedInputError: If any row has the wrong field count, a
                non-numeric value, a cell identifier outside the grid, or an
                infinite value or negative speed in a required season.
        """
        seasons = tuple(Season) if season_set is None else tuple(dict.fromkeys(Season.from_label(s) for s in season_set))
        cell_count = width * height
        accepted_samples: dict[int, VectorSample] = {}
        missing_data_rows = 0
        polar_rows = 0
        total_rows = 0

        for row_index, row in enumerate(samples):
            total_rows += 1
            values = _parse_dataset_row(row, row_index)
            cell_identifier = _parse_cell_identifier(values[DatasetLayout.CELL_IDENTIFIER_COLUMN], row_index, cell_count)

            if not _has_data_for_seasons(values, seasons, no_data_value):
                missing_data_rows += 1
                continue

            _check_seasonal_values(values, seasons, row_index)

            if is_within_pole_buffer(cell_identifier // width, height, pole_buffer):
                polar_rows += 1
                continue

            accepted_samples[cell_identifier] = VectorSample.from_dataset_row(
                [cell_identifier, *values[1:]],
                seasons,
            )

        LOGGER.debug(
            "Built sample grid: %d of %d rows kept (%d missing data, %d within pole buffer)",
            len(accepted_samples),
            total_rows,
            missing_data_rows,
            polar_rows,
        )
        return cls(accepted_samples, seasons, width, height, pole_buffer)

    def lookup(self, cell_x: int, cell_y: int, season: Season) -> Vector2 | None:
        """Get the current vector stored at an exact cell.

        Args:
            cell_x: Column index.
            cell_y: Row index.
            season: Season to read.

        Returns:
            Vector components, or None if the cell holds no sample for the season.
        """
        if not (0 <= cell_x < self._width and 0 <= cell_y < self._height):
            return None
        season_components = self._components_by_season.get(season)
        if season_components is None:
            return None
        return season_components.get(compute_cell_identifier(cell_x, cell_y, self._width))

    def get_sample(self, cell_identifier: int) -> VectorSample | None:
        """Get the raw sample stored under a cell identifier."""
        return self._samples.get(cell_identifier)

    def contains_cell(self, cell_identifier: int) -> bool:
        """Check whether a cell carries a sample."""
        return cell_identifier in self._samples

    @property
    def cell_identifiers(self) -> list[int]:
        """Get the sorted identifiers of all populated cells."""
        return sorted(self._samples)

    @property
    def seasons(self) -> tuple[Season, ...]:
        """Get the seasons available for lookup."""
        return self._seasons

    @property
    def width(self) -> int:
        """Get the number of grid columns."""
        return self._width

    @property
    def height(self) -> int:
        """Get the number of grid rows."""
        return self._height

    @property
    def pole_buffer(self) -> int:
        """Get the number of rows excluded at each pole."""
        return self._pole_buffer

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[VectorSample]:
        return iter(self._samples.values())


def _parse_dataset_row(row: Sequence[float], row_index: int) -> list[float]:
    """Convert a raw row to floats, rejecting wrong field counts and non-numeric values."""
    try:
        field_count = len(row)
    except TypeError as error:
        raise MalformedInputError(f"Row {row_index} is not a sequence: {row!r}") from error

    if field_count != DatasetLayout.FIELDS_PER_ROW:
        raise MalformedInputError(
            f"Row {row_index} has {field_count} fields, expected {DatasetLayout.FIELDS_PER_ROW}"
        )

    try:
        return [float(value) for value in row]
    except (TypeError, ValueError) as error:
        raise MalformedInputError(f"Row {row_index} contains a non-numeric value: {row!r}") from error


def _parse_cell_identifier(raw_identifier: float, row_index: int, cell_count: int) -> int:
    """Validate that a cell identifier is an integer inside the grid."""
    if math.isnan(raw_identifier) or not raw_identifier.is_integer():
        raise MalformedInputError(f"Row {row_index} has a non-integer cell id: {raw_identifier!r}")

    cell_identifier = int(raw_identifier)
    if not 0 <= cell_identifier < cell_count:
        raise MalformedInputError(
            f"Row {row_index} has cell id {cell_identifier} outside [0, {cell_count})"
        )
    return cell_identifier


def _check_seasonal_values(values: Sequence[float], seasons: Sequence[Season], row_index: int) -> None:
    """Reject infinite directions or speeds and negative speeds in the required seasons."""
    for season in seasons:
        direction = values[season.direction_column]
        speed = values[season.speed_column]
        if not (math.isfinite(direction) and math.isfinite(speed)):
            raise MalformedInputError(f"Row {row_index} has a non-finite {season.value} value: {direction!r}, {speed!r}")
        if speed < 0:
            raise MalformedInputError(f"Row {row_index} has a negative {season.value} speed: {speed!r}")


def _has_data_for_seasons(values: Sequence[float], seasons: Sequence[Season], no_data_value: float | None) -> bool:
    """Check that no required seasonal value is missing."""
    for season in seasons:
        for value in (values[season.direction_column], values[season.speed_column]):
            if math.isnan(value) or (no_data_value is not None and value == no_data_value):
                return False
    return True
