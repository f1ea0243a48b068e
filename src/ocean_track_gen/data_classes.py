"""Data classes for ocean current track generation.

This module contains dataclasses that represent positions, samples,
tracks, and configuration objects used throughout the package.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ocean_track_gen.constants import TracingDefaults
from ocean_track_gen.types import RenderType, Season, TrackPointData
from ocean_track_gen.utilities import convert_direction_to_vector_components

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class Vector2:
    """A 2-D quantity used both for grid positions and for velocity components."""

    x: float
    y: float


@dataclass(frozen=True)
class TrackPoint:
    """A position on the grid together with the current velocity estimated there."""

    x: float
    y: float
    dx: float
    dy: float

    @property
    def position(self) -> Vector2:
        """Get the position part of the point."""
        return Vector2(self.x, self.y)

    @property
    def velocity(self) -> Vector2:
        """Get the velocity part of the point."""
        return Vector2(self.dx, self.dy)

    @property
    def speed(self) -> float:
        """Get the velocity magnitude."""
        return math.hypot(self.dx, self.dy)

    def to_dictionary(self) -> TrackPointData:
        """Convert to the plain mapping consumed by renderers."""
        return {"x": self.x, "y": self.y, "dx": self.dx, "dy": self.dy}


Track = list[TrackPoint]


@dataclass(frozen=True)
class SeasonalCurrent:
    """Direction and magnitude of the current for one season."""

    direction_degrees: float
    magnitude: float

    def to_vector_components(self) -> Vector2:
        """Convert to Cartesian grid components (y grows southwards)."""
        dx, dy = convert_direction_to_vector_components(self.direction_degrees, self.magnitude)
        return Vector2(dx, dy)


@dataclass(frozen=True)
class VectorSample:
    """Immutable seasonal current record attached to one grid cell."""

    cell_identifier: int
    fall: SeasonalCurrent | None = None
    winter: SeasonalCurrent | None = None
    spring: SeasonalCurrent | None = None
    summer: SeasonalCurrent | None = None

    def for_season(self, season: Season) -> SeasonalCurrent | None:
        """Get the current recorded for a season, if any."""
        return getattr(self, season.name.lower())

    @classmethod
    def from_dataset_row(
        cls,
        row: Sequence[float],
        seasons: Sequence[Season] = tuple(Season),
    ) -> VectorSample:
        """Create a VectorSample from a dataset row.

        Args:
            row: Dataset row ``[cell_id, fall_dir, fall_speed, ...]``.
            seasons: Seasons to keep; the others are left empty.

        Returns:
            VectorSample instance.
        """
        seasonal_values: dict[str, SeasonalCurrent] = {
            season.name.lower(): SeasonalCurrent(
                direction_degrees=float(row[season.direction_column]),
                magnitude=float(row[season.speed_column]),
            )
            for season in seasons
        }
        return cls(cell_identifier=int(row[0]), **seasonal_values)


@dataclass(frozen=True)
class TrackGenerationConfiguration:
    """Parameters of one regeneration request.

    ``render_type`` is carried through untouched for the renderer.
    """

    season: Season | str
    track_count: int
    max_steps: int
    step_size: float = TracingDefaults.STEP_SIZE
    render_type: RenderType | str | None = None
    minimum_track_points: int = TracingDefaults.MINIMUM_TRACK_POINTS
    maximum_attempts_per_track: int = TracingDefaults.MAXIMUM_ATTEMPTS_PER_TRACK
    deadline_seconds: float | None = None


@dataclass
class TrackGenerationResult:
    """Outcome of a regeneration request."""

    tracks: list[Track]
    season: Season
    requested_track_count: int
    attempts: int
    render_type: Any = None
    elapsed_seconds: float = 0.0

    @property
    def shortfall(self) -> int:
        """Number of requested tracks that were not produced."""
        return self.requested_track_count - len(self.tracks)

    @property
    def point_count(self) -> int:
        """Total number of points over all tracks."""
        return sum(len(track) for track in self.tracks)
