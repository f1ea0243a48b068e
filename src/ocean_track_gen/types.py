"""Type definitions and enumerations for ocean current track generation.

This module contains type definitions, enumerations, and protocols
that define the interfaces used throughout the package.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, TypedDict

from ocean_track_gen.constants import DatasetLayout
from ocean_track_gen.exceptions import InvalidConfigError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ocean_track_gen.data_classes import Track


class Season(Enum):
    """Seasons covered by the current dataset."""

    FALL = "Fall"
    WINTER = "Winter"
    SPRING = "Spring"
    SUMMER = "Summer"

    @property
    def direction_column(self) -> int:
        """Index of this season's direction field within a dataset row."""
        return _SEASON_DIRECTION_COLUMNS[self]

    @property
    def speed_column(self) -> int:
        """Index of this season's speed field within a dataset row."""
        return _SEASON_DIRECTION_COLUMNS[self] + 1

    @classmethod
    def from_label(cls, label: Season | str) -> Season:
        """Resolve a season from an enum member or a case-insensitive label.

        Args:
            label: Season member, value (``"Fall"``) or name (``"FALL"``).

        Returns:
            Matching Season.

        Raises:
            InvalidConfigError: If the label names no supported season.
        """
        if isinstance(label, cls):
            return label
        if isinstance(label, str):
            normalized = label.strip().lower()
            for season in cls:
                if season.value.lower() == normalized:
                    return season
        supported = ", ".join(season.value for season in cls)
        raise InvalidConfigError(f"Unsupported season {label!r}; expected one of: {supported}")


# Dataset rows store seasons in the order fall, spring, summer, winter
_SEASON_DIRECTION_COLUMNS: dict[Season, int] = {
    Season.FALL: DatasetLayout.COLUMN_NAMES.index("fall_direction"),
    Season.SPRING: DatasetLayout.COLUMN_NAMES.index("spring_direction"),
    Season.SUMMER: DatasetLayout.COLUMN_NAMES.index("summer_direction"),
    Season.WINTER: DatasetLayout.COLUMN_NAMES.index("winter_direction"),
}


class RenderType(Enum):
    """Display styles understood by the globe renderer.

    The engine never interprets this value; it is carried through to the renderer.
    """

    ARROWS = "Arrows"
    LINES = "Lines"


class TrackPointData(TypedDict):
    """Plain mapping form of a track point handed to renderers.

    Positions are in grid cells (x east from the antimeridian, y south from the
    north pole); velocities are in cells per step.
    """

    x: float
    y: float
    dx: float
    dy: float


class UniformRandomSource(Protocol):
    """Protocol for the random source used to draw seed positions.

    ``numpy.random.Generator`` satisfies it.
    """

    def uniform(self, low: float, high: float) -> float:
        """Draw a value from the half-open interval [low, high)."""
        ...


class TrackExporterInterface(ABC):
    """Abstract base class for track exporters.

    Follows Open/Closed Principle - open for extension, closed for modification.
    """

    @abstractmethod
    def export_tracks(
        self,
        tracks: Sequence[Track],
        output_filename_base: str,
        output_directory: Path | None = None,
    ) -> Path | list[Path]:
        """Export tracks to file(s).

        Args:
            tracks: Sequence of generated tracks.
            output_filename_base: Base filename for output.
            output_directory: Directory to save files in.

        Returns:
            Path or list of paths to created file(s).
        """
        ...


class TrackValidatorInterface(ABC):
    """Abstract base class for track acceptance strategies."""

    @abstractmethod
    def validate_track(self, track: Track) -> bool:
        """Decide whether a traced track is kept.

        Args:
            track: Track to validate.

        Returns:
            True if track is accepted, False otherwise.
        """
        ...
