"""Track validation for ocean current track generation.

This module contains classes for deciding whether a traced
streamline is kept.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ocean_track_gen.constants import TracingDefaults
from ocean_track_gen.types import TrackValidatorInterface

if TYPE_CHECKING:
    from ocean_track_gen.data_classes import Track


class MinimumLengthTrackValidator(TrackValidatorInterface):
    """Accepts tracks holding at least a minimum number of points."""

    def __init__(self, minimum_track_points: int = TracingDefaults.MINIMUM_TRACK_POINTS) -> None:
        """Initialize the validator.

        Args:
            minimum_track_points: Smallest accepted number of points.
        """
        self.minimum_track_points = minimum_track_points

    def validate_track(self, track: Track) -> bool:
        """Check if a track is long enough to be kept.

        Args:
            track: Track to validate.

        Returns:
            True if track is valid, False otherwise.
        """
        return len(track) >= self.minimum_track_points
