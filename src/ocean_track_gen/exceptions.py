"""Exception hierarchy for ocean current track generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ocean_track_gen.data_classes import Track


class OceanTrackGenerationError(Exception):
    """Base class for all errors raised by this package."""


class MalformedInputError(OceanTrackGenerationError, ValueError):
    """A dataset row could not be interpreted; no grid is produced."""


class InvalidConfigError(OceanTrackGenerationError, ValueError):
    """A generation request carried an unsupported season or parameter."""


class GenerationTimeoutError(OceanTrackGenerationError):
    """Track generation ran out of attempts or time before collecting every track.

    The tracks accepted so far are kept on the exception so the caller can decide
    whether a partial set is good enough.
    """

    def __init__(
        self,
        message: str,
        partial_tracks: list[Track],
        attempts: int,
        requested_track_count: int,
    ) -> None:
        super().__init__(message)
        self.partial_tracks = partial_tracks
        self.attempts = attempts
        self.requested_track_count = requested_track_count

    @property
    def shortfall(self) -> int:
        """Number of requested tracks that were not produced."""
        return self.requested_track_count - len(self.partial_tracks)


class GenerationCancelledError(OceanTrackGenerationError):
    """The caller cancelled an in-flight generation; partial results are discarded."""
