"""Streamline tracing and track collection.

This module contains the generator that seeds random start positions,
traces streamlines through the current field, and collects the
accepted tracks.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ocean_track_gen.constants import TracingDefaults
from ocean_track_gen.data_classes import Track, Vector2
from ocean_track_gen.exceptions import GenerationCancelledError, GenerationTimeoutError
from ocean_track_gen.integration import StreamlineStepIntegrator
from ocean_track_gen.interpolation import CurrentVectorInterpolator
from ocean_track_gen.validation import MinimumLengthTrackValidator

if TYPE_CHECKING:
    import threading

    from ocean_track_gen.sample_grid import SampleGrid
    from ocean_track_gen.types import Season, TrackValidatorInterface, UniformRandomSource

LOGGER = logging.getLogger(__name__)


class StreamlineTrackGenerator:
    """Traces streamlines from random seeds and collects the accepted ones.

    Components are injected so tests and callers can swap the interpolation,
    integration, or acceptance strategy.
    """

    def __init__(
        self,
        sample_grid: SampleGrid,
        interpolator: CurrentVectorInterpolator | None = None,
        integrator: StreamlineStepIntegrator | None = None,
        validator: TrackValidatorInterface | None = None,
    ) -> None:
        """Initialize the track generator.

        Args:
            sample_grid: Grid providing the current samples.
            interpolator: Optional custom interpolator (created if not provided).
            integrator: Optional custom integrator (created if not provided).
            validator: Optional custom validator (created if not provided).
        """
        self.sample_grid = sample_grid
        self.interpolator = interpolator or CurrentVectorInterpolator(sample_grid)
        self.integrator = integrator or StreamlineStepIntegrator()
        self.validator = validator or MinimumLengthTrackValidator()

    def draw_seed_position(self, rng: UniformRandomSource) -> Vector2:
        """Draw a uniformly distributed start position over the whole grid."""
        seed_x = float(rng.uniform(0.0, self.sample_grid.width))
        seed_y = float(rng.uniform(0.0, self.sample_grid.height))
        return Vector2(seed_x, seed_y)

    def trace_from_seed(
        self,
        seed_position: Vector2,
        season: Season,
        max_steps: int,
        step_size: float = TracingDefaults.STEP_SIZE,
    ) -> Track | None:
        """Trace a streamline from a given start position.

        The track ends after ``max_steps`` steps or at the last point before
        the field runs out, whichever comes first. No length filtering happens here.

        Args:
            seed_position: Start position.
            season: Season to read.
            max_steps: Maximum number of integration steps.
            step_size: Step multiplier.

        Returns:
            Traced points, or None if the seed itself has no data.
        """
        first_point = self.interpolator.estimate(seed_position, season)
        if first_point is None:
            return None

        track: Track = [first_point]
        for _ in range(max_steps):
            next_position = self.integrator.advance(track[-1], step_size)
            next_point = self.interpolator.estimate(next_position, season)
            if next_point is None:
                break
            track.append(next_point)

        return track

    def trace_one(
        self,
        season: Season,
        rng: UniformRandomSource,
        max_steps: int,
        step_size: float = TracingDefaults.STEP_SIZE,
    ) -> Track | None:
        """Seed and trace a single candidate track.

        Args:
            season: Season to read.
            rng: Random source for the seed position.
            max_steps: Maximum number of integration steps.
            step_size: Step multiplier.

        Returns:
            Accepted track, or None if the seed was invalid or the track too short.
        """
        track = self.trace_from_seed(self.draw_seed_position(rng), season, max_steps, step_size)
        if track is None or not self.validator.validate_track(track):
            return None
        return track

    def collect_tracks(
        self,
        season: Season,
        track_count: int,
        max_steps: int,
        step_size: float,
        rng: UniformRandomSource,
        maximum_attempts_per_track: int = TracingDefaults.MAXIMUM_ATTEMPTS_PER_TRACK,
        deadline_seconds: float | None = None,
        cancellation_event: threading.Event | None = None,
    ) -> tuple[list[Track], int]:
        """Collect accepted tracks until the requested count is reached.

        Invalid seeds and short tracks are retried transparently. The total
        number of seeds is capped at ``maximum_attempts_per_track * track_count``
        so a sparse field cannot keep the loop running forever.

        Args:
            season: Season to read.
            track_count: Number of tracks to collect.
            max_steps: Maximum number of integration steps per track.
            step_size: Step multiplier.
            rng: Random source for seed positions.
            maximum_attempts_per_track: Seed budget per requested track.
            deadline_seconds: Optional wall-clock budget for the whole call.
            cancellation_event: Optional event; once set the call is abandoned.

        Returns:
            Tuple of (accepted tracks in the order accepted, seeds drawn).

        Raises:
            GenerationTimeoutError: If the seed budget or deadline runs out first.
            GenerationCancelledError: If the cancellation event is set.
        """
        tracks: list[Track] = []
        maximum_attempts = maximum_attempts_per_track * track_count
        start_time = time.monotonic()
        attempts = 0
        invalid_seeds = 0
        short_tracks = 0

        while len(tracks) < track_count:
            if cancellation_event is not None and cancellation_event.is_set():
                LOGGER.debug("Generation cancelled after %d attempts", attempts)
                raise GenerationCancelledError(
                    f"Generation cancelled after {attempts} attempts ({len(tracks)} tracks discarded)"
                )

            if attempts >= maximum_attempts:
                raise self._build_timeout_error(
                    f"Gave up after {attempts} attempts",
                    tracks,
                    attempts,
                    track_count,
                )

            if deadline_seconds is not None and time.monotonic() - start_time > deadline_seconds:
                raise self._build_timeout_error(
                    f"Deadline of {deadline_seconds:.2f} s exceeded after {attempts} attempts",
                    tracks,
                    attempts,
                    track_count,
                )

            attempts += 1
            track = self.trace_from_seed(self.draw_seed_position(rng), season, max_steps, step_size)
            if track is None:
                invalid_seeds += 1
                continue
            if not self.validator.validate_track(track):
                short_tracks += 1
                continue

            tracks.append(track)

        LOGGER.debug(
            "Collected %d %s tracks in %d attempts (%d invalid seeds, %d short tracks)",
            len(tracks),
            season.value,
            attempts,
            invalid_seeds,
            short_tracks,
        )
        return tracks, attempts

    def generate(
        self,
        season: Season,
        track_count: int,
        max_steps: int,
        step_size: float,
        rng: UniformRandomSource,
        maximum_attempts_per_track: int = TracingDefaults.MAXIMUM_ATTEMPTS_PER_TRACK,
        deadline_seconds: float | None = None,
        cancellation_event: threading.Event | None = None,
    ) -> list[Track]:
        """Collect accepted tracks until the requested count is reached.

        See :meth:`collect_tracks` for the arguments and raised errors.

        Returns:
            Accepted tracks in the order they were accepted.
        """
        tracks, _ = self.collect_tracks(
            season,
            track_count,
            max_steps,
            step_size,
            rng,
            maximum_attempts_per_track=maximum_attempts_per_track,
            deadline_seconds=deadline_seconds,
            cancellation_event=cancellation_event,
        )
        return tracks

    @staticmethod
    def _build_timeout_error(
        reason: str,
        tracks: list[Track],
        attempts: int,
        track_count: int,
    ) -> GenerationTimeoutError:
        """Create the error reporting a generation shortfall."""
        LOGGER.warning("%s; collected %d of %d tracks", reason, len(tracks), track_count)
        return GenerationTimeoutError(
            f"{reason}; collected {len(tracks)} of {track_count} tracks",
            partial_tracks=tracks,
            attempts=attempts,
            requested_track_count=track_count,
        )
