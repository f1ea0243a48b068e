"""Main track orchestrator and session management.

This module contains the public entry point for regenerating tracks and
the session object that holds the built sample grid for a workflow.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from ocean_track_gen.constants import GridDimensions, TracingDefaults
from ocean_track_gen.data_classes import Track, TrackGenerationConfiguration, TrackGenerationResult
from ocean_track_gen.dataset import load_dataset_rows_from_file
from ocean_track_gen.exceptions import InvalidConfigError
from ocean_track_gen.exporters import CsvTrackExporter, MatlabTrackExporter
from ocean_track_gen.interpolation import CurrentVectorInterpolator
from ocean_track_gen.sample_grid import SampleGrid
from ocean_track_gen.tracer import StreamlineTrackGenerator
from ocean_track_gen.types import RenderType, Season
from ocean_track_gen.validation import MinimumLengthTrackValidator
from ocean_track_gen.visualization import TrackVisualizationRenderer

if TYPE_CHECKING:
    import threading

    from ocean_track_gen.types import UniformRandomSource


class CurrentTrackOrchestrator:
    """Public entry point for streamline regeneration.

    Holds the sample grid for its lifetime and nothing else: every call to
    :meth:`regenerate` is independent and returns a fresh set of tracks.
    """

    def __init__(
        self,
        sample_grid: SampleGrid,
        track_generator: StreamlineTrackGenerator | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            sample_grid: Built sample grid shared by all requests.
            track_generator: Optional custom generator. When omitted a generator
                honouring each request's minimum track length is created per call.
                An injected generator keeps its own acceptance rule, so requests
                asking for a non-default ``minimum_track_points`` are rejected.
        """
        self.sample_grid = sample_grid
        self._track_generator = track_generator
        self._interpolator = CurrentVectorInterpolator(sample_grid)

    def validate_configuration(self, configuration: TrackGenerationConfiguration) -> Season:
        """Check a request and resolve its season.

        Args:
            configuration: Request to check.

        Returns:
            Resolved season.

        Raises:
            InvalidConfigError: If any value is unsupported.
        """
        season = Season.from_label(configuration.season)
        if season not in self.sample_grid.seasons:
            raise InvalidConfigError(f"Season {season.value} was not loaded into the sample grid")

        for name in ("track_count", "max_steps", "minimum_track_points", "maximum_attempts_per_track"):
            value = getattr(configuration, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
                raise InvalidConfigError(f"{name} must be a positive integer, got {value!r}")

        step_size = configuration.step_size
        is_number = isinstance(step_size, (int, float)) and not isinstance(step_size, bool)
        if not is_number or not math.isfinite(step_size) or step_size <= 0:
            raise InvalidConfigError(f"step_size must be a positive finite number, got {step_size!r}")

        deadline = configuration.deadline_seconds
        is_number = isinstance(deadline, (int, float)) and not isinstance(deadline, bool)
        if deadline is not None and (not is_number or math.isnan(deadline) or deadline <= 0):
            raise InvalidConfigError(f"deadline_seconds must be positive, got {deadline!r}")

        if (
            self._track_generator is not None
            and configuration.minimum_track_points != TracingDefaults.MINIMUM_TRACK_POINTS
        ):
            raise InvalidConfigError(
                "minimum_track_points cannot be set per request when a custom track generator is injected"
            )

        return season

    def _resolve_track_generator(self, configuration: TrackGenerationConfiguration) -> StreamlineTrackGenerator:
        """Get the generator to use for a request."""
        if self._track_generator is not None:
            return self._track_generator
        return StreamlineTrackGenerator(
            self.sample_grid,
            interpolator=self._interpolator,
            validator=MinimumLengthTrackValidator(configuration.minimum_track_points),
        )

    def regenerate_with_report(
        self,
        configuration: TrackGenerationConfiguration,
        rng: UniformRandomSource | None = None,
        seed: int | None = None,
        cancellation_event: threading.Event | None = None,
    ) -> TrackGenerationResult:
        """Generate a fresh set of tracks and report how they were obtained.

        Args:
            configuration: Request parameters.
            rng: Random source for seeds (a generator seeded with ``seed`` if None).
            seed: Seed for the default random source.
            cancellation_event: Optional event that abandons the request once set.

        Returns:
            Generation result with tracks in the order accepted.

        Raises:
            InvalidConfigError: If the request is invalid.
            GenerationTimeoutError: If the attempt budget or deadline runs out.
            GenerationCancelledError: If the request is cancelled.
        """
        season = self.validate_configuration(configuration)
        random_source = rng if rng is not None else np.random.default_rng(seed)
        track_generator = self._resolve_track_generator(configuration)

        start_time = time.perf_counter()
        tracks, attempts = track_generator.collect_tracks(
            season,
            configuration.track_count,
            configuration.max_steps,
            float(configuration.step_size),
            random_source,
            maximum_attempts_per_track=configuration.maximum_attempts_per_track,
            deadline_seconds=configuration.deadline_seconds,
            cancellation_event=cancellation_event,
        )

        return TrackGenerationResult(
            tracks=tracks,
            season=season,
            requested_track_count=configuration.track_count,
            attempts=attempts,
            render_type=configuration.render_type,
            elapsed_seconds=time.perf_counter() - start_time,
        )

    def regenerate(
        self,
        configuration: TrackGenerationConfiguration,
        rng: UniformRandomSource | None = None,
        seed: int | None = None,
        cancellation_event: threading.Event | None = None,
    ) -> list[Track]:
        """Generate a fresh set of tracks.

        Args:
            configuration: Request parameters.
            rng: Random source for seeds (a generator seeded with ``seed`` if None).
            seed: Seed for the default random source.
            cancellation_event: Optional event that abandons the request once set.

        Returns:
            Tracks in the order accepted.
        """
        return self.regenerate_with_report(configuration, rng, seed, cancellation_event).tracks


def load_sample_grid_from_file(
    filepath: str | Path,
    pole_buffer: int = GridDimensions.DEFAULT_POLE_BUFFER_CELLS,
    no_data_value: float | None = None,
) -> SampleGrid | None:
    """Load a dataset file and build its sample grid.

    Args:
        filepath: Path to a JSON or CSV dataset.
        pole_buffer: Number of rows excluded at each pole.
        no_data_value: Sentinel marking missing values.

    Returns:
        Built SampleGrid, or None if the file does not exist.

    Raises:
        MalformedInputError: If the dataset is malformed.
    """
    rows = load_dataset_rows_from_file(filepath)
    if rows is None:
        return None
    return SampleGrid.build(rows, pole_buffer=pole_buffer, no_data_value=no_data_value)


@dataclass
class TrackGenerationSession:
    """Encapsulates a track generation session, replacing global state.

    This class owns the built sample grid and the latest generated tracks,
    and provides a clean interface for the generation workflow.
    """

    sample_grid: SampleGrid
    dataset_name: str
    orchestrator: CurrentTrackOrchestrator
    generated_tracks: list[Track] = field(default_factory=list)
    last_result: TrackGenerationResult | None = None

    @classmethod
    def create_from_grid(cls, sample_grid: SampleGrid, dataset_name: str = "ocean_currents") -> TrackGenerationSession:
        """Create a session around an already built grid."""
        return cls(
            sample_grid=sample_grid,
            dataset_name=dataset_name,
            orchestrator=CurrentTrackOrchestrator(sample_grid),
        )

    @classmethod
    def create_from_file(
        cls,
        filepath: str | Path,
        pole_buffer: int = GridDimensions.DEFAULT_POLE_BUFFER_CELLS,
        no_data_value: float | None = None,
    ) -> TrackGenerationSession | None:
        """Create a track generation session from a dataset file.

        Args:
            filepath: Path to the JSON or CSV dataset.
            pole_buffer: Number of rows excluded at each pole.
            no_data_value: Sentinel marking missing values.

        Returns:
            TrackGenerationSession instance or None if the file does not exist.
        """
        sample_grid = load_sample_grid_from_file(filepath, pole_buffer, no_data_value)
        if sample_grid is None:
            return None
        return cls.create_from_grid(sample_grid, Path(filepath).stem)

    def generate_tracks(
        self,
        season: Season | str,
        track_count: int,
        max_steps: int,
        step_size: float = 1.0,
        render_type: RenderType | str | None = None,
        seed: int | None = None,
    ) -> list[Track]:
        """Generate tracks and store results in session.

        Args:
            season: Season to trace.
            track_count: Number of tracks to generate.
            max_steps: Maximum number of steps per track.
            step_size: Step multiplier.
            render_type: Renderer display style, passed through untouched.
            seed: Seed for reproducible generation.

        Returns:
            List of generated tracks.
        """
        configuration = TrackGenerationConfiguration(
            season=season,
            track_count=track_count,
            max_steps=max_steps,
            step_size=step_size,
            render_type=render_type,
        )
        self.last_result = self.orchestrator.regenerate_with_report(configuration, seed=seed)
        self.generated_tracks = self.last_result.tracks
        return self.generated_tracks

    def export_to_csv(self, output_filename_base: str | None = None, output_directory: Path | None = None) -> list[Path]:
        """Export generated tracks to CSV format.

        Args:
            output_filename_base: Base filename (uses dataset name if not provided).
            output_directory: Directory to save files in.

        Returns:
            List of created file paths.
        """
        filename_base = output_filename_base or self.dataset_name
        exporter = CsvTrackExporter()
        return exporter.export_tracks(self.generated_tracks, filename_base, output_directory)

    def export_to_matlab(self, output_filename_base: str | None = None, output_directory: Path | None = None) -> Path | None:
        """Export generated tracks to MATLAB format.

        Args:
            output_filename_base: Base filename (uses dataset name if not provided).
            output_directory: Directory to save files in.

        Returns:
            Path to created file or None if no tracks.
        """
        if not self.generated_tracks:
            print("No tracks to export.")
            return None

        filename_base = output_filename_base or self.dataset_name
        exporter = MatlabTrackExporter()
        return exporter.export_tracks(self.generated_tracks, filename_base, output_directory)

    def visualize_tracks(
        self,
        plot_title: str | None = None,
        output_filepath: Path | str | None = None,
        save_to_file: bool = True,
    ) -> Path | None:
        """Draw the generated streamlines on a longitude/latitude plot.

        Args:
            plot_title: Plot title (uses dataset name if not provided).
            output_filepath: Explicit path to save the plot image.
            save_to_file: If True and output_filepath is None, saves to output directory
                with unique filename. If False, displays interactively.

        Returns:
            Path to saved file if saving, None if displaying interactively.
        """
        title = plot_title or self.dataset_name.replace("_", " ")
        filename_base = self.dataset_name if save_to_file else None
        return TrackVisualizationRenderer.render_streamlines(
            self.generated_tracks,
            title,
            render_type=self.last_result.render_type if self.last_result else RenderType.LINES,
            grid_width=self.sample_grid.width,
            grid_height=self.sample_grid.height,
            output_filepath=output_filepath,
            output_filename_base=filename_base,
        )


def generate_ocean_current_tracks(
    dataset_filepath: str | Path,
    season: Season | str,
    track_count: int,
    max_steps: int,
    seed: int | None = None,
) -> tuple[list[Track], TrackGenerationSession] | None:
    """Generate ocean current streamlines from a dataset file.

    This is the main entry point for one-shot track generation.

    Args:
        dataset_filepath: Path to the JSON or CSV dataset.
        season: Season to trace.
        track_count: Number of tracks to generate.
        max_steps: Maximum number of steps per track.
        seed: Seed for reproducible generation.

    Returns:
        Tuple of (tracks, session) or None if the dataset file does not exist.
    """
    start_time = time.time()

    session = TrackGenerationSession.create_from_file(dataset_filepath)
    if session is None:
        return None

    tracks = session.generate_tracks(season, track_count, max_steps, seed=seed)

    elapsed_time = time.time() - start_time
    print(f"Total time taken: {elapsed_time:.2f} seconds")

    return tracks, session
