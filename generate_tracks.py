"""Example script for ocean current streamline generation.

This script demonstrates the API for generating streamline tracks from a
seasonal ocean current dataset.

All output files are automatically saved to the 'output' directory
with unique filenames to prevent overwriting.
"""

import sys

import numpy as np

from ocean_track_gen import (
    CurrentTrackOrchestrator,
    RenderType,
    SampleGrid,
    Season,
    TrackGenerationConfiguration,
    TrackGenerationSession,
    TrackVisualizationRenderer,
    assemble_dataset_rows,
)


def main() -> None:
    """Generate streamlines from a dataset file using the session-based API.

    The dataset path may be given as the first command line argument.
    """
    # Configuration parameters
    dataset_filepath = sys.argv[1] if len(sys.argv) > 1 else "data/ocean_currents.json"
    season = Season.FALL
    track_count = 500
    max_steps = 50

    session = TrackGenerationSession.create_from_file(dataset_filepath)

    if session is None:
        print(f"Failed to load dataset file: {dataset_filepath}")
        return

    print(f"Loaded dataset: {session.dataset_name} ({len(session.sample_grid)} cells)")

    tracks = session.generate_tracks(
        season=season,
        track_count=track_count,
        max_steps=max_steps,
        render_type=RenderType.LINES,
    )

    print(f"Successfully generated {len(tracks)} tracks")

    csv_output_paths = session.export_to_csv()
    if csv_output_paths:
        print(f"Saved CSV file(s): {csv_output_paths}")

    matlab_output_path = session.export_to_matlab()
    if matlab_output_path:
        print(f"Saved MATLAB file: {matlab_output_path}")

    saved_path = session.visualize_tracks()
    if saved_path:
        print(f"Saved plot image: {saved_path}")


def main_alternative() -> None:
    """Alternative approach using a synthetic field and explicit components.

    Builds two basin-scale gyres as raster bands, assembles them into dataset
    rows, and drives the orchestrator directly with a seeded generator.
    """
    longitudes = np.arange(360) - 180.0
    latitudes = 90.0 - np.arange(180)
    longitude_grid, latitude_grid = np.meshgrid(longitudes, latitudes)

    # Clockwise gyre north of the equator, anticlockwise south of it
    direction = np.degrees(np.arctan2(np.cos(np.radians(latitude_grid * 4.0)), np.sin(np.radians(longitude_grid))))
    direction = np.mod(direction, 360.0)
    speed = 0.5 + 0.5 * np.abs(np.cos(np.radians(latitude_grid)))
    bands = [direction, speed] * 4

    sample_grid = SampleGrid.build(assemble_dataset_rows(bands))
    orchestrator = CurrentTrackOrchestrator(sample_grid)

    configuration = TrackGenerationConfiguration(
        season=Season.WINTER,
        track_count=200,
        max_steps=40,
        render_type=RenderType.ARROWS,
    )
    result = orchestrator.regenerate_with_report(configuration, seed=7)
    print(f"Generated {len(result.tracks)} tracks in {result.attempts} attempts")

    saved_path = TrackVisualizationRenderer.render_streamlines(
        result.tracks,
        "Synthetic Gyres",
        render_type=result.render_type,
        output_filename_base="synthetic_gyres",
    )
    if saved_path:
        print(f"Saved plot image: {saved_path}")


if __name__ == "__main__":
    main()
