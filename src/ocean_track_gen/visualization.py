"""Track visualization for ocean current track generation.

This module contains a matplotlib preview of generated streamlines on a
flat longitude/latitude map.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np

from ocean_track_gen.constants import DEFAULT_OUTPUT_DIRECTORY, GridDimensions
from ocean_track_gen.types import RenderType
from ocean_track_gen.utilities import convert_grid_position_to_geographic, generate_unique_filepath

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ocean_track_gen.data_classes import Track


class TrackVisualizationRenderer:
    """Creates previews of generated ocean current streamlines."""

    @staticmethod
    def render_streamlines(
        tracks: Sequence[Track],
        plot_title: str = "Ocean Current Streamlines",
        render_type: RenderType | str | None = RenderType.LINES,
        grid_width: int = GridDimensions.WIDTH,
        grid_height: int = GridDimensions.HEIGHT,
        output_filepath: Path | str | None = None,
        output_directory: Path | None = None,
        output_filename_base: str | None = None,
    ) -> Path | None:
        """Draw streamlines on a longitude/latitude plot.

        Args:
            tracks: Sequence of tracks.
            plot_title: Plot title.
            render_type: ``Lines`` draws polylines, ``Arrows`` draws the
                velocity at every point.
            grid_width: Number of grid columns.
            grid_height: Number of grid rows.
            output_filepath: Explicit path to save the plot image. If None, uses output_directory.
            output_directory: Directory to save files in (uses DEFAULT_OUTPUT_DIRECTORY if None).
            output_filename_base: Base filename for auto-generated path (required if output_filepath is None
                and saving to file is desired).

        Returns:
            Path to saved file if saving, None if displaying interactively.
        """
        if isinstance(render_type, str):
            draw_arrows = render_type.strip().lower() == RenderType.ARROWS.value.lower()
        else:
            draw_arrows = render_type is RenderType.ARROWS
        figure, axes = plt.subplots(figsize=(12, 6))

        for track in tracks:
            coordinates = np.array(
                [convert_grid_position_to_geographic(point.x, point.y, grid_width, grid_height) for point in track]
            )
            if draw_arrows:
                # Grid dy grows southwards, latitude grows northwards
                axes.quiver(
                    coordinates[:, 0],
                    coordinates[:, 1],
                    [point.dx for point in track],
                    [-point.dy for point in track],
                    angles="xy",
                    width=0.002,
                )
            else:
                axes.plot(coordinates[:, 0], coordinates[:, 1], linewidth=0.8)

        axes.set_xlim(-180.0, 180.0)
        axes.set_ylim(-90.0, 90.0)
        axes.set_xlabel("Longitude (deg)")
        axes.set_ylabel("Latitude (deg)")
        axes.set_title(plot_title)
        axes.set_aspect("equal")

        # Determine save path
        save_path: Path | None = None
        if output_filepath is not None:
            save_path = Path(output_filepath)
            save_path.parent.mkdir(parents=True, exist_ok=True)
        elif output_filename_base is not None:
            target_directory = output_directory or DEFAULT_OUTPUT_DIRECTORY
            save_path = generate_unique_filepath(target_directory, f"{output_filename_base}_streamlines", ".png")

        if save_path is not None:
            figure.savefig(save_path, dpi=150, bbox_inches="tight")
            plt.close(figure)
            return save_path

        plt.show()
        return None
