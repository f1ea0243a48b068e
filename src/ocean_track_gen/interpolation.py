"""Estimation of the current vector at continuous grid positions.

This module contains the interpolator that combines the samples of the
four cells surrounding a position into a single vector estimate.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ocean_track_gen.data_classes import TrackPoint, Vector2

if TYPE_CHECKING:
    from ocean_track_gen.sample_grid import SampleGrid
    from ocean_track_gen.types import Season


class CurrentVectorInterpolator:
    """Estimates current vectors between grid cells.

    Each present neighbour is weighted by ``1 - d / S`` where ``d`` is its
    squared distance to the query point and ``S`` the sum of those distances.
    The weights add up to ``n - 1`` for ``n`` neighbours rather than 1; the
    streamline shapes drawn from this dataset depend on that scaling, so it is
    kept as is.
    """

    def __init__(self, sample_grid: SampleGrid) -> None:
        """Initialize the interpolator.

        Args:
            sample_grid: Grid providing the cell samples.
        """
        self.sample_grid = sample_grid

    def estimate(self, position: Vector2, season: Season) -> TrackPoint | None:
        """Estimate the current vector at a position.

        Args:
            position: Continuous grid position.
            season: Season to read.

        Returns:
            Track point located at the query position, or None if the position
            is not finite or none of the four surrounding cells holds data.
        """
        if not (math.isfinite(position.x) and math.isfinite(position.y)):
            return None

        neighbours = self._collect_neighbours(position, season)
        if not neighbours:
            return None

        squared_distances = [
            (cell_x - position.x) ** 2 + (cell_y - position.y) ** 2 for cell_x, cell_y, _ in neighbours
        ]

        for squared_distance, (_, _, vector) in zip(squared_distances, neighbours):
            if squared_distance == 0:
                return TrackPoint(position.x, position.y, vector.x, vector.y)

        distance_sum = sum(squared_distances)
        dx = 0.0
        dy = 0.0
        for squared_distance, (_, _, vector) in zip(squared_distances, neighbours):
            weight = 1.0 - squared_distance / distance_sum
            dx += weight * vector.x
            dy += weight * vector.y

        return TrackPoint(position.x, position.y, dx, dy)

    def _collect_neighbours(self, position: Vector2, season: Season) -> list[tuple[int, int, Vector2]]:
        """Get the present samples among the four cells around a position."""
        base_x = math.floor(position.x)
        base_y = math.floor(position.y)
        neighbours: list[tuple[int, int, Vector2]] = []
        for cell_x, cell_y in (
            (base_x, base_y),
            (base_x + 1, base_y),
            (base_x, base_y + 1),
            (base_x + 1, base_y + 1),
        ):
            vector = self.sample_grid.lookup(cell_x, cell_y, season)
            if vector is not None:
                neighbours.append((cell_x, cell_y, vector))
        return neighbours
