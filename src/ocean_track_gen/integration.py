"""Step integration along the current field."""

from __future__ import annotations

from ocean_track_gen.constants import TracingDefaults
from ocean_track_gen.data_classes import TrackPoint, Vector2


class StreamlineStepIntegrator:
    """Advances a traced particle by one explicit Euler step.

    Positions are never clamped or wrapped at the antimeridian; a point that
    leaves the grid simply finds no samples on its next estimate.
    """

    def __init__(self, step_size: float = TracingDefaults.STEP_SIZE) -> None:
        self.step_size = step_size

    def advance(self, current: TrackPoint, step_size: float | None = None) -> Vector2:
        """Move a point along its own velocity.

        Args:
            current: Point with the velocity estimated at its position.
            step_size: Step multiplier (uses the integrator default if None).

        Returns:
            Next position.
        """
        step = self.step_size if step_size is None else step_size
        return Vector2(current.x + step * current.dx, current.y + step * current.dy)
