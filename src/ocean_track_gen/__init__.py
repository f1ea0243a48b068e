"""Ocean Current Streamlines - Track Generation Library.

This package traces animated-streamline tracks through a seasonal global
ocean current field sampled on a one-degree grid.
"""

# Core types and data classes
from .constants import DEFAULT_OUTPUT_DIRECTORY
from .data_classes import (
    Track,
    TrackGenerationConfiguration,
    TrackGenerationResult,
    TrackPoint,
    Vector2,
    VectorSample,
)

# Dataset assembly and loading
from .dataset import (
    assemble_dataset_rows,
    load_dataset_rows_from_dataframe,
    load_dataset_rows_from_file,
)

# Errors
from .exceptions import (
    GenerationCancelledError,
    GenerationTimeoutError,
    InvalidConfigError,
    MalformedInputError,
    OceanTrackGenerationError,
)

# Export functionality
from .exporters import CsvTrackExporter, MatlabTrackExporter, tracks_to_dataframe

# Main orchestrator and session
from .generator import (
    CurrentTrackOrchestrator,
    TrackGenerationSession,
    generate_ocean_current_tracks,
    load_sample_grid_from_file,
)

# Engine components
from .integration import StreamlineStepIntegrator
from .interpolation import CurrentVectorInterpolator
from .sample_grid import SampleGrid
from .tracer import StreamlineTrackGenerator
from .types import RenderType, Season, TrackPointData

# Utilities
from .utilities import convert_grid_position_to_geographic, generate_unique_filepath
from .validation import MinimumLengthTrackValidator

# Visualization
from .visualization import TrackVisualizationRenderer

__all__ = [
    # Constants
    "DEFAULT_OUTPUT_DIRECTORY",
    # Core types
    "RenderType",
    "Season",
    "Track",
    "TrackGenerationConfiguration",
    "TrackGenerationResult",
    "TrackPoint",
    "TrackPointData",
    "Vector2",
    "VectorSample",
    # Errors
    "GenerationCancelledError",
    "GenerationTimeoutError",
    "InvalidConfigError",
    "MalformedInputError",
    "OceanTrackGenerationError",
    # Engine
    "CurrentVectorInterpolator",
    "MinimumLengthTrackValidator",
    "SampleGrid",
    "StreamlineStepIntegrator",
    "StreamlineTrackGenerator",
    # Main API
    "CurrentTrackOrchestrator",
    "TrackGenerationSession",
    "generate_ocean_current_tracks",
    "load_sample_grid_from_file",
    # Dataset
    "assemble_dataset_rows",
    "load_dataset_rows_from_dataframe",
    "load_dataset_rows_from_file",
    # Exporters
    "CsvTrackExporter",
    "MatlabTrackExporter",
    "tracks_to_dataframe",
    # Visualization
    "TrackVisualizationRenderer",
    # Utilities
    "convert_grid_position_to_geographic",
    "generate_unique_filepath",
]
