"""hcvcoloc core — data model, configuration and exceptions."""

from hcvcoloc.core.config import AnalysisConfig
from hcvcoloc.core.exceptions import (
    AnalysisError,
    ConfigError,
    EmptyInputError,
    InsufficientDataError,
    NoPeakFoundError,
    ShapeMismatchError,
)
from hcvcoloc.core.models import (
    BinaryMask,
    Channel,
    ColocalizationResult,
    ObjectPopulation,
    PopulationSummary,
    SampleStatistics,
    VoxelVolume,
    default_channels,
)

__all__ = [
    "AnalysisConfig",
    "BinaryMask",
    "Channel",
    "ColocalizationResult",
    "ObjectPopulation",
    "PopulationSummary",
    "SampleStatistics",
    "VoxelVolume",
    "default_channels",
    "AnalysisError",
    "ConfigError",
    "EmptyInputError",
    "InsufficientDataError",
    "NoPeakFoundError",
    "ShapeMismatchError",
]
