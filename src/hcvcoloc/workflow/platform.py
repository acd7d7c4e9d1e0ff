"""ImagingPlatform — the external imaging collaborator seen by the batch runner.

The platform owns everything outside the numerical core: opening and saving
datasets, surface segmentation, per-object statistics and display settings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from hcvcoloc.core.models import BinaryMask, Channel, ObjectPopulation, VoxelVolume
from hcvcoloc.measure.volume_coloc import VolumeColocalization


class ImagingPlatform(ABC):
    """Narrow interface to the host imaging platform for one dataset."""

    @abstractmethod
    def open(self, path: Path) -> None:
        """Load the dataset at ``path``."""

    @abstractmethod
    def voxels(self, channel: Channel) -> VoxelVolume:
        """Raw intensity volume of a channel."""

    @abstractmethod
    def channel_range(self, channel: Channel) -> tuple[float, float]:
        """Current (threshold, max) display range of a channel."""

    @abstractmethod
    def apply_channel(self, channel: Channel) -> None:
        """Set name, color and (threshold, max) range of a channel."""

    @abstractmethod
    def surface_names(self) -> list[str]:
        """Names of the surfaces in the scene, in scene order."""

    @abstractmethod
    def remove_surface(self, name: str) -> None:
        """Remove a surface from the scene."""

    @abstractmethod
    def detect_surfaces(
        self,
        channel: Channel,
        threshold: float,
        smoothing: float,
    ) -> None:
        """Segment a channel into a surface named after the channel."""

    @abstractmethod
    def surface_mask(self, name: str) -> BinaryMask:
        """Binary mask of a surface on the dataset voxel grid."""

    @abstractmethod
    def add_colocalization_surface(self, colocalization: VolumeColocalization) -> None:
        """Add an intersection mask as a channel and segment it into a surface."""

    @abstractmethod
    def object_statistics(self, name: str) -> ObjectPopulation:
        """Per-object volumes (and sphericities, where available) of a surface."""

    @abstractmethod
    def save(self) -> None:
        """Persist the dataset, including display ranges and surfaces."""

    @abstractmethod
    def close(self) -> None:
        """Release the dataset and the platform connection."""
