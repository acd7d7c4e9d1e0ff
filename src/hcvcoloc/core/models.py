"""Data models for the hcvcoloc analysis core."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

import numpy as np

# Display colors as packed integers (0xBBGGRR), as the imaging platform expects.
CHANNEL_LAYOUT: tuple[tuple[int, str, int], ...] = (
    (1, "ER", 255),
    (2, "Core", 65535),
    (3, "LDs", 65280),
    (4, "Nucleus", 16711680),
)


@dataclass(frozen=True)
class Channel:
    """One fluorescence channel of a dataset and its intensity range.

    ``threshold`` and ``max`` are recomputed per dataset and never carried
    over from one dataset to the next.
    """

    index: int
    name: str
    color: int = 0
    threshold: float = 0.0
    max: float = 0.0

    @property
    def in_range(self) -> bool:
        """True if 0 <= threshold <= max."""
        return 0.0 <= self.threshold <= self.max


def default_channels() -> dict[str, Channel]:
    """Return the four channels of the HCV protocol keyed by name."""
    return {
        name: Channel(index=index, name=name, color=color)
        for index, name, color in CHANNEL_LAYOUT
    }


def _as_extent(values: Any) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


@dataclass(frozen=True, eq=False)
class VoxelVolume:
    """Intensity samples of one channel over a 3D voxel grid.

    Axes are ordered (z, y, x).

    Attributes:
        data: 3D intensity array. Never mutated.
        extent_min: Physical minimum coordinate per axis.
        extent_max: Physical maximum coordinate per axis. Defaults to the
            grid shape, i.e. unit voxels.
    """

    data: np.ndarray
    extent_min: tuple[float, ...] = (0.0, 0.0, 0.0)
    extent_max: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        data = np.asarray(self.data)
        if data.ndim != 3:
            raise ValueError(f"Voxel volume must be 3D, got shape {data.shape}")
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "extent_min", _as_extent(self.extent_min))
        if self.extent_max is None:
            extent_max = tuple(lo + n for lo, n in zip(self.extent_min, data.shape))
        else:
            extent_max = self.extent_max
        object.__setattr__(self, "extent_max", _as_extent(extent_max))

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self.data.shape)

    @property
    def voxel_size(self) -> tuple[float, ...]:
        """Physical voxel edge length per axis."""
        return tuple(
            (hi - lo) / n
            for lo, hi, n in zip(self.extent_min, self.extent_max, self.data.shape)
        )

    @property
    def voxel_volume(self) -> float:
        return float(np.prod(self.voxel_size))

    def samples(self) -> np.ndarray:
        """Flattened view of the intensity samples."""
        return self.data.ravel()


@dataclass(frozen=True, eq=False)
class BinaryMask(VoxelVolume):
    """A 0/1 voxel mask marking membership in one segmented 3D object."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not np.isin(self.data, (0, 1)).all():
            raise ValueError("Binary mask values must be 0 or 1")
        object.__setattr__(self, "data", self.data.astype(np.uint8, copy=False))

    @property
    def voxel_count(self) -> int:
        return int(np.count_nonzero(self.data))

    @property
    def volume(self) -> float:
        """Physical volume of the masked voxels."""
        return self.voxel_count * self.voxel_volume

    def same_grid(self, other: BinaryMask) -> bool:
        return (
            self.shape == other.shape
            and np.allclose(self.extent_min, other.extent_min)
            and np.allclose(self.extent_max, other.extent_max)
        )


@dataclass(frozen=True)
class ColocalizationResult:
    """Intensity colocalization of one dataset.

    Attributes:
        group: Group label (folder) of the dataset.
        sample_id: Dataset identifier.
        coefficients: Coefficient per ordered (A, B) channel-name pair: the
            fraction of A's above-threshold signal colocalized with B.
        channels: Channels (with threshold and max) used for the computation.
    """

    group: str
    sample_id: str
    coefficients: Mapping[tuple[str, str], float]
    channels: Mapping[str, Channel]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coefficients", MappingProxyType(dict(self.coefficients)))
        object.__setattr__(self, "channels", MappingProxyType(dict(self.channels)))

    def columns(self) -> list[str]:
        cols = ["Group", "Sample"]
        cols += [f"{a}/{b}" for a, b in self.coefficients]
        for ch in self._ordered_channels():
            cols += [f"{ch.name} max", f"{ch.name} thr"]
        return cols

    def as_row(self) -> list[Any]:
        row: list[Any] = [self.group, self.sample_id]
        row += list(self.coefficients.values())
        for ch in self._ordered_channels():
            row += [ch.max, ch.threshold]
        return row

    def _ordered_channels(self) -> list[Channel]:
        return sorted(self.channels.values(), key=lambda ch: ch.index)


@dataclass(frozen=True, eq=False)
class ObjectPopulation:
    """Per-object statistics of one labeled surface population."""

    name: str
    volumes: np.ndarray
    sphericities: np.ndarray | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "volumes", np.asarray(self.volumes, dtype=np.float64).ravel())
        if self.sphericities is not None:
            object.__setattr__(
                self, "sphericities",
                np.asarray(self.sphericities, dtype=np.float64).ravel(),
            )
            if self.sphericities.size != self.volumes.size:
                raise ValueError(
                    f"{self.name}: {self.sphericities.size} sphericities "
                    f"for {self.volumes.size} volumes"
                )

    def __len__(self) -> int:
        return int(self.volumes.size)


@dataclass(frozen=True)
class PopulationSummary:
    """Distribution summary of one statistic over a population."""

    count: int
    min: float
    max: float
    median: float
    sum: float
    mean: float
    std: float


STATISTICS_COLUMNS = [
    "Group", "Sample", "LD No", "LD Vol Min", "LD Vol Max", "LD Vol Median",
    "LD Vol Total", "LD Vol SD", "LD Sphericity Avg", "LD Sphericity SD",
    "ER Vol total", "ER Vol SD", "Core Vol Total", "Core Vol SD",
    "Nucleus Vol Total", "Nucleus Vol SD", "Surface Coloc Core/LD",
    "Surface Coloc Core/ER",
]


@dataclass(frozen=True)
class SampleStatistics:
    """Per-dataset summary of the segmented object populations."""

    group: str
    sample_id: str
    ld_volume: PopulationSummary
    ld_sphericity: PopulationSummary
    er_volume: PopulationSummary
    core_volume: PopulationSummary
    nucleus_volume: PopulationSummary
    coloc_core_ld_volume: float
    coloc_core_er_volume: float
    ld_volumes: tuple[float, ...] = field(default_factory=tuple)
    ld_sphericities: tuple[float, ...] = field(default_factory=tuple)

    def as_row(self) -> list[Any]:
        """Flat record in the order of ``STATISTICS_COLUMNS``."""
        return [
            self.group,
            self.sample_id,
            self.ld_volume.count,
            self.ld_volume.min,
            self.ld_volume.max,
            self.ld_volume.median,
            self.ld_volume.sum,
            self.ld_volume.std,
            self.ld_sphericity.mean,
            self.ld_sphericity.std,
            self.er_volume.sum,
            self.er_volume.std,
            self.core_volume.sum,
            self.core_volume.std,
            self.nucleus_volume.sum,
            self.nucleus_volume.std,
            self.coloc_core_ld_volume,
            self.coloc_core_er_volume,
        ]
