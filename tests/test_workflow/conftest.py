"""Shared fixtures for workflow tests — an in-memory imaging platform."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from hcvcoloc.core.models import BinaryMask, Channel, ObjectPopulation, VoxelVolume
from hcvcoloc.io.models import DatasetFile
from hcvcoloc.measure.statistics import EXPECTED_POPULATIONS
from hcvcoloc.measure.volume_coloc import VolumeColocalization
from hcvcoloc.workflow.platform import ImagingPlatform


class FakePlatform(ImagingPlatform):
    """Records every call; serves voxels, masks and object statistics from dicts."""

    def __init__(
        self,
        volumes: dict[str, VoxelVolume],
        masks: dict[str, BinaryMask] | None = None,
        populations: dict[str, ObjectPopulation] | None = None,
        surfaces: list[str] | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.volumes = volumes
        self.masks = dict(masks or {})
        self.populations = dict(populations or {})
        self.surfaces = list(surfaces or [])
        self.fail_on = fail_on or set()
        self.ranges: dict[str, tuple[float, float]] = {}
        self.applied: list[Channel] = []
        self.detected: list[tuple[str, float, float]] = []
        self.added: list[VolumeColocalization] = []
        self.opened: Path | None = None
        self.saved = False
        self.closed = False

    def open(self, path: Path) -> None:
        if Path(path).stem in self.fail_on:
            raise OSError(f"cannot open {path}")
        self.opened = Path(path)

    def voxels(self, channel: Channel) -> VoxelVolume:
        return self.volumes[channel.name]

    def channel_range(self, channel: Channel) -> tuple[float, float]:
        if channel.name in self.ranges:
            return self.ranges[channel.name]
        return 0.0, float(self.volumes[channel.name].data.max())

    def apply_channel(self, channel: Channel) -> None:
        self.applied.append(channel)
        self.ranges[channel.name] = (channel.threshold, channel.max)

    def surface_names(self) -> list[str]:
        return list(self.surfaces)

    def remove_surface(self, name: str) -> None:
        self.surfaces.remove(name)

    def detect_surfaces(self, channel: Channel, threshold: float, smoothing: float) -> None:
        self.detected.append((channel.name, threshold, smoothing))
        self.surfaces.append(channel.name)

    def surface_mask(self, name: str) -> BinaryMask:
        return self.masks[name]

    def add_colocalization_surface(self, colocalization: VolumeColocalization) -> None:
        self.added.append(colocalization)
        self.surfaces.append(colocalization.name)

    def object_statistics(self, name: str) -> ObjectPopulation:
        return self.populations[name]

    def save(self) -> None:
        self.saved = True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_factory():
    """Build a platform factory; every platform it creates is appended to a list."""

    def make(volumes, **kwargs):
        platforms: list[FakePlatform] = []

        def factory() -> FakePlatform:
            platform = FakePlatform(volumes, **kwargs)
            platforms.append(platform)
            return platform

        return factory, platforms

    return make


@pytest.fixture
def datasets(tmp_path: Path) -> list[DatasetFile]:
    return [
        DatasetFile(path=tmp_path / f"{sid}.ims", group="control", group_index=1, sample_id=sid)
        for sid in ("cell_01", "cell_02", "cell_03")
    ]


@pytest.fixture
def surface_masks() -> dict[str, BinaryMask]:
    """Core fills z 0..1, LDs z 1..3, ER z 1 only, on a 4x4x4 grid of 0.5 voxels."""
    def mask(z_slice: slice) -> BinaryMask:
        data = np.zeros((4, 4, 4), dtype=np.uint8)
        data[z_slice] = 1
        return BinaryMask(data, extent_max=(2.0, 2.0, 2.0))

    return {
        "ER": mask(slice(1, 2)),
        "Core": mask(slice(0, 2)),
        "LDs": mask(slice(1, 4)),
        "Nucleus": mask(slice(3, 4)),
    }


@pytest.fixture
def object_populations() -> dict[str, ObjectPopulation]:
    pops = {
        name: ObjectPopulation(name, [1.0, 2.0, 3.0]) for name in EXPECTED_POPULATIONS
    }
    pops["LDs"] = ObjectPopulation("LDs", [1, 2, 3, 4, 5], sphericities=[0.5] * 5)
    return pops
