"""Shared test fixtures for hcvcoloc."""

from __future__ import annotations

import numpy as np
import pytest

from hcvcoloc.core.models import VoxelVolume


def _lattice_diamond(
    center_a: int, center_b: int, radius_a: int, radius_b: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Integer (a, b) points with |a-ca|/ra + |b-cb|/rb <= 1."""
    a, b = np.meshgrid(
        np.arange(center_a - radius_a, center_a + radius_a + 1),
        np.arange(center_b - radius_b, center_b + radius_b + 1),
        indexing="ij",
    )
    inside = radius_b * np.abs(a - center_a) + radius_a * np.abs(b - center_b) <= radius_a * radius_b
    return a[inside].astype(np.float64), b[inside].astype(np.float64)


@pytest.fixture
def paired_samples() -> tuple[np.ndarray, np.ndarray]:
    """Paired samples whose occupancy profiles peak in row bin 30 and column bin 45.

    Bins are counted from 1; the peaks sit at intensities 29 and 44. Channel A
    spans 0..58 and channel B 0..88, so on a 255-wide axis every integer
    intensity falls in its own bin.
    """
    return _lattice_diamond(29, 44, 29, 44)


@pytest.fixture
def two_cluster_samples() -> tuple[np.ndarray, np.ndarray]:
    """Background cluster around 20 and signal cluster around 150 in both channels."""
    bg_a, bg_b = _lattice_diamond(20, 20, 20, 20)
    sig_a, sig_b = _lattice_diamond(150, 150, 5, 5)
    return np.concatenate([bg_a, sig_a]), np.concatenate([bg_b, sig_b])


@pytest.fixture
def hcv_volumes(two_cluster_samples) -> dict[str, VoxelVolume]:
    """Four-channel dataset: Core/LDs bimodal, ER max 200, Nucleus max 100."""
    core, lds = two_cluster_samples
    n = core.size
    shape = (1, 1, n)
    return {
        "ER": VoxelVolume(np.linspace(0, 200, n).reshape(shape)),
        "Core": VoxelVolume(core.reshape(shape)),
        "LDs": VoxelVolume(lds.reshape(shape)),
        "Nucleus": VoxelVolume(np.linspace(0, 100, n).reshape(shape)),
    }
