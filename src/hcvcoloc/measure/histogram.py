"""Intensity histograms over raw voxel samples."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from hcvcoloc.core.config import HISTOGRAM_BINS
from hcvcoloc.core.exceptions import EmptyInputError, ShapeMismatchError


@dataclass(frozen=True, eq=False)
class Histogram1D:
    """Bin counts over a linear intensity axis [0, span].

    Attributes:
        counts: Raw counts per bin, never renormalized.
        edges: Bin edges (``len(counts) + 1`` values).
    """

    counts: np.ndarray
    edges: np.ndarray

    @property
    def total(self) -> int:
        return int(self.counts.sum())


@dataclass(frozen=True, eq=False)
class Histogram2D:
    """Joint co-occurrence counts of two channels at identical voxels.

    Rows index channel A bins, columns channel B bins.
    """

    counts: np.ndarray
    edges: np.ndarray

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def binarized(self) -> np.ndarray:
        """Occupancy matrix: 1 where a bin pair occurs at all, else 0."""
        return (self.counts > 0).astype(np.int64)


def _edges(observed_max: float, bins: int, axis_floor: float | None) -> np.ndarray:
    span = float(observed_max)
    if axis_floor is not None:
        span = max(span, float(axis_floor))
    if span <= 0:
        # All-zero input: every sample falls into the first bin.
        span = 1.0
    return np.linspace(0.0, span, bins + 1)


def _as_samples(samples: np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(samples, dtype=np.float64).ravel()
    if arr.size == 0:
        raise EmptyInputError(name)
    return arr


def histogram_1d(
    samples: np.ndarray,
    bins: int = HISTOGRAM_BINS,
    axis_floor: float | None = None,
) -> Histogram1D:
    """Histogram of one channel's intensity samples.

    Args:
        samples: Intensity samples (any shape, flattened).
        bins: Number of bins.
        axis_floor: Optional minimum span of the axis. None spans the
            observed maximum only.

    Raises:
        EmptyInputError: If ``samples`` is empty.
    """
    arr = _as_samples(samples, "intensity samples")
    edges = _edges(arr.max(), bins, axis_floor)
    counts, _ = np.histogram(arr, bins=edges)
    return Histogram1D(counts=counts, edges=edges)


def histogram_2d(
    samples_a: np.ndarray,
    samples_b: np.ndarray,
    bins: int = HISTOGRAM_BINS,
    axis_floor: float | None = None,
) -> Histogram2D:
    """Joint histogram of two channels sampled at the same voxels.

    Both axes share the same edges, spanning the maximum across both inputs.

    Raises:
        EmptyInputError: If either input is empty.
        ShapeMismatchError: If the inputs differ in length.
    """
    a = _as_samples(samples_a, "channel A samples")
    b = _as_samples(samples_b, "channel B samples")
    if a.size != b.size:
        raise ShapeMismatchError(a.size, b.size)
    edges = _edges(max(a.max(), b.max()), bins, axis_floor)
    counts, _, _ = np.histogram2d(a, b, bins=(edges, edges))
    return Histogram2D(counts=counts.astype(np.int64), edges=edges)
