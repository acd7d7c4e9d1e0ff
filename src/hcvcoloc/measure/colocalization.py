"""ColocalizationAnalyzer — thresholded intensity colocalization between channels."""

from __future__ import annotations

from typing import Iterable, Mapping

import numpy as np

from hcvcoloc.core.config import INTENSITY_PAIRS
from hcvcoloc.core.exceptions import EmptyInputError, ShapeMismatchError
from hcvcoloc.core.models import Channel, ColocalizationResult, VoxelVolume


def colocalized_fraction(
    image_a: np.ndarray,
    image_b: np.ndarray,
    threshold_a: float,
    threshold_b: float,
) -> float:
    """Fraction of A's above-threshold signal found where both channels exceed their thresholds.

    Manders-style coefficient restricted to the joint voxel set
    ``(a > threshold_a) & (b > threshold_b)``.

    Raises:
        EmptyInputError: If either array is empty or A has no voxel above
            its threshold.
        ShapeMismatchError: If the arrays differ in shape.
    """
    a = np.asarray(image_a, dtype=np.float64)
    b = np.asarray(image_b, dtype=np.float64)
    if a.size == 0 or b.size == 0:
        raise EmptyInputError("colocalization input")
    if a.shape != b.shape:
        raise ShapeMismatchError(a.shape, b.shape)

    above_a = a > threshold_a
    signal_a = float(a[above_a].sum())
    if signal_a <= 0:
        raise EmptyInputError(f"no signal above threshold {threshold_a}")

    joint = above_a & (b > threshold_b)
    return float(a[joint].sum()) / signal_a


class ColocalizationAnalyzer:
    """Compute colocalization coefficients for ordered channel pairs.

    Args:
        pairs: Ordered (A, B) channel-name pairs. The coefficient of a pair
            is the fraction of A's signal colocalized with B.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]] = INTENSITY_PAIRS) -> None:
        self._pairs = [tuple(p) for p in pairs]
        if not self._pairs:
            raise ValueError("At least one channel pair is required")

    @property
    def pairs(self) -> list[tuple[str, str]]:
        return list(self._pairs)

    def analyze(
        self,
        channels: Mapping[str, Channel],
        volumes: Mapping[str, VoxelVolume],
        group: str = "",
        sample_id: str = "",
    ) -> ColocalizationResult:
        """Coefficient for every configured pair of one dataset.

        Args:
            channels: Channels with thresholds, keyed by name.
            volumes: Voxel volume per channel name.
            group: Group label of the dataset.
            sample_id: Dataset identifier.

        Raises:
            KeyError: If a pair names an unknown channel.
        """
        coefficients: dict[tuple[str, str], float] = {}
        used: dict[str, Channel] = {}
        for a, b in self._pairs:
            for name in (a, b):
                if name not in channels or name not in volumes:
                    raise KeyError(f"Unknown channel in pair ({a}, {b}): {name}")
                used[name] = channels[name]
            coefficients[(a, b)] = colocalized_fraction(
                volumes[a].data,
                volumes[b].data,
                channels[a].threshold,
                channels[b].threshold,
            )
        return ColocalizationResult(
            group=group,
            sample_id=sample_id,
            coefficients=coefficients,
            channels=used,
        )
