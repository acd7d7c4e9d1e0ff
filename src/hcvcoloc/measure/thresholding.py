"""ThresholdEstimator — per-channel intensity cutoffs from raw voxel samples."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Mapping

import numpy as np

from hcvcoloc.core.config import (
    DEFAULT_THRESHOLD_PERCENT,
    PAIRED_CHANNELS,
    PAIRED_THRESHOLD_FACTOR,
    PEAK_HALF_WIDTH,
)
from hcvcoloc.core.exceptions import ConfigError, EmptyInputError
from hcvcoloc.core.models import Channel, VoxelVolume
from hcvcoloc.measure.histogram import histogram_2d
from hcvcoloc.measure.peaks import find_first_peak

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BimodalThresholds:
    """Outcome of the paired joint-histogram method.

    Attributes:
        peak_a: 0-based first-peak index of the row occupancy profile
            (channel A).
        peak_b: 0-based first-peak index of the column occupancy profile
            (channel B).
        threshold_a: Threshold for channel A.
        threshold_b: Threshold for channel B.
        max_a: Observed maximum of channel A.
        max_b: Observed maximum of channel B.
    """

    peak_a: int
    peak_b: int
    threshold_a: float
    threshold_b: float
    max_a: float
    max_b: float


def observed_max(samples: np.ndarray) -> float:
    """Maximum intensity of a sample array.

    Raises:
        EmptyInputError: If ``samples`` is empty.
    """
    arr = np.asarray(samples)
    if arr.size == 0:
        raise EmptyInputError("intensity samples")
    return float(arr.max())


def percent_threshold(max_value: float, percent: float) -> float:
    """Threshold at a fixed percentage of the channel maximum."""
    if not 0.0 <= percent <= 100.0:
        raise ValueError(f"percent must be within [0, 100], got {percent}")
    return max_value * percent / 100


def bimodal_thresholds(
    samples_a: np.ndarray,
    samples_b: np.ndarray,
    factor: float = PAIRED_THRESHOLD_FACTOR,
    half_width: int = PEAK_HALF_WIDTH,
    axis_floor: float | None = None,
    clamp: bool = False,
) -> BimodalThresholds:
    """Thresholds for two co-imaged channels from their joint histogram.

    The joint histogram is binarized so every occurring intensity pair
    weighs the same regardless of its voxel count. Summing the occupancy
    along each axis gives one profile per channel; the 1-based bin number of
    the first peak of each profile times ``factor`` is the channel's
    threshold, so a peak in the first bin gives ``factor``.

    Args:
        samples_a: Channel A samples.
        samples_b: Channel B samples at the same voxels.
        factor: Peak-to-threshold multiplier.
        half_width: Peak search window radius.
        axis_floor: Optional minimum span of the histogram axis.
        clamp: Clip each threshold to [0, observed max of its channel].
            Off by default, so thresholds may exceed the channel max.

    Raises:
        EmptyInputError: If either input is empty.
        ShapeMismatchError: If the inputs differ in length.
        NoPeakFoundError: If a profile has no peak.
    """
    joint = histogram_2d(samples_a, samples_b, axis_floor=axis_floor)
    occupancy = joint.binarized()
    peak_a = find_first_peak(occupancy.sum(axis=1), half_width)
    peak_b = find_first_peak(occupancy.sum(axis=0), half_width)

    max_a = observed_max(samples_a)
    max_b = observed_max(samples_b)
    threshold_a = factor * (peak_a + 1)
    threshold_b = factor * (peak_b + 1)
    if clamp:
        threshold_a = float(np.clip(threshold_a, 0.0, max_a))
        threshold_b = float(np.clip(threshold_b, 0.0, max_b))

    return BimodalThresholds(
        peak_a=peak_a,
        peak_b=peak_b,
        threshold_a=float(threshold_a),
        threshold_b=float(threshold_b),
        max_a=max_a,
        max_b=max_b,
    )


class ThresholdEstimator:
    """Estimate a threshold for every channel of a dataset.

    Channels named in ``paired`` use the bimodal joint-histogram method;
    every other channel uses a fixed percentage of its maximum.

    Args:
        threshold_percent: Percentage of channel max for single channels.
        paired: Names of the two co-imaged channels, or None to threshold
            every channel by percentage.
        axis_floor: Optional minimum span of the joint histogram axis.
        clamp: Clip bimodal thresholds to the channel max.
        factor: Peak-to-threshold multiplier of the bimodal method.
    """

    def __init__(
        self,
        threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
        paired: tuple[str, str] | None = PAIRED_CHANNELS,
        axis_floor: float | None = None,
        clamp: bool = False,
        factor: float = PAIRED_THRESHOLD_FACTOR,
    ) -> None:
        if not 0.0 <= threshold_percent <= 100.0:
            raise ConfigError(
                f"threshold_percent must be within [0, 100], got {threshold_percent}"
            )
        if paired is not None and len(set(paired)) != 2:
            raise ConfigError(f"paired must name two distinct channels, got {paired}")
        self._percent = threshold_percent
        self._paired = paired
        self._axis_floor = axis_floor
        self._clamp = clamp
        self._factor = factor

    def single_channel(self, channel: Channel, volume: VoxelVolume) -> Channel:
        """Percentage-of-max threshold for one channel."""
        max_value = observed_max(volume.samples())
        return replace(
            channel,
            threshold=percent_threshold(max_value, self._percent),
            max=max_value,
        )

    def paired_channels(
        self,
        channel_a: Channel,
        volume_a: VoxelVolume,
        channel_b: Channel,
        volume_b: VoxelVolume,
    ) -> tuple[Channel, Channel]:
        """Bimodal thresholds for two co-imaged channels."""
        result = bimodal_thresholds(
            volume_a.samples(),
            volume_b.samples(),
            factor=self._factor,
            axis_floor=self._axis_floor,
            clamp=self._clamp,
        )
        logger.debug(
            "Bimodal peaks %s=%d %s=%d",
            channel_a.name, result.peak_a, channel_b.name, result.peak_b,
        )
        return (
            replace(channel_a, threshold=result.threshold_a, max=result.max_a),
            replace(channel_b, threshold=result.threshold_b, max=result.max_b),
        )

    def estimate(
        self,
        channels: Mapping[str, Channel],
        volumes: Mapping[str, VoxelVolume],
    ) -> dict[str, Channel]:
        """Threshold every channel.

        Args:
            channels: Channel records keyed by name.
            volumes: Voxel volume per channel name.

        Returns:
            New channel records (same keys, same order) carrying threshold
            and observed max.

        Raises:
            KeyError: If a channel has no voxel volume.
            ConfigError: If only one of the paired channels is present.
        """
        missing = [name for name in channels if name not in volumes]
        if missing:
            raise KeyError(f"No voxel volume for channels: {missing}")

        estimated: dict[str, Channel] = {}
        pair = self._paired
        if pair is not None:
            present = [name for name in pair if name in channels]
            if len(present) == 1:
                raise ConfigError(
                    f"Paired channel {present[0]!r} has no partner among {list(channels)}"
                )
            if len(present) == 2:
                a, b = pair
                estimated[a], estimated[b] = self.paired_channels(
                    channels[a], volumes[a], channels[b], volumes[b],
                )

        for name, channel in channels.items():
            if name not in estimated:
                estimated[name] = self.single_channel(channel, volumes[name])

        return {name: estimated[name] for name in channels}
