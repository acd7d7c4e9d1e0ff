"""BatchOrchestrator — run the enabled analysis stages over a batch of datasets."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Mapping, Sequence

from hcvcoloc.core.config import (
    INTENSITY_PAIRS,
    MIN_SURFACE_COUNT,
    PAIRED_CHANNELS,
    SURFACE_SMOOTHING,
    SURFACE_THRESHOLD_FRACTION,
    VOLUME_PAIRS,
    AnalysisConfig,
)
from hcvcoloc.core.models import (
    Channel,
    ColocalizationResult,
    SampleStatistics,
    default_channels,
)
from hcvcoloc.io.models import DatasetFile
from hcvcoloc.measure.colocalization import ColocalizationAnalyzer
from hcvcoloc.measure.statistics import EXPECTED_POPULATIONS, StatisticsAggregator
from hcvcoloc.measure.thresholding import ThresholdEstimator
from hcvcoloc.measure.volume_coloc import VolumeColocalization, VolumeMaskColocalizer
from hcvcoloc.workflow.platform import ImagingPlatform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetResult:
    """Everything produced for one dataset.

    Attributes:
        dataset: The processed dataset.
        channels: Channels as last applied or read, keyed by name.
        colocalization: Intensity colocalization, if that stage ran.
        volume_colocalizations: Colocalized volume per intersection name.
        statistics: Sample statistics, if that stage ran.
    """

    dataset: DatasetFile
    channels: dict[str, Channel]
    colocalization: ColocalizationResult | None = None
    volume_colocalizations: dict[str, float] = field(default_factory=dict)
    statistics: SampleStatistics | None = None


@dataclass(frozen=True)
class BatchResult:
    """Result of a batch run.

    Attributes:
        datasets_processed: Number of datasets that completed.
        results: Per-dataset results in processing order.
        elapsed_seconds: Wall-clock time in seconds.
        warnings: List of warning messages.
    """

    datasets_processed: int
    results: list[DatasetResult]
    elapsed_seconds: float
    warnings: list[str] = field(default_factory=list)

    @property
    def colocalization(self) -> list[ColocalizationResult]:
        return [r.colocalization for r in self.results if r.colocalization is not None]

    @property
    def statistics(self) -> list[SampleStatistics]:
        return [r.statistics for r in self.results if r.statistics is not None]


class BatchOrchestrator:
    """Process datasets one at a time through the enabled stages.

    Stages run in a fixed order: thresholds, colocalization, surfaces,
    volume colocalization, statistics. Each dataset gets a fresh platform
    from ``platform_factory`` and is saved and closed before the next one
    starts. A failing dataset is logged and skipped.

    Args:
        platform_factory: Returns a new ImagingPlatform per dataset.
        config: Stage toggles and tunables. Defaults if None.
        channels: Channel layout keyed by name. The HCV layout if None.
    """

    def __init__(
        self,
        platform_factory: Callable[[], ImagingPlatform],
        config: AnalysisConfig | None = None,
        channels: Mapping[str, Channel] | None = None,
    ) -> None:
        self._factory = platform_factory
        self._config = config or AnalysisConfig()
        self._channels = dict(channels) if channels is not None else default_channels()
        self._estimator = ThresholdEstimator(
            threshold_percent=self._config.threshold_percent,
            paired=PAIRED_CHANNELS,
            axis_floor=self._config.histogram_axis_floor,
            clamp=self._config.clamp_paired_thresholds,
        )
        self._analyzer = ColocalizationAnalyzer(INTENSITY_PAIRS)
        self._colocalizer = VolumeMaskColocalizer()
        self._aggregator = StatisticsAggregator(ddof=self._config.std_ddof)

    def run(
        self,
        datasets: Sequence[DatasetFile],
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> BatchResult:
        """Process every dataset.

        Args:
            datasets: Datasets to process, usually from DatasetScanner.
            progress_callback: Optional callback(current, total, sample_id).

        Returns:
            BatchResult with per-dataset results and warnings.
        """
        start = time.monotonic()
        results: list[DatasetResult] = []
        warnings: list[str] = []
        total = len(datasets)

        logger.info(
            "Analyzing %d datasets, stages: %s",
            total, ", ".join(self._config.enabled_stages) or "none",
        )

        for i, dataset in enumerate(datasets):
            logger.info("Analyzing file %d of %d: %s", i + 1, total, dataset.sample_id)
            try:
                results.append(self.process_dataset(dataset))
            except Exception as exc:
                if isinstance(exc, (MemoryError, KeyboardInterrupt, SystemExit)):
                    raise
                logger.warning(
                    "Analysis failed for %s: %s",
                    dataset.sample_id, exc, exc_info=True,
                )
                warnings.append(f"{dataset.sample_id}: analysis failed: {exc}")

            if progress_callback:
                progress_callback(i + 1, total, dataset.sample_id)

        elapsed = time.monotonic() - start
        logger.info("Analysis completed in %.2f minutes", elapsed / 60)

        return BatchResult(
            datasets_processed=len(results),
            results=results,
            elapsed_seconds=round(elapsed, 3),
            warnings=warnings,
        )

    def process_dataset(self, dataset: DatasetFile) -> DatasetResult:
        """Run the enabled stages on one dataset and save it."""
        platform = self._factory()
        try:
            platform.open(dataset.path)
            result = self._run_stages(platform, dataset)
            platform.save()
        finally:
            platform.close()
        return result

    def _run_stages(self, platform: ImagingPlatform, dataset: DatasetFile) -> DatasetResult:
        config = self._config
        channels = dict(self._channels)
        colocalization = None
        volume_colocalizations: dict[str, float] = {}
        statistics = None

        if config.do_thresholds:
            channels = self._thresholds(platform, channels)

        if config.do_colocalization:
            channels = self._read_ranges(platform, channels)
            colocalization = self._analyzer.analyze(
                channels,
                {name: platform.voxels(ch) for name, ch in channels.items()},
                group=dataset.group,
                sample_id=dataset.sample_id,
            )

        if config.do_surfaces:
            self._detect_surfaces(platform, channels)

        if config.do_volume_colocalization:
            for coloc in self._volume_colocalization(platform):
                volume_colocalizations[coloc.name] = coloc.volume

        if config.do_statistics:
            surface_count = len(platform.surface_names())
            if surface_count > MIN_SURFACE_COUNT:
                populations = {
                    name: platform.object_statistics(name) for name in EXPECTED_POPULATIONS
                }
                statistics = self._aggregator.aggregate(
                    dataset.group, dataset.sample_id, populations,
                )
            else:
                logger.info(
                    "Skipping statistics for %s: only %d surfaces",
                    dataset.sample_id, surface_count,
                )

        return DatasetResult(
            dataset=dataset,
            channels=channels,
            colocalization=colocalization,
            volume_colocalizations=volume_colocalizations,
            statistics=statistics,
        )

    def _thresholds(
        self, platform: ImagingPlatform, channels: dict[str, Channel],
    ) -> dict[str, Channel]:
        volumes = {name: platform.voxels(ch) for name, ch in channels.items()}
        estimated = self._estimator.estimate(channels, volumes)
        for channel in estimated.values():
            platform.apply_channel(channel)
        return estimated

    def _read_ranges(
        self, platform: ImagingPlatform, channels: dict[str, Channel],
    ) -> dict[str, Channel]:
        """Take thresholds from the platform, which may hold manual edits."""
        updated = {}
        for name, channel in channels.items():
            threshold, max_value = platform.channel_range(channel)
            updated[name] = replace(channel, threshold=threshold, max=max_value)
        return updated

    def _detect_surfaces(
        self, platform: ImagingPlatform, channels: dict[str, Channel],
    ) -> None:
        for name in platform.surface_names():
            platform.remove_surface(name)
        for channel in sorted(channels.values(), key=lambda ch: ch.index):
            _, max_value = platform.channel_range(channel)
            platform.detect_surfaces(
                channel,
                threshold=max_value * SURFACE_THRESHOLD_FRACTION,
                smoothing=SURFACE_SMOOTHING,
            )

    def _volume_colocalization(
        self, platform: ImagingPlatform,
    ) -> list[VolumeColocalization]:
        # Colocalization surfaces from an earlier run follow the channel surfaces.
        for name in platform.surface_names()[len(self._channels):]:
            platform.remove_surface(name)

        produced = []
        for name_a, name_b in VOLUME_PAIRS:
            coloc = self._colocalizer.colocalize(
                name_a, platform.surface_mask(name_a),
                name_b, platform.surface_mask(name_b),
            )
            platform.add_colocalization_surface(coloc)
            produced.append(coloc)
        return produced
