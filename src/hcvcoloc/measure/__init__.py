"""hcvcoloc measure — histograms, thresholds, colocalization and statistics."""

from hcvcoloc.measure.colocalization import ColocalizationAnalyzer, colocalized_fraction
from hcvcoloc.measure.histogram import Histogram1D, Histogram2D, histogram_1d, histogram_2d
from hcvcoloc.measure.peaks import find_first_peak
from hcvcoloc.measure.statistics import StatisticsAggregator, summarize
from hcvcoloc.measure.thresholding import (
    BimodalThresholds,
    ThresholdEstimator,
    bimodal_thresholds,
    percent_threshold,
)
from hcvcoloc.measure.volume_coloc import VolumeColocalization, VolumeMaskColocalizer

__all__ = [
    "BimodalThresholds",
    "ColocalizationAnalyzer",
    "Histogram1D",
    "Histogram2D",
    "StatisticsAggregator",
    "ThresholdEstimator",
    "VolumeColocalization",
    "VolumeMaskColocalizer",
    "bimodal_thresholds",
    "colocalized_fraction",
    "find_first_peak",
    "histogram_1d",
    "histogram_2d",
    "percent_threshold",
    "summarize",
]
