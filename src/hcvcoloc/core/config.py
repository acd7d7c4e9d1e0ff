"""Analysis configuration and calibration constants.

The calibration constants come from the HCV imaging protocol and are
tuned on real acquisitions. Keep them here so every stage reads the same
values.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from hcvcoloc.core.exceptions import ConfigError

HISTOGRAM_BINS = 256
# Axis floor used by the original 8-bit protocol; opt-in, see histogram_2d.
HISTOGRAM_AXIS_FLOOR = 255.0
PEAK_HALF_WIDTH = 12
# Binarized-profile peaks underestimate the separating intensity.
PAIRED_THRESHOLD_FACTOR = 2.0
DEFAULT_THRESHOLD_PERCENT = 15.0
SURFACE_THRESHOLD_FRACTION = 0.15
SURFACE_SMOOTHING = 0.093
# Statistics are only extracted when more surfaces than this exist.
MIN_SURFACE_COUNT = 5
DATASET_EXTENSION = ".ims"

PAIRED_CHANNELS = ("Core", "LDs")
INTENSITY_PAIRS = (("Core", "ER"), ("Core", "LDs"))
VOLUME_PAIRS = (("Core", "LDs"), ("Core", "ER"))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class AnalysisConfig:
    """Stage toggles and tunables for one batch run.

    Attributes:
        do_thresholds: Estimate per-channel thresholds.
        do_colocalization: Compute intensity colocalization coefficients.
        do_surfaces: Ask the platform to detect one surface per channel.
        do_volume_colocalization: Intersect surface masks of channel pairs.
        do_statistics: Aggregate per-object statistics per dataset.
        threshold_percent: Percentage of channel max for single channels.
        histogram_axis_floor: Lower bound for the histogram axis span.
            None spans the observed maximum only.
        clamp_paired_thresholds: Clip bimodal thresholds to the channel max.
        std_ddof: Delta degrees of freedom for standard deviations
            (1 = sample, 0 = population).
        dataset_extension: File extension of datasets to discover.
    """

    do_thresholds: bool = True
    do_colocalization: bool = True
    do_surfaces: bool = False
    do_volume_colocalization: bool = False
    do_statistics: bool = False
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT
    histogram_axis_floor: float | None = None
    clamp_paired_thresholds: bool = False
    std_ddof: int = 1
    dataset_extension: str = DATASET_EXTENSION

    def __post_init__(self) -> None:
        for f in fields(self):
            if f.name.startswith("do_") or f.name == "clamp_paired_thresholds":
                if not isinstance(getattr(self, f.name), bool):
                    raise ConfigError(
                        f"{f.name} must be true or false, got {getattr(self, f.name)!r}"
                    )
        if not _is_number(self.threshold_percent):
            raise ConfigError(
                f"threshold_percent must be a number, got {self.threshold_percent!r}"
            )
        if self.histogram_axis_floor is not None and not _is_number(self.histogram_axis_floor):
            raise ConfigError(
                f"histogram_axis_floor must be a number, got {self.histogram_axis_floor!r}"
            )
        if not isinstance(self.dataset_extension, str):
            raise ConfigError(
                f"dataset_extension must be a string, got {self.dataset_extension!r}"
            )
        if not 0.0 <= self.threshold_percent <= 100.0:
            raise ConfigError(
                f"threshold_percent must be within [0, 100], got {self.threshold_percent}"
            )
        if self.std_ddof not in (0, 1):
            raise ConfigError(f"std_ddof must be 0 or 1, got {self.std_ddof}")
        if self.histogram_axis_floor is not None and self.histogram_axis_floor < 0:
            raise ConfigError("histogram_axis_floor must be non-negative")
        if not self.dataset_extension.startswith("."):
            raise ConfigError(
                f"dataset_extension must start with '.', got {self.dataset_extension!r}"
            )

    @property
    def enabled_stages(self) -> list[str]:
        """Names of the enabled stages in execution order."""
        return [
            f.name[3:] for f in fields(self)
            if f.name.startswith("do_") and getattr(self, f.name)
        ]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisConfig:
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {unknown}")
        return cls(**data)


def save_config(config: AnalysisConfig, path: Path) -> None:
    """Write a configuration to a YAML file."""
    with open(Path(path), "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_config(path: Path) -> AnalysisConfig:
    """Load a configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file isn't a mapping or holds invalid values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file (expected a mapping): {path}")
    return AnalysisConfig.from_dict(data)
