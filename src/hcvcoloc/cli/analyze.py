"""hcvcoloc thresholds / coloc — analyze a multi-channel TIFF stack."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from hcvcoloc.cli.utils import console, error_handler, load_analysis_config
from hcvcoloc.core.config import AnalysisConfig

_stack_options = [
    click.argument("stack", type=click.Path(exists=True, dir_okay=False)),
    click.option(
        "-c", "--config", "config_path", type=click.Path(exists=True), default=None,
        help="YAML analysis configuration.",
    ),
    click.option(
        "--channel-axis", type=int, default=0, show_default=True,
        help="Axis of the stack holding the channels.",
    ),
    click.option(
        "--voxel-size", type=float, nargs=3, default=None,
        help="Physical voxel size per spatial axis (z y x).",
    ),
]


def stack_options(func):
    for option in reversed(_stack_options):
        func = option(func)
    return func


def _estimate(stack: str, config: AnalysisConfig, channel_axis: int, voxel_size):
    from hcvcoloc.core.models import default_channels
    from hcvcoloc.io.tiff import read_channel_stack
    from hcvcoloc.measure.thresholding import ThresholdEstimator

    volumes = read_channel_stack(
        Path(stack), channel_axis=channel_axis, voxel_size=voxel_size or None,
    )
    estimator = ThresholdEstimator(
        threshold_percent=config.threshold_percent,
        axis_floor=config.histogram_axis_floor,
        clamp=config.clamp_paired_thresholds,
    )
    return estimator.estimate(default_channels(), volumes), volumes


@click.command()
@stack_options
@error_handler
def thresholds(
    stack: str, config_path: str | None, channel_axis: int, voxel_size,
) -> None:
    """Estimate per-channel thresholds of a multi-channel stack."""
    config = load_analysis_config(config_path)
    channels, _ = _estimate(stack, config, channel_axis, voxel_size)

    table = Table(show_header=True, title=f"Thresholds — {Path(stack).name}")
    table.add_column("Channel", style="bold")
    table.add_column("Index")
    table.add_column("Threshold")
    table.add_column("Max")
    for channel in channels.values():
        table.add_row(
            channel.name, str(channel.index),
            f"{channel.threshold:g}", f"{channel.max:g}",
        )
    console.print(table)


@click.command()
@stack_options
@error_handler
def coloc(
    stack: str, config_path: str | None, channel_axis: int, voxel_size,
) -> None:
    """Intensity colocalization coefficients of a multi-channel stack."""
    from hcvcoloc.measure.colocalization import ColocalizationAnalyzer

    config = load_analysis_config(config_path)
    channels, volumes = _estimate(stack, config, channel_axis, voxel_size)
    result = ColocalizationAnalyzer().analyze(
        channels, volumes, sample_id=Path(stack).stem,
    )

    table = Table(show_header=True, title=f"Colocalization — {Path(stack).name}")
    table.add_column("Pair", style="bold")
    table.add_column("Coefficient")
    for (a, b), value in result.coefficients.items():
        table.add_row(f"{a}/{b}", f"{value:.4f}")
    console.print(table)
