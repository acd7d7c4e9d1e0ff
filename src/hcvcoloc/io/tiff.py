"""Multi-channel TIFF stack reading via tifffile."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import tifffile

from hcvcoloc.core.models import CHANNEL_LAYOUT, VoxelVolume

DEFAULT_CHANNEL_NAMES = tuple(name for _, name, _ in CHANNEL_LAYOUT)


def read_channel_stack(
    path: Path,
    channel_axis: int = 0,
    channel_names: Sequence[str] = DEFAULT_CHANNEL_NAMES,
    voxel_size: Sequence[float] | None = None,
) -> dict[str, VoxelVolume]:
    """Read a 4D multi-channel stack into one VoxelVolume per channel.

    Args:
        path: Path to the TIFF file.
        channel_axis: Axis of the stack holding the channels.
        channel_names: Names assigned to the channels in order.
        voxel_size: Physical voxel size per spatial axis. Unit voxels if None.

    Returns:
        Voxel volumes keyed by channel name.

    Raises:
        ValueError: If the stack isn't 4D or has fewer channels than names.
    """
    data = tifffile.imread(str(path))
    if data.ndim != 4:
        raise ValueError(
            f"Expected a 4D multi-channel stack, got shape {data.shape} from {path}"
        )
    data = np.moveaxis(data, channel_axis, 0)
    if data.shape[0] < len(channel_names):
        raise ValueError(
            f"Stack has {data.shape[0]} channels, {len(channel_names)} names given"
        )

    spatial = data.shape[1:]
    size = tuple(voxel_size) if voxel_size is not None else (1.0,) * len(spatial)
    if len(size) != len(spatial):
        raise ValueError(f"voxel_size needs {len(spatial)} values, got {len(size)}")
    extent_max = tuple(n * s for n, s in zip(spatial, size))

    return {
        name: VoxelVolume(data=data[i], extent_max=extent_max)
        for i, name in enumerate(channel_names)
    }
