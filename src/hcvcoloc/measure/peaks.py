"""First-peak search over 1D intensity profiles."""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from hcvcoloc.core.config import PEAK_HALF_WIDTH
from hcvcoloc.core.exceptions import NoPeakFoundError


def find_first_peak(profile: np.ndarray, half_width: int = PEAK_HALF_WIDTH) -> int:
    """Index of the first local maximum under a sliding window.

    The profile is padded with ``half_width`` zeros on both ends so that
    boundary indices get a full window. Scanning left to right, the first
    index whose value equals the maximum of the ``2 * half_width + 1``
    values centered on it wins. Ties resolve to the earliest index.

    Args:
        profile: Non-negative 1D counts.
        half_width: Window radius.

    Returns:
        0-based index into the unpadded profile.

    Raises:
        ValueError: If the profile isn't 1D or holds negative values.
        NoPeakFoundError: If no index qualifies (empty or NaN profile).
    """
    values = np.asarray(profile, dtype=np.float64)
    if values.ndim != 1:
        raise ValueError(f"Profile must be 1D, got shape {values.shape}")
    if half_width < 0:
        raise ValueError(f"half_width must be non-negative, got {half_width}")
    if np.any(values < 0):
        raise ValueError("Profile counts must be non-negative")

    n = values.size
    if n == 0:
        raise NoPeakFoundError(0)

    padded = np.zeros(n + 2 * half_width, dtype=np.float64)
    padded[half_width:half_width + n] = values

    # One row per original index, centered on it.
    windows = sliding_window_view(padded, 2 * half_width + 1)
    hits = np.flatnonzero(windows[:, half_width] == windows.max(axis=1))
    if hits.size == 0:
        raise NoPeakFoundError(n)
    return int(hits[0])
