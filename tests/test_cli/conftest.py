"""Shared fixtures for CLI module tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import tifffile
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def stack_path(tmp_path: Path, hcv_volumes) -> Path:
    """The four-channel HCV dataset written as a (C, Z, Y, X) TIFF stack."""
    data = np.stack([
        hcv_volumes[name].data.astype(np.float32)
        for name in ("ER", "Core", "LDs", "Nucleus")
    ])
    path = tmp_path / "cell_01.tif"
    tifffile.imwrite(str(path), data)
    return path
