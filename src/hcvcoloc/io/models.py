"""Data models for the IO module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DatasetFile:
    """One dataset found by the scanner.

    Attributes:
        path: Dataset file path.
        group: Group label, the name of the folder holding the dataset.
        group_index: 1-based group number in discovery order.
        sample_id: File name without extension.
    """

    path: Path
    group: str
    group_index: int
    sample_id: str
