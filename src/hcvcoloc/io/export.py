"""Results tables as pandas DataFrames, written to CSV."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from hcvcoloc.core.models import STATISTICS_COLUMNS, ColocalizationResult, SampleStatistics


def colocalization_table(results: Sequence[ColocalizationResult]) -> pd.DataFrame:
    """One row per dataset: group, sample, coefficients, then max/thr per channel."""
    if not results:
        return pd.DataFrame()
    columns = results[0].columns()
    return pd.DataFrame([r.as_row() for r in results], columns=columns)


def statistics_table(stats: Sequence[SampleStatistics]) -> pd.DataFrame:
    """One row per dataset in the summary record field order."""
    return pd.DataFrame([s.as_row() for s in stats], columns=STATISTICS_COLUMNS)


def per_object_table(stats: Sequence[SampleStatistics], field: str) -> pd.DataFrame:
    """Long table of a per-object LD value (``"volume"`` or ``"sphericity"``).

    Columns: Group, Sample, Object (1-based), and the value column.
    """
    attr = {"volume": "ld_volumes", "sphericity": "ld_sphericities"}
    if field not in attr:
        raise ValueError(f"Unknown per-object field {field!r}. Supported: {sorted(attr)}")
    value_col = field.title()
    rows = [
        (s.group, s.sample_id, i, value)
        for s in stats
        for i, value in enumerate(getattr(s, attr[field]), start=1)
    ]
    return pd.DataFrame(rows, columns=["Group", "Sample", "Object", value_col])


def write_results(
    output_dir: Path,
    colocalization: Sequence[ColocalizationResult],
    statistics: Sequence[SampleStatistics],
    overwrite: bool = False,
) -> list[Path]:
    """Write every non-empty results table to CSV in ``output_dir``.

    Returns:
        Paths of the files written.

    Raises:
        FileExistsError: If a target file exists and ``overwrite`` is False.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    tables: dict[str, pd.DataFrame] = {}
    if colocalization:
        tables["colocalization.csv"] = colocalization_table(colocalization)
    if statistics:
        tables["ld_statistics.csv"] = statistics_table(statistics)
        tables["ld_volumes.csv"] = per_object_table(statistics, "volume")
        tables["ld_sphericities.csv"] = per_object_table(statistics, "sphericity")

    targets = {output_dir / name: df for name, df in tables.items()}
    if not overwrite:
        existing = [p for p in targets if p.exists()]
        if existing:
            raise FileExistsError(f"Output file already exists: {existing[0]}")

    for path, df in targets.items():
        df.to_csv(path, index=False)
    return list(targets)
