"""StatisticsAggregator — per-sample summaries of segmented object populations."""

from __future__ import annotations

from typing import Mapping

import numpy as np

from hcvcoloc.core.config import MIN_SURFACE_COUNT
from hcvcoloc.core.exceptions import InsufficientDataError
from hcvcoloc.core.models import ObjectPopulation, PopulationSummary, SampleStatistics
from hcvcoloc.measure.volume_coloc import colocalization_channel_name

LD_POPULATION = "LDs"
ER_POPULATION = "ER"
CORE_POPULATION = "Core"
NUCLEUS_POPULATION = "Nucleus"
COLOC_CORE_LD_POPULATION = colocalization_channel_name("Core", "LDs")
COLOC_CORE_ER_POPULATION = colocalization_channel_name("Core", "ER")

EXPECTED_POPULATIONS = (
    LD_POPULATION,
    ER_POPULATION,
    CORE_POPULATION,
    NUCLEUS_POPULATION,
    COLOC_CORE_LD_POPULATION,
    COLOC_CORE_ER_POPULATION,
)


def summarize(values: np.ndarray, ddof: int = 1, name: str | None = None) -> PopulationSummary:
    """Distribution summary of a non-empty array.

    The spread of a single value is 0.0 under either ``ddof``.

    Raises:
        InsufficientDataError: If ``values`` is empty.
    """
    arr = np.asarray(values, dtype=np.float64).ravel()
    if arr.size == 0:
        raise InsufficientDataError(name, "no objects")
    std = float(np.std(arr, ddof=ddof)) if arr.size > 1 else 0.0
    return PopulationSummary(
        count=int(arr.size),
        min=float(arr.min()),
        max=float(arr.max()),
        median=float(np.median(arr)),
        sum=float(arr.sum()),
        mean=float(arr.mean()),
        std=std,
    )


class StatisticsAggregator:
    """Reduce per-object volumes and sphericities to one record per sample.

    Args:
        ddof: Delta degrees of freedom for standard deviations; 1 (sample,
            default) or 0 (population).
        min_surface_count: The sample must hold more surface populations
            than this.
    """

    def __init__(self, ddof: int = 1, min_surface_count: int = MIN_SURFACE_COUNT) -> None:
        if ddof not in (0, 1):
            raise ValueError(f"ddof must be 0 or 1, got {ddof}")
        self._ddof = ddof
        self._min_surface_count = min_surface_count

    def check_surface_count(self, surface_count: int) -> None:
        """Raise unless enough surfaces exist to extract statistics."""
        if surface_count <= self._min_surface_count:
            raise InsufficientDataError(
                detail=(
                    f"{surface_count} surfaces present, "
                    f"more than {self._min_surface_count} required"
                ),
            )

    def aggregate(
        self,
        group: str,
        sample_id: str,
        populations: Mapping[str, ObjectPopulation],
    ) -> SampleStatistics:
        """Summarize the object populations of one sample.

        Args:
            group: Group label of the sample.
            sample_id: Sample identifier.
            populations: Object populations keyed by surface name. Must
                contain every name in ``EXPECTED_POPULATIONS``.

        Raises:
            InsufficientDataError: If too few populations are present, one
                is missing or empty, or the LD population lacks sphericities.
        """
        self.check_surface_count(len(populations))
        for name in EXPECTED_POPULATIONS:
            if name not in populations:
                raise InsufficientDataError(name, "population missing")
            if len(populations[name]) == 0:
                raise InsufficientDataError(name, "no objects")

        lds = populations[LD_POPULATION]
        if lds.sphericities is None or lds.sphericities.size == 0:
            raise InsufficientDataError(LD_POPULATION, "no sphericities")

        def volumes(name: str) -> PopulationSummary:
            return summarize(populations[name].volumes, self._ddof, name)

        return SampleStatistics(
            group=group,
            sample_id=sample_id,
            ld_volume=volumes(LD_POPULATION),
            ld_sphericity=summarize(lds.sphericities, self._ddof, LD_POPULATION),
            er_volume=volumes(ER_POPULATION),
            core_volume=volumes(CORE_POPULATION),
            nucleus_volume=volumes(NUCLEUS_POPULATION),
            coloc_core_ld_volume=volumes(COLOC_CORE_LD_POPULATION).sum,
            coloc_core_er_volume=volumes(COLOC_CORE_ER_POPULATION).sum,
            ld_volumes=tuple(float(v) for v in lds.volumes),
            ld_sphericities=tuple(float(v) for v in lds.sphericities),
        )
