"""hcvcoloc workflow — imaging platform interface and batch orchestration."""

from hcvcoloc.workflow.batch import BatchOrchestrator, BatchResult, DatasetResult
from hcvcoloc.workflow.platform import ImagingPlatform

__all__ = [
    "BatchOrchestrator",
    "BatchResult",
    "DatasetResult",
    "ImagingPlatform",
]
