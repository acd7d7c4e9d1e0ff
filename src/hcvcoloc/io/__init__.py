"""hcvcoloc IO — dataset discovery, TIFF stacks and results export."""

from hcvcoloc.io.export import (
    colocalization_table,
    per_object_table,
    statistics_table,
    write_results,
)
from hcvcoloc.io.models import DatasetFile
from hcvcoloc.io.scanner import DatasetScanner
from hcvcoloc.io.tiff import read_channel_stack

__all__ = [
    "DatasetFile",
    "DatasetScanner",
    "colocalization_table",
    "per_object_table",
    "read_channel_stack",
    "statistics_table",
    "write_results",
]
