"""DatasetScanner — discover datasets in an analysis folder and its subfolders."""

from __future__ import annotations

from pathlib import Path

from hcvcoloc.core.config import DATASET_EXTENSION
from hcvcoloc.io.models import DatasetFile


class DatasetScanner:
    """Find datasets one folder level deep and group them by folder.

    Datasets directly inside the analysis folder form the first group;
    every immediate subfolder holding datasets forms one more group.
    Deeper folders are not visited.

    Args:
        extension: Dataset file extension, including the dot.
    """

    def __init__(self, extension: str = DATASET_EXTENSION) -> None:
        self._extension = extension.lower()

    def scan(self, path: Path) -> list[DatasetFile]:
        """List datasets under ``path`` in group order.

        Raises:
            FileNotFoundError: If path does not exist.
            ValueError: If path is not a directory or holds no datasets.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Analysis folder does not exist: {path}")
        if not path.is_dir():
            raise ValueError(f"Analysis folder is not a directory: {path}")

        folders = [path] + sorted(
            child for child in path.iterdir()
            if child.is_dir() and not child.is_symlink()
        )

        datasets: list[DatasetFile] = []
        group_index = 0
        for folder in folders:
            files = self._find_datasets(folder)
            if not files:
                continue
            group_index += 1
            for file_path in files:
                datasets.append(
                    DatasetFile(
                        path=file_path,
                        group=folder.name,
                        group_index=group_index,
                        sample_id=file_path.stem,
                    )
                )

        if not datasets:
            raise ValueError(f"No {self._extension} datasets found in: {path}")
        return datasets

    def _find_datasets(self, folder: Path) -> list[Path]:
        """Dataset files directly inside ``folder``, skipping symlinks."""
        return sorted(
            child for child in folder.iterdir()
            if not child.is_symlink()
            and child.is_file()
            and child.suffix.lower() == self._extension
        )
