"""hcvcoloc scan — list the datasets of an analysis folder."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from hcvcoloc.cli.utils import console, error_handler
from hcvcoloc.core.config import DATASET_EXTENSION


@click.command()
@click.argument("folder", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--extension", default=DATASET_EXTENSION, show_default=True,
    help="Dataset file extension.",
)
@error_handler
def scan(folder: str, extension: str) -> None:
    """List datasets in FOLDER and its immediate subfolders."""
    from hcvcoloc.io.scanner import DatasetScanner

    try:
        datasets = DatasetScanner(extension).scan(Path(folder))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    table = Table(show_header=True, title=f"Datasets in {folder}")
    table.add_column("Group #")
    table.add_column("Group", style="bold")
    table.add_column("Sample")
    for ds in datasets:
        table.add_row(str(ds.group_index), ds.group, ds.sample_id)
    console.print(table)
    console.print(f"\n[green]{len(datasets)} datasets found[/green]")
