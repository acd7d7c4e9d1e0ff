"""hcvcoloc config — write and inspect analysis configurations."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from hcvcoloc.cli.utils import console, error_handler


@click.group()
def config() -> None:
    """Write and inspect analysis configurations."""


@config.command("init")
@click.argument("path", type=click.Path())
@click.option("--overwrite", is_flag=True, help="Overwrite the file if it exists.")
@error_handler
def config_init(path: str, overwrite: bool) -> None:
    """Write the default configuration to PATH as YAML."""
    from hcvcoloc.core.config import AnalysisConfig, save_config

    out_path = Path(path).expanduser()
    if out_path.exists() and not overwrite:
        console.print(
            f"[red]Error:[/red] Config file already exists: {out_path}\n"
            "Use --overwrite to replace it."
        )
        raise SystemExit(1)
    save_config(AnalysisConfig(), out_path)
    console.print(f"[green]Wrote default configuration to {out_path}[/green]")


@config.command("show")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@error_handler
def config_show(path: str) -> None:
    """Validate and print the configuration at PATH."""
    from hcvcoloc.core.config import load_config

    cfg = load_config(Path(path))
    table = Table(show_header=True, title=str(path))
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in cfg.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)
    console.print(f"Enabled stages: {', '.join(cfg.enabled_stages) or 'none'}")
