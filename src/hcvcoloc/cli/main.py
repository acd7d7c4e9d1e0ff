"""hcvcoloc CLI — top-level Click group."""

from __future__ import annotations

import logging

import click


@click.group()
@click.version_option(package_name="hcvcoloc")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging and full tracebacks.")
def cli(verbose: bool) -> None:
    """HCV colocalization — thresholds and colocalization of 3D confocal stacks."""
    from hcvcoloc.cli import utils

    utils.verbose = verbose
    if verbose:
        utils.configure_logging(logging.DEBUG)


def _register_commands() -> None:
    """Register all subcommands — imports deferred to avoid loading heavy deps at startup."""
    from hcvcoloc.cli.analyze import coloc, thresholds
    from hcvcoloc.cli.config_cmd import config
    from hcvcoloc.cli.scan import scan

    cli.add_command(coloc)
    cli.add_command(config)
    cli.add_command(scan)
    cli.add_command(thresholds)


_register_commands()
