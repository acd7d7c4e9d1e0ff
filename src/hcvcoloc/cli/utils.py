"""Shared CLI utilities — Rich console, logging, error handling, config helpers."""

from __future__ import annotations

import functools
import logging
import traceback
from typing import Any, Callable

from rich.console import Console
from rich.logging import RichHandler

from hcvcoloc.core.config import AnalysisConfig

console = Console()

# Set by the --verbose flag on the top-level CLI group.
verbose: bool = False


def configure_logging(level: int = logging.INFO) -> None:
    """Route hcvcoloc log records through a Rich handler."""
    logger = logging.getLogger("hcvcoloc")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def load_analysis_config(path: str | None) -> AnalysisConfig:
    """Load a YAML config, or the defaults when no path is given."""
    if path is None:
        return AnalysisConfig()
    from hcvcoloc.core.config import load_config

    return load_config(path)


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator wrapping CLI commands with standard error handling.

    Catches AnalysisError and missing files (exit 1) and unexpected
    exceptions (exit 2). With --verbose, unexpected errors include the
    full traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        from hcvcoloc.core.exceptions import AnalysisError

        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except (AnalysisError, FileNotFoundError, FileExistsError) as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        except Exception as e:
            if verbose:
                console.print(f"[red]Internal error:[/red] {e}")
                console.print(traceback.format_exc())
            else:
                console.print(
                    f"[red]Internal error:[/red] {type(e).__name__}: {e}\n"
                    "[dim]Use --verbose for the full traceback.[/dim]"
                )
            raise SystemExit(2)

    return wrapper
