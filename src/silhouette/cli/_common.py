"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import ShapeOptions, load_options

console = Console()
err_console = Console(stderr=True)

EXIT_ERROR = 2


def resolve_options(
    config: Optional[Path] = None,
    max_depth: Optional[int] = None,
    array_limit: Optional[int] = None,
    cycle_scope: Optional[str] = None,
) -> ShapeOptions:
    """Build options from CLI flags on top of config files and env vars."""
    return load_options(
        config_file=config,
        max_depth=max_depth,
        array_limit=array_limit,
        cycle_scope=cycle_scope,
    )


def fail(message: str) -> typer.Exit:
    """Print an error to stderr and return the Exit to raise."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    return typer.Exit(EXIT_ERROR)


# Options shared by every command that computes shapes
MAX_DEPTH_OPTION = typer.Option(
    None,
    "--max-depth",
    "-d",
    help="Nesting level at which values collapse to [Max Depth] (default 5)",
    min=0,
)
ARRAY_LIMIT_OPTION = typer.Option(
    None,
    "--array-limit",
    "-n",
    help="Longest list expanded item by item; longer lists are summarized (default 20)",
    min=0,
)
CYCLE_SCOPE_OPTION = typer.Option(
    None,
    "--cycle-scope",
    help="global: any repeated object is [Circular]; path: only true cycles",
)
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
)
VERBOSE_OPTION = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable debug logging",
)
QUIET_OPTION = typer.Option(
    False,
    "--quiet",
    "-q",
    help="Suppress logging",
)
