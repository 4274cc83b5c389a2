"""Diff command — compare the shapes of two data files."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..api import get_shape
from ..diff import diff_shapes
from ..display import render_diff_table
from ..exceptions import SilhouetteError
from ..loaders import load_input
from ..logging_config import setup_logging
from . import app
from ._common import (
    ARRAY_LIMIT_OPTION,
    CONFIG_OPTION,
    CYCLE_SCOPE_OPTION,
    MAX_DEPTH_OPTION,
    QUIET_OPTION,
    VERBOSE_OPTION,
    console,
    fail,
    resolve_options,
)

EXIT_DIFFERENT = 1


@app.command()
def diff(
    old: Path = typer.Argument(..., help="Baseline data file (.json, .npy, .npz)"),
    new: Path = typer.Argument(..., help="Data file to compare against the baseline"),
    max_depth: Optional[int] = MAX_DEPTH_OPTION,
    array_limit: Optional[int] = ARRAY_LIMIT_OPTION,
    cycle_scope: Optional[str] = CYCLE_SCOPE_OPTION,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """
    Show how the shape of NEW differs from the shape of OLD.

    Exits with status 1 when the shapes differ and 0 when they match.

    [bold cyan]Examples:[/bold cyan]

      silhouette diff before.json after.json

      silhouette diff v1.npz v2.npz --json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    for path in (old, new):
        if not path.is_file():
            raise fail(f"File not found: {path}")

    try:
        options = resolve_options(config, max_depth, array_limit, cycle_scope)
        old_shape = get_shape(load_input(old), options)
        new_shape = get_shape(load_input(new), options)
    except SilhouetteError as e:
        raise fail(str(e))

    result = diff_shapes(old_shape, new_shape)
    logger.debug("%d shape change(s) between %s and %s", len(result.changes), old, new)

    if json_output:
        console.print_json(json.dumps(result.to_dict()))
    elif result.is_empty:
        console.print("[green]Shapes match.[/green]")
    else:
        console.print(
            f"[bold]{len(result.changes)} change(s):[/bold] "
            f"[green]{len(result.added)} added[/green], "
            f"[red]{len(result.removed)} removed[/red], "
            f"[yellow]{len(result.changed)} changed[/yellow]"
        )
        console.print(render_diff_table(result))

    if not result.is_empty:
        raise typer.Exit(EXIT_DIFFERENT)
