"""Shape command — print the structural summary of a data file."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..api import get_shape
from ..display import render_tree
from ..exceptions import SilhouetteError
from ..loaders import STDIN, load_input
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

_FORMATS = ("json", "tree")


@app.command()
def shape(
    path: Path = typer.Argument(
        ...,
        help="Data file (.json, .npy, .npz) or - for JSON on stdin",
    ),
    max_depth: Optional[int] = MAX_DEPTH_OPTION,
    array_limit: Optional[int] = ARRAY_LIMIT_OPTION,
    cycle_scope: Optional[str] = CYCLE_SCOPE_OPTION,
    fmt: str = typer.Option(
        "json",
        "--format",
        "-f",
        help="Output format: json (machine-readable) or tree (human-readable)",
    ),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """
    Print the shape of a data file.

    [bold cyan]Examples:[/bold cyan]

      silhouette shape response.json

      silhouette shape embeddings.npz --format tree

      cat data.json | silhouette shape - --max-depth 3
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    if fmt not in _FORMATS:
        raise fail(f"Unknown format '{fmt}'. Use one of: {', '.join(_FORMATS)}")
    if path != STDIN and not path.is_file():
        raise fail(f"File not found: {path}")

    try:
        options = resolve_options(config, max_depth, array_limit, cycle_scope)
        value = load_input(path)
        result = get_shape(value, options)
    except SilhouetteError as e:
        raise fail(str(e))

    logger.debug("Rendering shape of %s as %s", path, fmt)
    if fmt == "tree":
        console.print(render_tree(result, label="stdin" if path == STDIN else path.name))
    else:
        console.print_json(json.dumps(result))
