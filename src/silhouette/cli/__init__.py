"""CLI entry point — registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="silhouette",
    help="Silhouette - bounded structural summaries of data files",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"silhouette {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Summarize the shape of JSON and numpy data without printing it."""


# Import subcommands to register them
from .shape import shape as _shape  # noqa: F401, E402
from .diff import diff as _diff  # noqa: F401, E402
