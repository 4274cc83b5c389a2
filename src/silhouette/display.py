"""Rich renderables for shapes and shape diffs."""

from __future__ import annotations

from typing import Optional

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from .analyzer import ShapeResult
from .diff import ShapeDiff

_STATUS_STYLES = {
    "added": "green",
    "removed": "red",
    "changed": "yellow",
}


def _label_text(label: str) -> Text:
    # Text (not markup) so sentinels like "[Circular]" print verbatim
    style = "magenta" if label.startswith("[") else "cyan"
    return Text(label, style=style)


def _node_text(name: str, shape: Optional[ShapeResult]) -> Text:
    text = Text(name, style="bold")
    if shape is None:
        text.append(": ")
        text.append("<empty>", style="dim")
    elif isinstance(shape, str):
        text.append(": ")
        text.append_text(_label_text(shape))
    elif isinstance(shape, list):
        text.append(f" ({len(shape)} items)", style="dim")
    else:
        text.append(f" ({len(shape)} keys)", style="dim")
    return text


def _add_children(tree: Tree, shape: ShapeResult) -> None:
    if isinstance(shape, list):
        entries = [(f"[{index}]", item) for index, item in enumerate(shape)]
    elif isinstance(shape, dict):
        entries = list(shape.items())
    else:
        return
    for name, child in entries:
        branch = tree.add(_node_text(name, child))
        _add_children(branch, child)


def render_tree(shape: ShapeResult, label: str = "shape") -> Tree:
    """Render a shape as a rich Tree.

    Records show ``key: label``, sequences show ``[i]``, holes show
    ``<empty>``. A bare label renders as a single node.
    """
    tree = Tree(_node_text(label, shape), guide_style="dim")
    _add_children(tree, shape)
    return tree


def render_diff_table(diff: ShapeDiff) -> Table:
    """Render shape changes as a table, one row per change."""
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Path", style="bold")
    table.add_column("Status")
    table.add_column("Old")
    table.add_column("New")

    for change in diff.changes:
        style = _STATUS_STYLES.get(change.status, "")
        table.add_row(
            Text(change.location),
            Text(change.status, style=style),
            Text(_summary(change.old)),
            Text(_summary(change.new)),
        )
    return table


def _summary(shape: Optional[ShapeResult]) -> str:
    if shape is None:
        return "-"
    if isinstance(shape, str):
        return shape
    if isinstance(shape, list):
        return f"[{len(shape)} items]"
    return f"{{{len(shape)} keys}}"
