"""Diff engine: structural differences between two shapes.

Records are matched by key (old key order first, then keys only present in
the new shape), sequences by index, labels by equality. When the two sides
are different kinds of shape (label, sequence, record) the whole subtree
is reported as a single "changed" entry.
"""

from __future__ import annotations

from ..analyzer import ShapeResult
from .models import PathKey, ShapeChange, ShapeDiff

_MISSING = object()


def diff_shapes(old: ShapeResult, new: ShapeResult) -> ShapeDiff:
    """Compare two shapes and return every structural change.

    Example:
        >>> diff = diff_shapes({"a": "number"}, {"a": "string", "b": "null"})
        >>> [(c.location, c.status) for c in diff.changes]
        [('$.a', 'changed'), ('$.b', 'added')]
    """
    changes: list[ShapeChange] = []
    _diff_node(old, new, (), changes)
    return ShapeDiff(changes=changes)


def _diff_node(
    old: object,
    new: object,
    path: tuple[PathKey, ...],
    changes: list[ShapeChange],
) -> None:
    if old is _MISSING:
        changes.append(ShapeChange(path, "added", None, new))
        return
    if new is _MISSING:
        changes.append(ShapeChange(path, "removed", old, None))
        return

    if isinstance(old, dict) and isinstance(new, dict):
        keys = list(old)
        keys.extend(key for key in new if key not in old)
        for key in keys:
            _diff_node(old.get(key, _MISSING), new.get(key, _MISSING), path + (key,), changes)
        return

    if isinstance(old, list) and isinstance(new, list):
        for index in range(max(len(old), len(new))):
            old_item = old[index] if index < len(old) else _MISSING
            new_item = new[index] if index < len(new) else _MISSING
            _diff_node(old_item, new_item, path + (index,), changes)
        return

    if old != new:
        changes.append(ShapeChange(path, "changed", old, new))

