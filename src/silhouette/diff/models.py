"""Data models for shape diffing."""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..analyzer import ShapeResult

PathKey = Union[str, int]


@dataclass(frozen=True)
class ShapeChange:
    """One structural difference between two shapes.

    ``path`` is the chain of record keys and sequence indices from the root.
    ``old`` is None for additions, ``new`` is None for removals.
    """

    path: Tuple[PathKey, ...]
    status: str  # "added" | "removed" | "changed"
    old: Optional[ShapeResult] = None
    new: Optional[ShapeResult] = None

    @property
    def location(self) -> str:
        """Dotted path with [i] for indices, "$" for the root."""
        parts = ["$"]
        for key in self.path:
            parts.append(f"[{key}]" if isinstance(key, int) else f".{key}")
        return "".join(parts)


@dataclass
class ShapeDiff:
    """All differences between two shapes, in traversal order."""

    changes: list[ShapeChange] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.changes

    @property
    def added(self) -> list[ShapeChange]:
        return [c for c in self.changes if c.status == "added"]

    @property
    def removed(self) -> list[ShapeChange]:
        return [c for c in self.changes if c.status == "removed"]

    @property
    def changed(self) -> list[ShapeChange]:
        return [c for c in self.changes if c.status == "changed"]

    def to_dict(self) -> dict:
        return {
            "changes": [
                {
                    "path": c.location,
                    "status": c.status,
                    "old": c.old,
                    "new": c.new,
                }
                for c in self.changes
            ],
        }
