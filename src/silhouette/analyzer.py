"""Shape analysis.

``analyze`` walks a value depth first and returns its shape:

    label     str, for primitives, callables and collapsed composites
    sequence  list of element shapes (None for holes)
    record    dict of key -> shape

Composite values are tracked by identity in a VisitedSet for the whole
call. A composite met a second time becomes "[Circular]"; a composite at
``max_depth`` becomes "[Max Depth]". Together these keep every result a
finite tree, whatever the input graph looks like.

The walk keeps its own stack of open composites instead of recursing, so
nesting depth is limited only by ``max_depth`` and never by the
interpreter's recursion limit. Enum members shape as their value.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Union

from .kinds import (
    Kind,
    buffer_view_length,
    buffer_view_name,
    callable_label,
    classify,
    primitive_label,
    record_items,
)
from .sentinels import HOLE, UNDEFINED

ShapeResult = Union[str, List[Optional["ShapeResult"]], Dict[str, "ShapeResult"]]

CIRCULAR = "[Circular]"
MAX_DEPTH = "[Max Depth]"
EMPTY_ARRAY = "Array [0]"

_DONE = object()


class VisitedSet:
    """Identity-keyed set of composites entered during one call.

    Entries hold the object alongside its id so the id cannot be reused by
    another object while the call runs. The set is dropped with the call.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[int, object] = {}

    def __contains__(self, value: object) -> bool:
        return id(value) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, value: object) -> None:
        self._entries[id(value)] = value

    def discard(self, value: object) -> None:
        self._entries.pop(id(value), None)


def coarse_tag(shape: Optional[ShapeResult]) -> str:
    """Reduce a shape to the tag used in over-limit sequence summaries."""
    if isinstance(shape, str):
        return shape
    if isinstance(shape, list):
        return "Array"
    return "Object"


class _Frame:
    """A composite whose children are still being shaped."""

    __slots__ = ("value", "depth", "_pending")

    def __init__(self, value: object, depth: int, items) -> None:
        self.value = value
        self.depth = depth
        self._pending = iter(items)

    def next_item(self) -> object:
        """Next child to shape, or ``_DONE``."""
        return next(self._pending, _DONE)

    def accept(self, shape: ShapeResult) -> None:
        raise NotImplementedError

    def finish(self) -> ShapeResult:
        raise NotImplementedError


class _ListFrame(_Frame):
    """Sequence within the limit, expanded element by element."""

    __slots__ = ("_shapes",)

    def __init__(self, value, depth: int) -> None:
        super().__init__(value, depth, value)
        self._shapes: List[Optional[ShapeResult]] = []

    def next_item(self) -> object:
        item = next(self._pending, _DONE)
        # Holes are skipped, leaving a slot with no shape
        while item is HOLE:
            self._shapes.append(None)
            item = next(self._pending, _DONE)
        return item

    def accept(self, shape: ShapeResult) -> None:
        self._shapes.append(shape)

    def finish(self) -> ShapeResult:
        return self._shapes


class _SummaryFrame(_Frame):
    """Sequence over the limit, reduced to the union of element tags."""

    __slots__ = ("_length", "_tags")

    def __init__(self, value, depth: int) -> None:
        # Summaries read holes as plain absent values
        super().__init__(value, depth, (UNDEFINED if item is HOLE else item for item in value))
        self._length = len(value)
        self._tags: set[str] = set()

    def accept(self, shape: ShapeResult) -> None:
        self._tags.add(coarse_tag(shape))

    def finish(self) -> ShapeResult:
        return f"Array<{' | '.join(sorted(self._tags))}> [Length: {self._length}]"


class _RecordFrame(_Frame):
    __slots__ = ("_key", "_shapes")

    def __init__(self, value, depth: int) -> None:
        super().__init__(value, depth, record_items(value))
        self._key: Optional[str] = None
        self._shapes: Dict[str, ShapeResult] = {}

    def next_item(self) -> object:
        entry = next(self._pending, None)
        if entry is None:
            return _DONE
        self._key, item = entry
        return item

    def accept(self, shape: ShapeResult) -> None:
        self._shapes[self._key] = shape

    def finish(self) -> ShapeResult:
        return self._shapes


def analyze(
    value: object,
    depth: int,
    max_depth: int,
    array_limit: int,
    visited: VisitedSet,
    path_scoped: bool = False,
) -> ShapeResult:
    """Compute the shape of ``value`` found at nesting level ``depth``.

    With ``path_scoped`` a composite is forgotten again once its subtree is
    done, so only values that contain themselves report "[Circular]".
    """
    entered = _enter(value, depth, max_depth, array_limit, visited, path_scoped)
    if not isinstance(entered, _Frame):
        return entered

    stack = [entered]
    while True:
        frame = stack[-1]
        item = frame.next_item()
        if item is _DONE:
            stack.pop()
            shape = frame.finish()
            if path_scoped:
                visited.discard(frame.value)
            if not stack:
                return shape
            stack[-1].accept(shape)
            continue

        entered = _enter(item, frame.depth + 1, max_depth, array_limit, visited, path_scoped)
        if isinstance(entered, _Frame):
            stack.append(entered)
        else:
            frame.accept(entered)


def _enter(
    value: object,
    depth: int,
    max_depth: int,
    array_limit: int,
    visited: VisitedSet,
    path_scoped: bool,
) -> Union[ShapeResult, _Frame]:
    """Shape ``value`` directly, or open a frame for its children."""
    if isinstance(value, Enum):
        value = value.value

    kind = classify(value)

    if kind is Kind.PRIMITIVE:
        return primitive_label(value)
    if kind is Kind.CALLABLE:
        return callable_label(value)

    if value in visited:
        return CIRCULAR
    visited.add(value)

    if depth >= max_depth:
        shape: Union[ShapeResult, _Frame] = MAX_DEPTH
    else:
        shape = _open(kind, value, depth, array_limit)

    if path_scoped and not isinstance(shape, _Frame):
        visited.discard(value)
    return shape


def _open(kind: Kind, value, depth: int, array_limit: int) -> Union[ShapeResult, _Frame]:
    if kind is Kind.BUFFER_VIEW:
        return f"{buffer_view_name(value)} [Length: {buffer_view_length(value)}]"

    if kind is Kind.SEQUENCE:
        length = len(value)
        if length == 0:
            return EMPTY_ARRAY
        if length <= array_limit:
            return _ListFrame(value, depth)
        return _SummaryFrame(value, depth)

    if kind is Kind.DATE:
        return "Date"
    if kind is Kind.REGEXP:
        return "RegExp"
    if kind is Kind.MAP_LIKE:
        return f"Map [Size: {len(value)}]"
    if kind is Kind.SET_LIKE:
        return f"Set [Size: {len(value)}]"

    if kind is Kind.RECORD:
        return _RecordFrame(value, depth)

    return "Object"
