"""Named sentinel values.

Python has a single "nothing" value (``None``), which shapes as ``"null"``.
The sentinels here cover the other absent and unique markers a shape can
describe:

    UNDEFINED  an absent value, shapes as ``"undefined"``
    HOLE       an unpopulated slot inside a sequence; the slot's shape is
               ``None`` when the sequence is expanded
    Sentinel   any other instance is a unique symbol, shapes as ``"symbol"``
"""

from __future__ import annotations


class Sentinel:
    """A unique, named marker compared by identity."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"

    def __copy__(self) -> Sentinel:
        return self

    def __deepcopy__(self, memo) -> Sentinel:
        return self


UNDEFINED = Sentinel("UNDEFINED")
HOLE = Sentinel("HOLE")


def is_absent(value: object) -> bool:
    """True for the sentinels that shape as ``"undefined"``."""
    return value is UNDEFINED or value is HOLE
