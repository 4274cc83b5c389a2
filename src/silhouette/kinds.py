"""Value classification for shape analysis.

Every value falls into exactly one Kind. ``classify`` checks in a fixed
order and the first match wins:

    PRIMITIVE    None, bools, text, numbers, sentinels, bare object()
    CALLABLE     functions, methods, builtins, classes, partials, ufuncs
    BUFFER_VIEW  numpy arrays, array.array, bytes, bytearray
    SEQUENCE     list, tuple, deque
    DATE         datetime.date / datetime / time, numpy.datetime64
    REGEXP       compiled re.Pattern
    MAP_LIKE     Mapping types other than dict
    SET_LIKE     set, frozenset, other abc.Set types
    RECORD       dict, dataclass instances, objects with __dict__
    UNKNOWN      everything else

Instances that merely define __call__ are not CALLABLE; they shape by
what they hold like any other object. The analyzer unwraps Enum members
to their value before calling ``classify``.

memoryview is deliberately not a BUFFER_VIEW: it is a raw byte window with
format accessors rather than a fixed-width numeric array, so it lands in
UNKNOWN.
"""

from __future__ import annotations

import array
import dataclasses
import datetime
import functools
import inspect
import numbers
import re
import types
from collections import deque
from collections.abc import Mapping, Set
from enum import Enum

import numpy as np

from .sentinels import UNDEFINED, Sentinel, is_absent

# Largest integer a double represents exactly; beyond it ints shape as "bigint"
MAX_SAFE_INTEGER = 2**53 - 1

_SEQUENCE_TYPES = (list, tuple, deque)
_DATE_TYPES = (datetime.date, datetime.time, np.datetime64)
# Callables that are not routines but still read as functions
_FUNCTION_LIKE_TYPES = (type, functools.partial, np.ufunc)


class Kind(Enum):
    """The closed set of value categories a shape distinguishes."""

    PRIMITIVE = "primitive"
    CALLABLE = "callable"
    BUFFER_VIEW = "buffer_view"
    SEQUENCE = "sequence"
    DATE = "date"
    REGEXP = "regexp"
    MAP_LIKE = "map_like"
    SET_LIKE = "set_like"
    RECORD = "record"
    UNKNOWN = "unknown"

    @property
    def is_composite(self) -> bool:
        """Composite kinds take part in cycle and depth tracking."""
        return self not in (Kind.PRIMITIVE, Kind.CALLABLE)


def _is_primitive(value: object) -> bool:
    if value is None or isinstance(value, (bool, np.bool_, str, Sentinel)):
        return True
    if isinstance(value, np.generic):
        return isinstance(value, (np.number, np.str_))
    if isinstance(value, numbers.Number):
        return True
    return type(value) is object


def classify(value: object) -> Kind:
    """Return the Kind of a value. Never raises."""
    if _is_primitive(value):
        return Kind.PRIMITIVE
    if inspect.isroutine(value) or isinstance(value, _FUNCTION_LIKE_TYPES):
        return Kind.CALLABLE
    if isinstance(value, (np.ndarray, array.array, bytes, bytearray)):
        return Kind.BUFFER_VIEW
    if isinstance(value, _SEQUENCE_TYPES):
        return Kind.SEQUENCE
    if isinstance(value, _DATE_TYPES):
        return Kind.DATE
    if isinstance(value, re.Pattern):
        return Kind.REGEXP
    if isinstance(value, Mapping) and not isinstance(value, dict):
        return Kind.MAP_LIKE
    if isinstance(value, Set):
        return Kind.SET_LIKE
    if _is_record(value):
        return Kind.RECORD
    return Kind.UNKNOWN


def _is_record(value: object) -> bool:
    if isinstance(value, dict):
        return True
    if isinstance(value, types.ModuleType):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__")


def primitive_label(value: object) -> str:
    """Fixed label for a PRIMITIVE value."""
    if value is None:
        return "null"
    if is_absent(value):
        return "undefined"
    if isinstance(value, (bool, np.bool_)):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, int) and abs(value) > MAX_SAFE_INTEGER:
        return "bigint"
    if isinstance(value, (numbers.Number, np.number)):
        return "number"
    return "symbol"


def callable_label(value: object) -> str:
    name = getattr(value, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        return "Function"
    return f"Function({name})"


def _array_element_name(typecode: str, itemsize: int) -> str:
    if typecode in ("u", "w"):
        return "unicode"
    if typecode in ("f", "d"):
        return f"float{itemsize * 8}"
    prefix = "uint" if typecode.isupper() else "int"
    return f"{prefix}{itemsize * 8}"


def buffer_view_name(value: object) -> str:
    """Element-kind name of a BUFFER_VIEW, e.g. ``ndarray[float32]``."""
    if isinstance(value, np.ndarray):
        return f"ndarray[{value.dtype.name}]"
    if isinstance(value, array.array):
        return f"array[{_array_element_name(value.typecode, value.itemsize)}]"
    return type(value).__name__


def buffer_view_length(value: object) -> int:
    """Element count of a BUFFER_VIEW (all elements for n-d arrays)."""
    if isinstance(value, np.ndarray):
        return int(value.size)
    return len(value)


def record_items(value: object) -> list[tuple[str, object]]:
    """Own string-keyed entries of a RECORD, in natural order.

    Non-string dict keys are skipped. Dataclasses list their declared
    fields, so ``slots=True`` dataclasses work too.
    """
    if isinstance(value, dict):
        return [(key, item) for key, item in value.items() if isinstance(key, str)]
    if dataclasses.is_dataclass(value):
        return [(f.name, getattr(value, f.name, UNDEFINED)) for f in dataclasses.fields(value)]
    return [(key, item) for key, item in vars(value).items() if isinstance(key, str)]
