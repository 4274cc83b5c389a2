"""Tests for get_shape: shape analysis end to end."""

import array
import copy
import dataclasses
import datetime
import enum
import functools
import gc
import re
import sys
import weakref
from collections import ChainMap, OrderedDict, deque
from decimal import Decimal
from types import MappingProxyType

import numpy as np
import pytest

from silhouette import HOLE, UNDEFINED, InvalidOptionError, Sentinel, ShapeOptions, get_shape


def named_func():
    pass


class Node:
    def __init__(self, **attrs):
        self.__dict__.update(attrs)


@dataclasses.dataclass
class Point:
    x: int
    y: float


class Color(enum.Enum):
    RED = "red"
    ORIGIN = (0, 0)


class Priority(enum.IntEnum):
    LOW = 1


class Scorer:
    def __init__(self):
        self.weights = [0.5, 1.5]

    def __call__(self, x):
        return x


class CallableDict(dict):
    def __call__(self):
        return len(self)


class TestPrimitives:
    """Every primitive maps to its fixed label."""

    def test_string(self):
        assert get_shape("hello") == "string"

    def test_number(self):
        assert get_shape(42) == "number"
        assert get_shape(3.14) == "number"
        assert get_shape(float("nan")) == "number"
        assert get_shape(float("inf")) == "number"
        assert get_shape(-float("inf")) == "number"

    def test_other_numeric_types(self):
        assert get_shape(1 + 2j) == "number"
        assert get_shape(Decimal("1.5")) == "number"
        assert get_shape(np.float32(1.5)) == "number"
        assert get_shape(np.int64(7)) == "number"

    def test_boolean(self):
        assert get_shape(True) == "boolean"
        assert get_shape(False) == "boolean"
        assert get_shape(np.bool_(True)) == "boolean"

    def test_null(self):
        assert get_shape(None) == "null"

    def test_undefined(self):
        assert get_shape(UNDEFINED) == "undefined"

    def test_bigint(self):
        assert get_shape(2**53) == "bigint"
        assert get_shape(-(2**70)) == "bigint"

    def test_largest_safe_integer_is_number(self):
        assert get_shape(2**53 - 1) == "number"

    def test_symbol(self):
        assert get_shape(Sentinel("token")) == "symbol"
        assert get_shape(object()) == "symbol"


class TestFunctions:
    """Callables shape as Function or Function(name)."""

    def test_anonymous_function(self):
        assert get_shape(lambda: None) == "Function"

    def test_named_function(self):
        assert get_shape(named_func) == "Function(named_func)"

    def test_builtin(self):
        assert get_shape(len) == "Function(len)"

    def test_class_is_callable(self):
        assert get_shape(Node) == "Function(Node)"

    def test_partial_has_no_name(self):
        assert get_shape(functools.partial(named_func)) == "Function"

    def test_bound_method(self):
        assert get_shape(Node().__init__) == "Function(__init__)"

    def test_callable_instance_shapes_as_record(self):
        assert get_shape(Scorer()) == {"weights": ["number", "number"]}

    def test_callable_dict_subclass_shapes_as_record(self):
        assert get_shape(CallableDict(a=1, b="x")) == {"a": "number", "b": "string"}

    def test_numpy_ufunc(self):
        assert get_shape(np.add) == "Function(add)"


class TestSequences:
    """Lists, tuples and deques expand or collapse around array_limit."""

    def test_empty_list(self):
        assert get_shape([]) == "Array [0]"

    def test_small_list_with_numbers(self):
        assert get_shape([1, 2, 3]) == ["number", "number", "number"]

    def test_small_list_with_mixed_types(self):
        assert get_shape([1, "hello", True]) == ["number", "string", "boolean"]

    def test_small_list_with_nested_records(self):
        assert get_shape([{"a": 1}, {"b": "test"}]) == [{"a": "number"}, {"b": "string"}]

    def test_tuple_and_deque(self):
        assert get_shape((1, "a")) == ["number", "string"]
        assert get_shape(deque([None])) == ["null"]

    def test_large_list(self):
        assert get_shape([42] * 10000) == "Array<number> [Length: 10000]"

    def test_large_list_with_mixed_types(self):
        mixed = [1] * 50 + ["test"] * 50
        assert get_shape(mixed) == "Array<number | string> [Length: 100]"

    def test_list_at_the_limit_expands(self):
        assert get_shape([1] * 20) == ["number"] * 20

    def test_list_over_the_limit_collapses(self):
        assert get_shape([1] * 21) == "Array<number> [Length: 21]"

    def test_over_limit_tags_for_nested_shapes(self):
        data = [[1], {"a": 1}, "x"]
        assert get_shape(data, array_limit=2) == "Array<Array | Object | string> [Length: 3]"

    def test_over_limit_tags_keep_labels(self):
        assert get_shape([len] * 25) == "Array<Function(len)> [Length: 25]"

    def test_over_limit_tags_are_sorted_and_unique(self):
        data = ["s", 1, None, "t", 2, None]
        assert get_shape(data, array_limit=1) == "Array<null | number | string> [Length: 6]"


class TestHoles:
    """HOLE marks a slot with no value inside a sequence."""

    def test_holes_carry_no_shape(self):
        sparse = [1, HOLE, HOLE, HOLE, 5]
        assert get_shape(sparse) == ["number", None, None, None, "number"]

    def test_summary_reads_holes_as_undefined(self):
        sparse = [HOLE, HOLE, HOLE, 1]
        assert get_shape(sparse, array_limit=2) == "Array<number | undefined> [Length: 4]"

    def test_hole_outside_a_sequence_is_undefined(self):
        assert get_shape(HOLE) == "undefined"
        assert get_shape({"slot": HOLE}) == {"slot": "undefined"}


class TestBufferViews:
    """Numeric buffers report element kind and count without recursing."""

    def test_float32_ndarray(self):
        arr = np.array([1.1, 2.2, 3.3], dtype=np.float32)
        assert get_shape(arr) == "ndarray[float32] [Length: 3]"

    def test_float64_ndarray(self):
        assert get_shape(np.zeros(1000)) == "ndarray[float64] [Length: 1000]"

    @pytest.mark.parametrize(
        "dtype, name",
        [
            (np.int8, "int8"),
            (np.int16, "int16"),
            (np.int32, "int32"),
            (np.uint8, "uint8"),
            (np.uint16, "uint16"),
            (np.uint32, "uint32"),
        ],
    )
    def test_integer_ndarrays(self, dtype, name):
        assert get_shape(np.zeros(100, dtype=dtype)) == f"ndarray[{name}] [Length: 100]"

    def test_multidimensional_counts_all_elements(self):
        assert get_shape(np.zeros((64, 64), dtype=np.float32)) == "ndarray[float32] [Length: 4096]"

    def test_stdlib_array(self):
        assert get_shape(array.array("B", [255, 0, 128])) == "array[uint8] [Length: 3]"
        assert get_shape(array.array("d", [1.0])) == "array[float64] [Length: 1]"

    def test_bytes(self):
        assert get_shape(b"abc") == "bytes [Length: 3]"
        assert get_shape(bytearray(5)) == "bytearray [Length: 5]"

    def test_memoryview_is_not_a_buffer_view(self):
        assert get_shape(memoryview(b"abc")) == "Object"


class TestSpecialComposites:
    """Dates, patterns, mappings and sets collapse to a label."""

    def test_date(self):
        assert get_shape(datetime.datetime.now()) == "Date"
        assert get_shape(datetime.date(2024, 1, 1)) == "Date"
        assert get_shape(datetime.time(12, 30)) == "Date"
        assert get_shape(np.datetime64("2024-01-01")) == "Date"

    def test_regexp(self):
        assert get_shape(re.compile("test")) == "RegExp"

    def test_map(self):
        assert get_shape(MappingProxyType({"a": 1, "b": 2})) == "Map [Size: 2]"
        assert get_shape(ChainMap({"a": 1})) == "Map [Size: 1]"

    def test_empty_map(self):
        assert get_shape(MappingProxyType({})) == "Map [Size: 0]"

    def test_set(self):
        assert get_shape({1, 2, 3}) == "Set [Size: 3]"
        assert get_shape(frozenset("ab")) == "Set [Size: 2]"

    def test_empty_set(self):
        assert get_shape(set()) == "Set [Size: 0]"

    def test_unknown_composite_falls_back(self):
        assert get_shape(range(3)) == "Object"
        assert get_shape(Ellipsis) == "Object"


class TestRecords:
    """dicts, dataclasses and instances map keys to shapes."""

    def test_simple_record(self):
        assert get_shape({"a": 1, "b": "test"}) == {"a": "number", "b": "string"}

    def test_nested_record(self):
        data = {"user": {"name": "John", "age": 30, "address": {"city": "NYC", "zip": 10001}}}
        assert get_shape(data) == {
            "user": {
                "name": "string",
                "age": "number",
                "address": {"city": "string", "zip": "number"},
            }
        }

    def test_empty_record(self):
        assert get_shape({}) == {}

    def test_record_with_list(self):
        assert get_shape({"items": [1, 2, 3]}) == {"items": ["number", "number", "number"]}

    def test_ml_output(self, ml_output):
        assert get_shape(ml_output) == {
            "predictions": "ndarray[float32] [Length: 1000]",
            "labels": ["string", "string", "string"],
            "confidence": "number",
            "metadata": {"model": "string", "version": "string"},
        }

    def test_key_order_is_preserved(self):
        shape = get_shape({"z": 1, "a": 2, "m": 3})
        assert list(shape) == ["z", "a", "m"]

    def test_non_string_keys_are_skipped(self):
        marker = Sentinel("key")
        assert get_shape({0: "a", marker: "b", "normal": "key"}) == {"normal": "string"}

    def test_dict_subclass_is_a_record(self):
        assert get_shape(OrderedDict(a=1)) == {"a": "number"}

    def test_class_instance(self):
        assert get_shape(Node(prop=42)) == {"prop": "number"}

    def test_dataclass_instance(self):
        assert get_shape(Point(x=1, y=2.0)) == {"x": "number", "y": "number"}

    def test_mixed_sequence_of_records_and_lists(self):
        data = [{"a": 1}, [1, 2], "string", 42]
        assert get_shape(data) == [{"a": "number"}, ["number", "number"], "string", "number"]

    def test_enum_member_shapes_as_its_value(self):
        assert get_shape(Color.RED) == "string"
        assert get_shape({"origin": Color.ORIGIN}) == {"origin": ["number", "number"]}

    def test_int_enum_is_a_number(self):
        assert get_shape([Priority.LOW]) == ["number"]


class TestCircularReferences:
    """Composites already seen in the call resolve to [Circular]."""

    def test_self_referencing_record(self, self_referencing):
        assert get_shape(self_referencing) == {"a": "number", "self": "[Circular]"}

    def test_circular_list(self):
        arr = [1, 2]
        arr.append(arr)
        assert get_shape(arr) == ["number", "number", "[Circular]"]

    def test_nested_circular_reference(self):
        data = {"a": {"b": {"c": None}}}
        data["a"]["b"]["c"] = data
        assert get_shape(data) == {"a": {"b": {"c": "[Circular]"}}}

    def test_shared_sibling_reported_once_by_default(self):
        shared = {"v": 1}
        assert get_shape({"a": shared, "b": shared}) == {
            "a": {"v": "number"},
            "b": "[Circular]",
        }

    def test_path_scope_expands_shared_siblings(self):
        shared = {"v": 1}
        shape = get_shape({"a": shared, "b": shared}, cycle_scope="path")
        assert shape == {"a": {"v": "number"}, "b": {"v": "number"}}

    def test_path_scope_still_detects_true_cycles(self, self_referencing):
        assert get_shape(self_referencing, cycle_scope="path") == {
            "a": "number",
            "self": "[Circular]",
        }

    def test_value_at_max_depth_is_still_marked(self):
        shared = {"v": 1}
        data = {"deep": {"x": shared}, "b": shared}
        assert get_shape(data, max_depth=2) == {
            "deep": {"x": "[Max Depth]"},
            "b": "[Circular]",
        }

    def test_over_limit_summary_counts_repeats(self):
        item = {"v": 1}
        assert get_shape([item, item, item], array_limit=2) == (
            "Array<Object | [Circular]> [Length: 3]"
        )


class TestMaxDepth:
    """Composites at max_depth collapse regardless of kind."""

    def test_default_max_depth(self, deep_record):
        assert get_shape(deep_record) == {"l1": {"l2": {"l3": {"l4": {"l5": "[Max Depth]"}}}}}

    def test_custom_max_depth(self):
        data = {"l1": {"l2": {"l3": "value"}}}
        assert get_shape(data, max_depth=2) == {"l1": {"l2": "[Max Depth]"}}

    def test_max_depth_zero(self):
        assert get_shape({"a": 1}, max_depth=0) == "[Max Depth]"

    def test_special_composites_collapse_at_the_boundary(self):
        data = {
            "when": datetime.date(2024, 1, 1),
            "lookup": MappingProxyType({}),
            "buffer": np.zeros(3),
        }
        assert get_shape(data, max_depth=1) == {
            "when": "[Max Depth]",
            "lookup": "[Max Depth]",
            "buffer": "[Max Depth]",
        }

    def test_primitives_never_collapse(self):
        assert get_shape({"a": 1, "f": len}, max_depth=1) == {"a": "number", "f": "Function(len)"}

    def test_combined_with_array_limit(self):
        data = {
            "items": [
                {"deep": {"nested": {"value": 1}}},
                {"deep": {"nested": {"value": 2}}},
            ]
        }
        shape = get_shape(data, {"maxDepth": 3, "arrayLimit": 10})
        assert shape == {"items": [{"deep": "[Max Depth]"}, {"deep": "[Max Depth]"}]}


class TestOptions:
    """Option spellings and validation at the entry point."""

    def test_custom_array_limit(self):
        assert get_shape([1, 2, 3, 4, 5, 6], array_limit=5) == "Array<number> [Length: 6]"

    def test_array_limit_zero(self):
        assert get_shape([1, 2, 3], array_limit=0) == "Array<number> [Length: 3]"
        assert get_shape([], array_limit=0) == "Array [0]"

    def test_options_object(self):
        options = ShapeOptions(array_limit=2)
        assert get_shape([1, 2, 3], options) == "Array<number> [Length: 3]"

    def test_overrides_beat_options(self):
        options = ShapeOptions(array_limit=2)
        assert get_shape([1, 2, 3], options, array_limit=3) == ["number"] * 3

    @pytest.mark.parametrize("bad", [-1, 1.5, True, "5"])
    def test_invalid_max_depth_rejected(self, bad):
        with pytest.raises(InvalidOptionError):
            get_shape({}, max_depth=bad)

    def test_unknown_option_rejected(self):
        with pytest.raises(InvalidOptionError, match="depth"):
            get_shape({}, {"depth": 3})


class TestCallContract:
    """get_shape reads its input and keeps nothing alive afterwards."""

    def test_input_is_not_mutated(self):
        data = {"a": [1, {"b": (2, 3)}], "c": {"d": None}}
        before = copy.deepcopy(data)
        get_shape(data)
        assert data == before

    def test_visited_objects_are_released(self):
        node = Node(value=1)
        ref = weakref.ref(node)
        get_shape({"n": node, "again": node})
        del node
        gc.collect()
        assert ref() is None

    def test_calls_are_independent(self, self_referencing):
        first = get_shape(self_referencing)
        second = get_shape(self_referencing)
        assert first == second == {"a": "number", "self": "[Circular]"}


class TestPerformance:
    """Large inputs stay linear."""

    @pytest.mark.slow
    def test_large_list_quickly(self):
        import time

        start = time.perf_counter()
        get_shape([42] * 50000)
        assert time.perf_counter() - start < 1.0

    @pytest.mark.slow
    def test_large_ndarray_is_constant_time(self):
        import time

        start = time.perf_counter()
        get_shape(np.zeros(10_000_000, dtype=np.float32))
        assert time.perf_counter() - start < 0.1

    def test_deeply_nested_record(self):
        deep = {"value": 1}
        for _ in range(100):
            deep = {"nested": deep}
        shape = get_shape(deep, max_depth=10)
        for _ in range(10):
            shape = shape["nested"]
        assert shape == "[Max Depth]"

    def test_nested_records_beyond_recursion_limit(self):
        depth = sys.getrecursionlimit() * 2
        deep = {"value": 1}
        for _ in range(depth):
            deep = {"nested": deep}

        shape = get_shape(deep, max_depth=depth + 1)
        for _ in range(depth):
            shape = shape["nested"]
        assert shape == {"value": "number"}

    def test_nested_lists_beyond_recursion_limit(self):
        depth = sys.getrecursionlimit() * 2
        deep = []
        for _ in range(depth):
            deep = [deep]

        shape = get_shape(deep, max_depth=depth)
        for _ in range(depth):
            assert isinstance(shape, list) and len(shape) == 1
            shape = shape[0]
        assert shape == "[Max Depth]"

    def test_deep_cycle_is_still_detected(self):
        depth = sys.getrecursionlimit() * 2
        root = {"nested": None}
        node = root
        for _ in range(depth):
            node["nested"] = {"nested": None}
            node = node["nested"]
        node["nested"] = root

        shape = get_shape(root, max_depth=depth + 10)
        for _ in range(depth + 1):
            shape = shape["nested"]
        assert shape == "[Circular]"
