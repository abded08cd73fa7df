"""Tests for pyvalidation.cache.keys module."""

from __future__ import annotations

import math
from dataclasses import dataclass

import pytest

from pyvalidation.cache.keys import ValueKind, classify_value, derive_key, serialize_value
from pyvalidation.core.types import UNDEFINED
from pyvalidation.utils.error_handling import SerializationError


@dataclass
class Point:
    x: int
    y: int


class TestClassifyValue:
    """Tests for classify_value."""

    def test_bool_is_not_a_number(self):
        assert classify_value(True) is ValueKind.BOOL
        assert classify_value(0) is ValueKind.NUMBER

    def test_missing_kinds(self):
        assert classify_value(None) is ValueKind.NULL
        assert classify_value(UNDEFINED) is ValueKind.UNDEFINED

    def test_containers(self):
        assert classify_value([1]) is ValueKind.ARRAY
        assert classify_value((1,)) is ValueKind.ARRAY
        assert classify_value({"a": 1}) is ValueKind.OBJECT
        assert classify_value(Point(1, 2)) is ValueKind.OBJECT

    def test_dataclass_type_is_not_an_object(self):
        assert classify_value(Point) is ValueKind.OTHER


class TestSerializeValue:
    """Tests for the type-tagged value rendering."""

    def test_scalars(self):
        assert serialize_value("abc") == "s:abc"
        assert serialize_value(5) == "n:5"
        assert serialize_value(True) == "b:true"
        assert serialize_value(False) == "b:false"
        assert serialize_value(None) == "null"
        assert serialize_value(UNDEFINED) == "undefined"

    def test_numbers(self):
        assert serialize_value(1.0) == "n:1.0"
        assert serialize_value(1.5) == "n:1.5"
        assert serialize_value(math.nan) == "n:NaN"
        assert serialize_value(math.inf) == "n:Infinity"
        assert serialize_value(-math.inf) == "n:-Infinity"

    def test_large_top_level_integer(self):
        assert serialize_value(2**80) == f"n:{2**80}"

    def test_array(self):
        assert serialize_value(["a", "b"]) == 'a:["a","b"]'
        assert serialize_value(("a", "b")) == serialize_value(["a", "b"])

    def test_object_keys_are_sorted(self):
        assert serialize_value({"b": 1, "a": 2}) == 'o:{"a":2,"b":1}'

    def test_dataclass_instance(self):
        rendered = serialize_value(Point(1, 2))
        assert rendered.startswith("o:")
        assert '"x":1' in rendered

    def test_cyclic_value_raises(self):
        cyclic: list = []
        cyclic.append(cyclic)
        with pytest.raises(SerializationError) as exc_info:
            serialize_value(cyclic, "IsNotEmpty")
        assert exc_info.value.validator_name == "IsNotEmpty"

    def test_oversized_integer_in_container_raises(self):
        with pytest.raises(SerializationError):
            serialize_value([2**80])


class TestDeriveKey:
    """Tests for derive_key."""

    def test_format_without_args(self):
        assert derive_key("IsMobile", "13812345678") == "IsMobile:s:13812345678:"

    def test_format_with_args(self):
        assert derive_key("Gt", 5, [3]) == "Gt:n:5:[3]"
        assert derive_key("IsIn", ["a", "b"], [["a", "b", "c"]]) == 'IsIn:a:["a","b"]:[["a","b","c"]]'

    def test_number_and_string_do_not_collide(self):
        assert derive_key("Equals", 5, [5]) != derive_key("Equals", "5", [5])
        assert derive_key("Equals", 5, [5]) != derive_key("Equals", 5, ["5"])

    def test_bool_and_number_do_not_collide(self):
        assert derive_key("IsNotEmpty", True) != derive_key("IsNotEmpty", 1)

    def test_int_and_float_do_not_collide(self):
        assert derive_key("V", 5) == "V:n:5:"
        assert derive_key("V", 5.0) == "V:n:5.0:"
        assert derive_key("V", [5]) != derive_key("V", [5.0])

    def test_validator_name_separates_keys(self):
        assert derive_key("IsMobile", "1") != derive_key("IsZipCode", "1")

    def test_mapping_order_does_not_matter(self):
        assert derive_key("X", {"a": 1, "b": 2}) == derive_key("X", {"b": 2, "a": 1})
        assert derive_key("X", 1, [{"a": 1, "b": 2}]) == derive_key("X", 1, [{"b": 2, "a": 1}])

    def test_set_arguments_are_ordered(self):
        assert derive_key("IsIn", 1, [{3, 1, 2}]) == "IsIn:n:1:[[1,2,3]]"

    def test_undefined_argument(self):
        assert derive_key("X", 1, [UNDEFINED]) == "X:n:1:[null]"

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            derive_key("", "value")

    def test_cyclic_argument_raises(self):
        cyclic: dict = {}
        cyclic["self"] = cyclic
        with pytest.raises(SerializationError):
            derive_key("IsIn", 1, [cyclic])
