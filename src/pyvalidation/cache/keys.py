"""
Cache key derivation.

A validation result is memoized under a string built from the validator's
name, a type-tagged rendering of the value and a JSON rendering of any extra
arguments::

    IsMobile:s:13812345678:
    Gt:n:5:[3]
    IsIn:a:["a","b"]:[["a","b","c"]]

Values are first classified into a closed set of kinds (:class:`ValueKind`)
so that every kind is rendered by an explicit branch. Tags keep values of
different types apart (``5`` and ``"5"`` never share a key); structured
values are rendered with orjson using sorted mapping keys, so two mappings
with the same items share a key regardless of insertion order.

Values that cannot be rendered (reference cycles, integers beyond 64 bits
inside containers) raise :class:`SerializationError`; they are never folded
into a shared placeholder key.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any

import orjson

from ..core.types import Undefined
from ..utils.error_handling import SerializationError

_JSON_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS


class ValueKind(str, Enum):
    """Kinds of values distinguished by the key format."""

    NULL = "null"
    UNDEFINED = "undefined"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    OTHER = "other"


def classify_value(value: Any) -> ValueKind:
    """Classify ``value`` for key rendering."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, Undefined):
        return ValueKind.UNDEFINED
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return ValueKind.OBJECT
    return ValueKind.OTHER


def _format_number(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Undefined):
        return None
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, Set):
        return sorted(obj, key=repr)
    return str(obj)


def _to_json(obj: Any, validator_name: str) -> str:
    try:
        return orjson.dumps(obj, default=_json_default, option=_JSON_OPTIONS).decode()
    except (orjson.JSONEncodeError, RecursionError) as exc:
        raise SerializationError(validator_name, str(exc)) from exc


def serialize_value(value: Any, validator_name: str = "") -> str:
    """
    Render ``value`` as a type-tagged string.

    Args:
        value: Any value
        validator_name: Used only to label a :class:`SerializationError`

    Raises:
        SerializationError: If a structured value cannot be rendered
    """
    kind = classify_value(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.UNDEFINED:
        return "undefined"
    if kind is ValueKind.BOOL:
        return "b:true" if value else "b:false"
    if kind is ValueKind.NUMBER:
        return f"n:{_format_number(value)}"
    if kind is ValueKind.STRING:
        return f"s:{value}"
    if kind is ValueKind.ARRAY:
        return f"a:{_to_json(list(value), validator_name)}"
    if kind is ValueKind.OBJECT:
        return f"o:{_to_json(value, validator_name)}"
    return str(value)


def derive_key(validator_name: str, value: Any, extra_args: Sequence[Any] = ()) -> str:
    """
    Build the cache key for one validator invocation.

    Args:
        validator_name: Name of the validator, must be non-empty
        value: The value being validated
        extra_args: Additional positional arguments, in order

    Returns:
        ``"<name>:<tagged value>:<json args or empty>"``

    Raises:
        ValueError: If ``validator_name`` is empty
        SerializationError: If the value or arguments cannot be rendered
    """
    if not validator_name:
        raise ValueError("validator_name must be a non-empty string")
    args_part = _to_json(list(extra_args), validator_name) if extra_args else ""
    return f"{validator_name}:{serialize_value(value, validator_name)}:{args_part}"
