"""
Runtime parameter type checking and conversion.

``type_`` may be a Python type or typing construct (``int``, ``list[str]``,
``int | None``, an ``Enum`` subclass) or one of the type names used in
request schemas: ``number``, ``integer``, ``string``, ``boolean``,
``array``, ``tuple``, ``object``, ``enum``, ``null``, ``undefined``,
``bigint``. Names are case-insensitive; anything unrecognised accepts every
value unchanged.

Conversion never raises: when a value cannot be converted it is returned
as is, except that non-numeric input to a number type becomes ``nan``.
"""

from __future__ import annotations

import enum
import math
import types
import typing
from collections.abc import Mapping
from typing import Any

from .types import UNDEFINED, Undefined

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", ""})

_PY_TYPE_NAMES: dict[Any, str] = {
    int: "integer",
    float: "number",
    str: "string",
    bool: "boolean",
    list: "array",
    tuple: "tuple",
    set: "array",
    dict: "object",
    type(None): "null",
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _unwrap(type_: Any) -> Any:
    if typing.get_origin(type_) is typing.Annotated:
        return typing.get_args(type_)[0]
    return type_


def _union_members(type_: Any) -> tuple[Any, ...] | None:
    origin = typing.get_origin(type_)
    if origin is typing.Union or origin is types.UnionType:
        return typing.get_args(type_)
    return None


def type_name(type_: Any) -> str | None:
    """Canonical name for ``type_``, or ``None`` when it is not recognised."""
    type_ = _unwrap(type_)
    if isinstance(type_, str):
        name = type_.strip().lower()
        return "integer" if name == "int" else name
    if isinstance(type_, type) and issubclass(type_, enum.Enum):
        return "enum"
    origin = typing.get_origin(type_)
    if origin is not None and origin in _PY_TYPE_NAMES:
        return _PY_TYPE_NAMES[origin]
    return _PY_TYPE_NAMES.get(type_)


def check_params_type(value: Any, type_: Any) -> bool:
    """Check that ``value`` has the runtime type described by ``type_``."""
    type_ = _unwrap(type_)
    members = _union_members(type_)
    if members is not None:
        return any(check_params_type(value, member) for member in members)

    if isinstance(type_, type) and issubclass(type_, enum.Enum):
        return isinstance(value, type_) or any(value == m.value for m in type_)

    name = type_name(type_)
    if name in ("number", "float"):
        return _is_number(value)
    if name in ("integer", "bigint"):
        return isinstance(value, int) and not isinstance(value, bool)
    if name == "string":
        return isinstance(value, str)
    if name == "boolean":
        return isinstance(value, bool)
    if name in ("array", "tuple"):
        return isinstance(value, (list, tuple, set, frozenset))
    if name == "object":
        return isinstance(value, Mapping)
    if name == "enum":
        return isinstance(value, (enum.Enum, str, int))
    if name == "null":
        return value is None
    if name == "undefined":
        return value is None or isinstance(value, Undefined)
    return True


def _to_number(value: Any) -> float | int:
    if _is_number(value):
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return math.nan
    if value is None:
        return 0
    return math.nan


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return bool(value)


def convert_params_type(value: Any, type_: Any) -> Any:
    """Convert ``value`` to ``type_`` where possible; otherwise return it unchanged."""
    type_ = _unwrap(type_)
    members = _union_members(type_)
    if members is not None:
        if value is None or any(check_params_type(value, m) for m in members):
            return value
        concrete = [m for m in members if m is not type(None)]
        return convert_params_type(value, concrete[0]) if concrete else value

    try:
        if isinstance(type_, type) and issubclass(type_, enum.Enum):
            return value if isinstance(value, type_) else type_(value)

        name = type_name(type_)
        if name in ("number", "float"):
            number = _to_number(value)
            return float(number) if type_ is float else number
        if name in ("integer", "bigint"):
            number = _to_number(value)
            if isinstance(number, float) and number.is_integer():
                return int(number)
            return number
        if name == "string":
            return value if isinstance(value, str) else str(value)
        if name == "boolean":
            return _to_bool(value)
        if name == "array":
            if isinstance(value, list):
                return value
            if isinstance(value, (tuple, set, frozenset)):
                return list(value)
            return [value]
        if name == "tuple":
            return tuple(value) if isinstance(value, (list, tuple)) else (value,)
        if name == "null":
            return None
        if name == "undefined":
            return UNDEFINED
        return value
    except (TypeError, ValueError, OverflowError):
        return value
