"""
Built-in DTO rules and field markers.

Every value rule delegates to the cached predicate of the same name in
``FUNCTION_VALIDATORS``, so field validation shares the validation cache
with :func:`validator_funcs`.

Markers:
    Expose: Copy the field during conversion even without constraints
    IsDefined: The field must be present and not ``None``, always checked
    Valid: Rule for a ``@validated`` function parameter
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..validators.functions import FUNCTION_VALIDATORS
from .factory import create_parameterized_rule, create_simple_rule, create_validation_rule

# Locale rules
IsCnName = create_simple_rule("IsCnName", FUNCTION_VALIDATORS["IsCnName"])
IsIdNumber = create_simple_rule("IsIdNumber", FUNCTION_VALIDATORS["IsIdNumber"])
IsZipCode = create_simple_rule("IsZipCode", FUNCTION_VALIDATORS["IsZipCode"])
IsMobile = create_simple_rule("IsMobile", FUNCTION_VALIDATORS["IsMobile"])
IsPlateNumber = create_simple_rule("IsPlateNumber", FUNCTION_VALIDATORS["IsPlateNumber"])

# Presence and type
IsNotEmpty = create_simple_rule("IsNotEmpty", FUNCTION_VALIDATORS["IsNotEmpty"])
IsDate = create_simple_rule("IsDate", FUNCTION_VALIDATORS["IsDate"])

# Comparison and membership
Equals = create_parameterized_rule(
    "Equals", FUNCTION_VALIDATORS["Equals"], context_keys=("comparison",)
)
NotEquals = create_parameterized_rule(
    "NotEquals", FUNCTION_VALIDATORS["NotEquals"], context_keys=("comparison",)
)
Contains = create_parameterized_rule(
    "Contains", FUNCTION_VALIDATORS["Contains"], context_keys=("seed",)
)
IsIn = create_parameterized_rule(
    "IsIn", FUNCTION_VALIDATORS["IsIn"], context_keys=("possibleValues",)
)
IsNotIn = create_parameterized_rule(
    "IsNotIn", FUNCTION_VALIDATORS["IsNotIn"], context_keys=("possibleValues",)
)
Gt = create_parameterized_rule("Gt", FUNCTION_VALIDATORS["Gt"], context_keys=("min",))
Gte = create_parameterized_rule("Gte", FUNCTION_VALIDATORS["Gte"], context_keys=("min",))
Lt = create_parameterized_rule("Lt", FUNCTION_VALIDATORS["Lt"], context_keys=("max",))
Lte = create_parameterized_rule("Lte", FUNCTION_VALIDATORS["Lte"], context_keys=("max",))
Min = create_parameterized_rule("Min", FUNCTION_VALIDATORS["Min"], context_keys=("min",))
Max = create_parameterized_rule("Max", FUNCTION_VALIDATORS["Max"], context_keys=("max",))
Length = create_parameterized_rule(
    "Length", FUNCTION_VALIDATORS["Length"], context_keys=("min", "max")
)

# Library-backed formats; arguments are optional except for IsHash
IsEmail = create_validation_rule("IsEmail", FUNCTION_VALIDATORS["IsEmail"])
IsIP = create_validation_rule("IsIP", FUNCTION_VALIDATORS["IsIP"])
IsPhoneNumber = create_validation_rule("IsPhoneNumber", FUNCTION_VALIDATORS["IsPhoneNumber"])
IsUrl = create_validation_rule("IsUrl", FUNCTION_VALIDATORS["IsUrl"])
IsHash = create_parameterized_rule(
    "IsHash", FUNCTION_VALIDATORS["IsHash"], context_keys=("algorithm",)
)


@dataclass(frozen=True)
class ExposeMarker:
    pass


@dataclass(frozen=True)
class DefinedMarker:
    message: str | None = None


@dataclass(frozen=True, eq=False)
class ValidMarker:
    rule: Any
    message: str | None = None


def Expose() -> ExposeMarker:
    return ExposeMarker()


def IsDefined(message: str | None = None) -> DefinedMarker:
    return DefinedMarker(message)


def Valid(rule: Any, message: str | None = None) -> ValidMarker:
    """
    Parameter rule for ``@validated`` functions.

    ``rule`` is anything :func:`validator_funcs` accepts: a registry name,
    a comma separated list of names, a ``(name, *args)`` tuple, a predicate,
    or a list of these.
    """
    return ValidMarker(rule, message)
